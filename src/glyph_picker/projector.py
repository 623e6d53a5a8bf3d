"""Flatten a pruned tree into navigable cells."""

from __future__ import annotations

from .types import Cell, Leaf, Node, Projection, RowGroup


def project(tree: Node | None) -> Projection:
    """Derive the ordered cell sequence and leaf row groups for `tree`.

    `None` (nothing matched the filter) yields an empty projection flagged
    `empty` so the renderer can show its no-results state.
    """
    if tree is None:
        return Projection(empty=True)

    cells: list[Cell] = []
    rows: list[RowGroup] = []
    pending: list[str] = []

    def _walk(node: Node) -> None:
        if isinstance(node, Leaf):
            start = len(cells)
            headers = tuple(pending) + (node.name,)
            pending.clear()
            for column, item in enumerate(node.items):
                cells.append(
                    Cell(
                        item=item,
                        row_id=node.path,
                        column=column,
                        index=start + column,
                        headers=headers if column == 0 else (),
                    )
                )
            rows.append(RowGroup(row_id=node.path, label=node.name, start=start, stop=len(cells)))
            return

        if node.name:
            pending.append(node.name)
        for child in node.children:
            _walk(child)
        # A category that contributed no leaf leaves nothing to label
        if node.name and pending and pending[-1] == node.name:
            pending.pop()

    _walk(tree)
    return Projection(cells=tuple(cells), rows=tuple(rows))
