"""Layout strategies that turn a projection into visual rows.

The navigator only needs to know which cell indices share a visual row.
Table layout gives every leaf one row; grid layout wraps each leaf at a
column count estimated from the width the renderer reports.
"""

from __future__ import annotations

from rich.cells import cell_len

from .types import LayoutMode, Projection

DEFAULT_CELL_WIDTH = 3  # two-column glyph plus one space
MIN_COLUMNS = 1


def measure_cell_width(projection: Projection, padding: int = 1) -> int:
    """Widest glyph in `projection` plus padding, in terminal cells."""
    widest = max((cell_len(cell.item.glyph) for cell in projection.cells), default=2)
    return max(1, widest) + padding


def estimate_columns(width: int | None, cell_width: int = DEFAULT_CELL_WIDTH) -> int:
    """Estimate how many cells fit side by side in `width` columns."""
    if not width or width <= 0:
        return MIN_COLUMNS
    return max(MIN_COLUMNS, width // max(1, cell_width))


class RowTableLayout:
    """One visual row per leaf."""

    mode = LayoutMode.TABLE

    def rows(self, projection: Projection) -> list[range]:
        return [range(group.start, group.stop) for group in projection.rows]


class WrappingGridLayout:
    """Each leaf's cells wrap every `columns` cells."""

    mode = LayoutMode.GRID

    def __init__(self, columns: int = MIN_COLUMNS):
        self.columns = max(MIN_COLUMNS, columns)

    def rows(self, projection: Projection) -> list[range]:
        visual: list[range] = []
        for group in projection.rows:
            for start in range(group.start, group.stop, self.columns):
                visual.append(range(start, min(start + self.columns, group.stop)))
        return visual

    def __repr__(self) -> str:
        return f"WrappingGridLayout(columns={self.columns})"


def make_layout(
    mode: LayoutMode | str,
    width: int | None = None,
    cell_width: int = DEFAULT_CELL_WIDTH,
) -> RowTableLayout | WrappingGridLayout:
    """Create the layout strategy for `mode`."""
    if LayoutMode(mode) == LayoutMode.GRID:
        return WrappingGridLayout(estimate_columns(width, cell_width))
    return RowTableLayout()
