"""Incremental tree filter.

Filtering is plain case-insensitive substring containment against each item's
comma-joined keyword string. There is no ranking and no tokenization: the
whole query must appear contiguously.
"""

from __future__ import annotations

import logging
from typing import Callable

from .types import Category, Leaf, Node

logger = logging.getLogger(__name__)


def _prune(node: Node, needle: str) -> Node | None:
    if isinstance(node, Leaf):
        items = tuple(item for item in node.items if needle in item.search_text)
        if not items:
            return None
        if len(items) == len(node.items):
            return node
        return Leaf(name=node.name, items=items, path=node.path)

    children = tuple(
        pruned for pruned in (_prune(child, needle) for child in node.children) if pruned is not None
    )
    if not children:
        return None
    return Category(name=node.name, children=children)


def filter_tree(root: Node, query: str) -> Node | None:
    """Return the part of `root` whose items match `query`.

    An empty or whitespace-only query returns `root` itself. Otherwise
    returns a new pruned tree, or None when no item matches anywhere.
    The source tree is never modified.
    """
    if not query or not query.strip():
        return root

    needle = query.lower()
    pruned = _prune(root, needle)
    if pruned is None:
        logger.debug(f"No items match {query!r}")
    return pruned


def make_filter(root: Node) -> Callable[[str], Node | None]:
    """Bind `root` and return a `query -> pruned tree` function."""

    def _filter(query: str = "") -> Node | None:
        return filter_tree(root, query)

    return _filter
