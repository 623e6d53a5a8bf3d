"""Category tree construction.

Turns the nested category mapping from configuration into an immutable tree
of Category/Leaf/Item nodes. Leaf strings are split into extended grapheme
clusters so multi-codepoint emoji (ZWJ sequences, skin tones, flags) stay
one item.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

import regex

from .types import Category, Item, Leaf, Node

logger = logging.getLogger(__name__)

_GRAPHEME_RE = regex.compile(r"\X")


class ConfigError(ValueError):
    """Raised when category data cannot be turned into a tree."""

    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.path = path
        if path:
            message = f"{' > '.join(path)}: {message}"
        super().__init__(message)


def split_glyphs(text: str) -> list[str]:
    """Split a leaf string into grapheme clusters, dropping whitespace."""
    return [unit for unit in _GRAPHEME_RE.findall(text) if not unit.isspace()]


def _make_keywords(glyph: str, path: tuple[str, ...], keywords: Mapping[str, str]) -> tuple[str, ...]:
    declared = keywords.get(glyph, "")
    return tuple(part.lower() for part in (declared, *path))


def _build_children(
    data: Mapping,
    path: tuple[str, ...],
    keywords: Mapping[str, str],
) -> tuple[Node, ...]:
    entries = [(str(key), value) for key, value in data.items() if not str(key).startswith("_")]

    has_branches = any(isinstance(value, Mapping) for _, value in entries)
    has_leaves = any(isinstance(value, str) for _, value in entries)
    if has_branches and has_leaves:
        raise ConfigError("children mix subcategories and emoji strings", path)

    children: list[Node] = []
    for name, value in entries:
        child_path = (*path, name)
        if isinstance(value, Mapping):
            grandchildren = _build_children(value, child_path, keywords)
            if grandchildren:
                children.append(Category(name=name, children=grandchildren))
            else:
                logger.debug(f"Dropping empty category {' > '.join(child_path)}")
        elif isinstance(value, str):
            items = tuple(
                Item(glyph=glyph, keywords=_make_keywords(glyph, child_path, keywords))
                for glyph in split_glyphs(value)
            )
            if items:
                children.append(Leaf(name=name, items=items, path=child_path))
            else:
                logger.debug(f"Dropping empty leaf {' > '.join(child_path)}")
        else:
            raise ConfigError(
                f"expected a mapping or an emoji string, got {type(value).__name__}",
                child_path,
            )
    return tuple(children)


def build(raw_config: Mapping, keywords: Mapping[str, str] | None = None) -> Category:
    """Build the root category from nested category data.

    Args:
        raw_config: Mapping of category name to a nested mapping or a leaf
            string of glyphs. Keys starting with "_" are ignored.
        keywords: Optional mapping of glyph to human-readable name.

    Returns:
        Root Category (empty name) owning the top-level nodes.

    Raises:
        ConfigError: If a level mixes branches and leaf strings, or holds
            anything that is neither.
    """
    if not isinstance(raw_config, Mapping):
        raise ConfigError(f"expected a mapping of categories, got {type(raw_config).__name__}")

    root = Category(name="", children=_build_children(raw_config, (), keywords or {}))
    leaves = sum(1 for _ in iter_leaves(root))
    items = sum(1 for _ in iter_items(root))
    logger.debug(f"Built tree: {leaves} leaves, {items} items")
    return root


def iter_leaves(node: Node | None) -> Iterator[Leaf]:
    """Yield leaves depth-first in display order."""
    if node is None:
        return
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def iter_items(node: Node | None) -> Iterator[Item]:
    """Yield every item depth-first in display order."""
    for leaf in iter_leaves(node):
        yield from leaf.items
