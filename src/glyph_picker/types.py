"""Type definitions for glyph-picker.

Shared enums and dataclasses used across the engine, the renderer and the CLI.
Tree nodes are frozen so a filtered tree can share items with its source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# ── enums ─────────────────────────────────────────────────────────────────


class LayoutMode(str, Enum):
    """How visible cells are laid out for vertical navigation."""

    TABLE = "table"  # one visual row per leaf
    GRID = "grid"  # leaf items wrap at an estimated column count

    def __str__(self) -> str:
        return self.value


class FocusTarget(str, Enum):
    """Which control currently receives keyboard input."""

    INPUT = "input"
    GRID = "grid"

    def __str__(self) -> str:
        return self.value


class NavMode(str, Enum):
    """Derived navigation state."""

    IDLE = "idle"
    FOCUSED = "focused"

    def __str__(self) -> str:
        return self.value


class Key(str, Enum):
    """Logical keys understood by the navigation state machine."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TAB = "tab"
    SHIFT_TAB = "shift_tab"
    ENTER = "enter"
    SPACE = "space"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    CHAR = "char"

    def __str__(self) -> str:
        return self.value


class PickerEvent(str, Enum):
    """Events a picker session publishes to its subscribers."""

    COMMIT = "commit"
    ABORT = "abort"
    CHANGE = "change"

    def __str__(self) -> str:
        return self.value


# ── tree model ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Item:
    """A selectable glyph with its searchable keywords.

    `keywords` is (declared name, *ancestor path), all lower-cased.
    """

    glyph: str
    keywords: tuple[str, ...] = ()

    @property
    def search_text(self) -> str:
        """Comma-joined keyword string that queries are matched against."""
        return ",".join(self.keywords)

    @property
    def name(self) -> str:
        """Declared human-readable name (empty when none was given)."""
        return self.keywords[0] if self.keywords else ""


@dataclass(frozen=True)
class Leaf:
    """A row of items under one subcategory label."""

    name: str
    items: tuple[Item, ...]
    path: tuple[str, ...] = ()


@dataclass(frozen=True)
class Category:
    """A branch grouping leaves or further categories."""

    name: str
    children: tuple["Node", ...] = ()


Node = Union[Category, Leaf]


# ── projection ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Cell:
    """A navigable position mapped to one item.

    Attributes:
        item: The item shown in this cell.
        row_id: Path of the leaf the cell belongs to.
        column: Position inside that leaf.
        index: Position in the flat cell sequence.
        headers: Category/leaf names entered at this cell (first cell of a
            leaf only). Display metadata, never a navigation stop.
    """

    item: Item
    row_id: tuple[str, ...]
    column: int
    index: int
    headers: tuple[str, ...] = ()

    @property
    def cell_id(self) -> tuple[tuple[str, ...], int]:
        return (self.row_id, self.column)

    @property
    def glyph(self) -> str:
        return self.item.glyph


@dataclass(frozen=True)
class RowGroup:
    """Contiguous run of cells that came from one leaf."""

    row_id: tuple[str, ...]
    label: str
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True)
class Projection:
    """Flat, ordered view of a pruned tree used for navigation arithmetic."""

    cells: tuple[Cell, ...] = ()
    rows: tuple[RowGroup, ...] = ()
    empty: bool = False  # True when the filter matched nothing

    def __len__(self) -> int:
        return len(self.cells)

    def __bool__(self) -> bool:
        return bool(self.cells)

    def index_of_glyph(self, glyph: str | None) -> int | None:
        """Index of the first cell showing `glyph`, or None."""
        if not glyph:
            return None
        for cell in self.cells:
            if cell.item.glyph == glyph:
                return cell.index
        return None

    def row_of(self, index: int) -> int:
        """Index into `rows` of the leaf group holding cell `index`."""
        for position, row in enumerate(self.rows):
            if row.start <= index < row.stop:
                return position
        raise IndexError(index)


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press."""

    key: Key
    char: str = ""
    ctrl: bool = False  # Ctrl/Meta held (multi-select modifier)

    @classmethod
    def char_key(cls, char: str) -> "KeyEvent":
        return cls(key=Key.CHAR, char=char)


@dataclass(frozen=True)
class Selection:
    """Payload delivered to commit subscribers."""

    glyph: str
    continue_selecting: bool = False
    item: Item | None = field(default=None, compare=False)
