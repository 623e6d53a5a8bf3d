"""Keyboard navigation state machine.

The navigator owns the focused cell of the current projection. Every time the
projection is replaced (a query change, a reopen) the cursor is re-resolved
by glyph, so it never points at a cell that is no longer visible.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .layout import RowTableLayout, WrappingGridLayout
from .types import Cell, FocusTarget, Key, KeyEvent, NavMode, Projection

logger = logging.getLogger(__name__)


class FocusResolutionMiss(LookupError):
    """The cursor refers to a cell absent from the current projection."""


@dataclass
class NavigationState:
    """Mutable per-session navigation state.

    Attributes:
        cursor: Focused cell of the current projection, if any.
        focus: Control holding keyboard focus (search input or grid).
        last_committed_glyph: Glyph of the last committed item; survives
            filter changes and reopening the picker.
        query: Current filter text.
    """

    cursor: Cell | None = None
    focus: FocusTarget = FocusTarget.INPUT
    last_committed_glyph: str | None = None
    query: str = ""

    @property
    def mode(self) -> NavMode:
        if self.focus == FocusTarget.GRID and self.cursor is not None:
            return NavMode.FOCUSED
        return NavMode.IDLE


class Navigator:
    """Moves the cursor over a projection according to key events.

    Args:
        state: Navigation state to mutate.
        projection: Initial projection (may be empty).
        layout: Strategy that groups cell indices into visual rows.
    """

    def __init__(
        self,
        state: NavigationState,
        projection: Projection | None = None,
        layout: RowTableLayout | WrappingGridLayout | None = None,
    ):
        self.state = state
        self.projection = projection or Projection()
        self.layout = layout or RowTableLayout()

    # ── resolution ────────────────────────────────────────────────────

    def _resolve(self, preferred: Iterable[str | None]) -> Cell | None:
        """Point the cursor at the first visible preferred glyph, else the first cell."""
        cells = self.projection.cells
        target: Cell | None = None
        for glyph in preferred:
            index = self.projection.index_of_glyph(glyph)
            if index is not None:
                target = cells[index]
                break
        if target is None and cells:
            target = cells[0]

        self.state.cursor = target
        if target is None:
            self.state.focus = FocusTarget.INPUT
        return target

    def reset(self, projection: Projection | None = None) -> Cell | None:
        """Initial resolution after (re)opening: restore the last committed glyph."""
        if projection is not None:
            self.projection = projection
        return self._resolve([self.state.last_committed_glyph])

    def reshape(self, projection: Projection) -> Cell | None:
        """Swap in a new projection, keeping the current item focused if still visible."""
        current = self.state.cursor.item.glyph if self.state.cursor else None
        self.projection = projection
        return self._resolve([current])

    def set_layout(self, layout: RowTableLayout | WrappingGridLayout) -> None:
        self.layout = layout

    def current_index(self) -> int:
        """Index of the cursor in the current projection.

        Raises:
            FocusResolutionMiss: If there is no cursor or it is stale.
        """
        cursor = self.state.cursor
        cells = self.projection.cells
        if cursor is None or not (0 <= cursor.index < len(cells)) or cells[cursor.index] != cursor:
            raise FocusResolutionMiss(cursor)
        return cursor.index

    def _checked_index(self) -> int | None:
        try:
            return self.current_index()
        except FocusResolutionMiss:
            logger.debug(f"Stale cursor {self.state.cursor!r}, re-resolving")
            glyph = self.state.cursor.item.glyph if self.state.cursor else None
            self._resolve([glyph, self.state.last_committed_glyph])
            return None

    def focus_index(self, index: int) -> Cell | None:
        """Focus the cell at `index` (pointer hover/click); out of range is ignored."""
        if 0 <= index < len(self.projection.cells):
            self.state.cursor = self.projection.cells[index]
            self.state.focus = FocusTarget.GRID
        return self.state.cursor

    # ── control boundary ──────────────────────────────────────────────

    def enter_grid(self) -> bool:
        if self.state.cursor is None and not self._resolve([self.state.last_committed_glyph]):
            return False
        self.state.focus = FocusTarget.GRID
        return True

    def exit_to_input(self) -> None:
        self.state.focus = FocusTarget.INPUT

    def toggle_focus(self) -> None:
        if self.state.focus == FocusTarget.GRID:
            self.exit_to_input()
        else:
            self.enter_grid()

    # ── movement ──────────────────────────────────────────────────────

    def _move_to(self, index: int) -> None:
        self.state.cursor = self.projection.cells[index]

    def move_horizontal(self, delta: int) -> None:
        index = self._checked_index()
        if index is None:
            return
        target = min(max(index + delta, 0), len(self.projection.cells) - 1)
        self._move_to(target)

    def move_vertical(self, delta: int) -> None:
        index = self._checked_index()
        if index is None:
            return
        rows = self.layout.rows(self.projection)
        row_pos = next(pos for pos, row in enumerate(rows) if index in row)
        column = index - rows[row_pos].start
        target_pos = row_pos + delta

        if target_pos < 0:
            self.exit_to_input()
            return
        if target_pos >= len(rows):
            return

        target_row = rows[target_pos]
        self._move_to(target_row.start + min(column, len(target_row) - 1))

    def move_page(self, delta: int) -> None:
        index = self._checked_index()
        if index is None:
            return
        groups = self.projection.rows
        target_pos = self.projection.row_of(index) + delta
        if 0 <= target_pos < len(groups):
            self._move_to(groups[target_pos].start)

    def handle(self, event: KeyEvent) -> bool:
        """Apply a navigation key. Returns True if the event was consumed."""
        key = event.key

        if key in (Key.TAB, Key.SHIFT_TAB):
            self.toggle_focus()
            return True

        if self.state.focus == FocusTarget.INPUT:
            if key == Key.DOWN:
                self.enter_grid()
                return True
            return False

        if key == Key.RIGHT:
            self.move_horizontal(+1)
        elif key == Key.LEFT:
            self.move_horizontal(-1)
        elif key == Key.DOWN:
            self.move_vertical(+1)
        elif key == Key.UP:
            self.move_vertical(-1)
        elif key == Key.PAGE_DOWN:
            self.move_page(+1)
        elif key == Key.PAGE_UP:
            self.move_page(-1)
        else:
            return False
        return True
