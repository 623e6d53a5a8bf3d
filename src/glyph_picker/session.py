"""Picker session: query handling, focus resolution and the commit protocol.

A session owns everything one picker instance needs: the immutable tree, the
current pruned view, the navigation state and its subscribers. Input is routed
to it by the host (`handle_key`, `set_query`, `activate`); it never listens
for events on its own.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Any, Callable

from .filtering import filter_tree
from .layout import DEFAULT_CELL_WIDTH, make_layout, measure_cell_width
from .navigation import NavigationState, Navigator
from .projector import project
from .types import (
    Category,
    Cell,
    FocusTarget,
    Item,
    Key,
    KeyEvent,
    LayoutMode,
    Node,
    PickerEvent,
    Projection,
    Selection,
)

logger = logging.getLogger(__name__)

TYPE_AHEAD_TIMEOUT = 0.5


class TypeAheadBuffer:
    """Characters typed in quick succession.

    Purely informational: the buffer is reset after `timeout` seconds of
    inactivity or explicitly, and the query never depends on it. Nothing in
    the package reads it back; it is exposed as `PickerSession.type_ahead`
    for hosts that want a transient "typed so far" hint.
    """

    def __init__(self, timeout: float = TYPE_AHEAD_TIMEOUT, clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._text = ""
        self._last_push: float | None = None

    @property
    def text(self) -> str:
        if self._expired():
            return ""
        return self._text

    def _expired(self) -> bool:
        return self._last_push is not None and self._clock() - self._last_push > self.timeout

    def push(self, char: str) -> str:
        if self._expired():
            self._text = ""
        self._text += char
        self._last_push = self._clock()
        return self._text

    def reset(self) -> None:
        self._text = ""
        self._last_push = None


class PickerSession:
    """One picker instance.

    Args:
        tree: Root category built by `tree.build()`.
        layout_mode: Table (one row per leaf) or wrapping grid navigation.
        layout_width: Available width reported by the renderer (grid mode).
        cell_width: Width of one grid cell; measured from the glyphs when None.
        clock: Time source for the type-ahead buffer.

    Example:
        session = PickerSession(build(config, keywords))
        session.subscribe(PickerEvent.COMMIT, lambda sel: insert(sel.glyph))
        session.open()
        session.handle_key(KeyEvent.char_key("g"))
    """

    def __init__(
        self,
        tree: Category,
        layout_mode: LayoutMode | str = LayoutMode.TABLE,
        layout_width: int | None = None,
        cell_width: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.tree = tree
        self.layout_mode = LayoutMode(layout_mode)
        self.state = NavigationState()
        self.type_ahead = TypeAheadBuffer(clock=clock)
        self.filtered: Node | None = tree
        self._subscribers: dict[PickerEvent, list[Callable[..., Any]]] = defaultdict(list)

        full_projection = project(tree)
        self.cell_width = cell_width or (
            measure_cell_width(full_projection) if full_projection else DEFAULT_CELL_WIDTH
        )
        self.layout_width = layout_width
        self.navigator = Navigator(
            self.state,
            full_projection,
            make_layout(self.layout_mode, layout_width, self.cell_width),
        )
        self.navigator.reset()

    # ── subscriptions ─────────────────────────────────────────────────

    def subscribe(self, event: PickerEvent, handler: Callable[..., Any]) -> Callable[[], None]:
        """Register `handler` for `event`; returns a function that unsubscribes it.

        COMMIT handlers receive a Selection, ABORT handlers no arguments,
        CHANGE handlers the session.
        """
        self._subscribers[event].append(handler)

        def _unsubscribe() -> None:
            if handler in self._subscribers[event]:
                self._subscribers[event].remove(handler)

        return _unsubscribe

    def _emit(self, event: PickerEvent, *args: Any) -> None:
        for handler in list(self._subscribers[event]):
            handler(*args)

    # ── read-only views ───────────────────────────────────────────────

    @property
    def projection(self) -> Projection:
        return self.navigator.projection

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def cursor(self) -> Cell | None:
        return self.state.cursor

    @property
    def focused_item(self) -> Item | None:
        return self.state.cursor.item if self.state.cursor else None

    # ── lifecycle ─────────────────────────────────────────────────────

    def open(self) -> Cell | None:
        """(Re)open the picker: full tree, cursor on the last committed glyph."""
        self.state.query = ""
        self.type_ahead.reset()
        self._refilter()
        cursor = self.navigator.reset(self._project())
        self.state.focus = FocusTarget.GRID if cursor else FocusTarget.INPUT
        self._emit(PickerEvent.CHANGE, self)
        return cursor

    def close(self) -> None:
        """Hide the picker; the query is dropped, the last committed glyph kept."""
        self.state.query = ""
        self.type_ahead.reset()
        self._refilter()
        self.navigator.reset(self._project())
        self.state.focus = FocusTarget.INPUT

    def set_layout_width(self, width: int | None) -> None:
        """Update the width reported by the renderer (affects grid navigation)."""
        self.layout_width = width
        self.navigator.set_layout(make_layout(self.layout_mode, width, self.cell_width))

    # ── query ─────────────────────────────────────────────────────────

    def _refilter(self) -> None:
        self.filtered = filter_tree(self.tree, self.state.query)

    def _project(self) -> Projection:
        return project(self.filtered)

    def set_query(self, text: str) -> Cell | None:
        """Replace the query, re-filter and re-resolve focus. Input keeps focus."""
        self.state.query = text
        self._refilter()
        cursor = self.navigator.reshape(self._project())
        self.state.focus = FocusTarget.INPUT
        logger.debug(f"Query {text!r} -> {len(self.projection)} visible items")
        return cursor

    # ── commit protocol ───────────────────────────────────────────────

    def commit(self, item: Item | None, continue_selecting: bool = False) -> Selection | None:
        """Deliver `item` to COMMIT subscribers, or signal ABORT when None.

        A terminal commit (continue_selecting=False) clears the query after the
        subscribers ran; the committed glyph becomes the next initial focus.
        """
        if item is None:
            logger.debug("Picker aborted")
            self._emit(PickerEvent.ABORT)
            return None

        self.state.last_committed_glyph = item.glyph
        selection = Selection(glyph=item.glyph, continue_selecting=continue_selecting, item=item)
        logger.debug(f"Commit {item.glyph!r} (continue={continue_selecting})")
        self._emit(PickerEvent.COMMIT, selection)

        if not continue_selecting:
            self.state.query = ""
            self.type_ahead.reset()
            self._refilter()
            self.navigator.reset(self._project())
        return selection

    def abort(self) -> None:
        self.commit(None)

    def activate(self, index: int, continue_selecting: bool = False) -> Selection | None:
        """Pointer activation of the cell at `index`."""
        cursor = self.navigator.focus_index(index)
        if cursor is None or cursor.index != index:
            return None
        return self.commit(cursor.item, continue_selecting)

    # ── keyboard ──────────────────────────────────────────────────────

    def handle_key(self, event: KeyEvent) -> bool:
        """Route one key event. Returns True if the session consumed it."""
        handled = self._dispatch(event)
        if handled:
            self._emit(PickerEvent.CHANGE, self)
        return handled

    def _dispatch(self, event: KeyEvent) -> bool:
        key = event.key
        in_grid = self.state.focus == FocusTarget.GRID

        if key == Key.CHAR or (key == Key.SPACE and not in_grid):
            char = event.char or " "
            self.type_ahead.push(char)
            self.set_query(self.state.query + char)
            return True

        if key == Key.BACKSPACE:
            self.type_ahead.reset()
            if self.state.query:
                self.set_query(self.state.query[:-1])
            else:
                self.state.focus = FocusTarget.INPUT
            return True

        if key == Key.ESCAPE:
            self.type_ahead.reset()
            if self.state.query:
                self.set_query("")
            else:
                self.commit(None)
            return True

        if key == Key.ENTER:
            if self.state.cursor is None:
                return False
            self.commit(self.state.cursor.item, continue_selecting=event.ctrl)
            return True

        if key == Key.SPACE:
            if self.state.cursor is None:
                return False
            self.commit(self.state.cursor.item, continue_selecting=True)
            return True

        return self.navigator.handle(event)
