"""Rich.Live-based terminal front end for a PickerSession.

The view only reflects session state: it draws the search line, the visible
rows and a status footer, feeds decoded keys back into the session and stops
on a terminal commit or an abort.

Example:
    session = PickerSession(build(config, keywords))
    picked = PickerView(session, title="Emoji").show()  # ["😀"]
"""

from __future__ import annotations

import readchar
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel

from .keys import decode_key
from .session import PickerSession
from .themes import DEFAULT_THEME, Theme
from .types import Cell, FocusTarget, LayoutMode, PickerEvent, Selection


class PickerView:
    """Interactive picker panel.

    Keyboard controls:
        - Type: filter (from anywhere)
        - Arrows: move inside the grid, Up from the first row returns to search
        - PgUp/PgDn: previous/next subcategory
        - Tab/Shift+Tab: switch between search and grid
        - Enter: pick and close, Space or Alt+Enter: pick and keep going
        - Esc: clear search, then close

    Args:
        session: The session to drive.
        console: Rich Console for output (auto-created if not provided).
        theme: Visual theme.
        title: Panel title.
    """

    def __init__(
        self,
        session: PickerSession,
        console: Console | None = None,
        theme: Theme | None = None,
        title: str = "Emoji",
    ):
        self.session = session
        self.console = console or Console(highlight=False)
        self.theme = theme or DEFAULT_THEME
        self.title = title
        self.picked: list[str] = []
        self.should_exit = False
        self.window_offset = 0

        session.subscribe(PickerEvent.COMMIT, self._on_commit)
        session.subscribe(PickerEvent.ABORT, self._on_abort)

    def _on_commit(self, selection: Selection) -> None:
        self.picked.append(selection.glyph)
        if not selection.continue_selecting:
            self.should_exit = True

    def _on_abort(self) -> None:
        self.should_exit = True

    # ── geometry ──────────────────────────────────────────────────────

    @property
    def panel_width(self) -> int:
        return self.theme.panel_width or self.console.width

    def grid_width(self) -> int:
        """Width available to glyph cells (what the session uses for grid wrapping)."""
        width = self.panel_width - 4  # borders + padding
        if self.session.layout_mode == LayoutMode.TABLE:
            width -= self.theme.label_width + 1
        return max(1, width)

    def _max_visible(self) -> int:
        calculated = self.console.height - self.theme.panel_padding
        return max(3, min(self.theme.max_visible_rows, calculated))

    def _update_window(self, cursor_line: int | None, total: int, max_visible: int) -> None:
        """Update window offset to keep the cursor line visible."""
        if total <= max_visible:
            self.window_offset = 0
            return
        if cursor_line is None:
            self.window_offset = min(self.window_offset, total - max_visible)
            return
        if cursor_line < self.window_offset:
            self.window_offset = cursor_line
        elif cursor_line >= self.window_offset + max_visible:
            self.window_offset = cursor_line - max_visible + 1

    # ── rendering ─────────────────────────────────────────────────────

    def _render_cell(self, cell: Cell) -> str:
        glyph = escape(cell.item.glyph)
        state = self.session.state
        if state.cursor is not None and cell.index == state.cursor.index:
            style = self.theme.focus_style
            if state.focus == FocusTarget.INPUT:
                style = self.theme.dim_color + " " + style
            return f"[{style}]{glyph}[/{style}]"
        return glyph

    def _search_line(self) -> str:
        state = self.session.state
        query = escape(state.query)
        if state.focus == FocusTarget.INPUT:
            style = self.theme.input_color
            return f"{self.theme.search_icon} [{style}]{query}{self.theme.cursor_icon}[/{style}]"
        if not query:
            return f"{self.theme.search_icon} [{self.theme.dim_color}]Search emojis...[/{self.theme.dim_color}]"
        return f"{self.theme.search_icon} {query}"

    def _body_lines(self) -> tuple[list[str], int | None]:
        """Build body lines and the line index holding the cursor."""
        session = self.session
        projection = session.projection
        theme = self.theme
        cells = projection.cells
        cursor = session.state.cursor
        table_mode = session.layout_mode == LayoutMode.TABLE

        lines: list[str] = []
        cursor_line: int | None = None

        for visual_row in session.navigator.layout.rows(projection):
            first = cells[visual_row.start]
            label = ""
            if first.headers:
                for header in first.headers[:-1]:
                    lines.append(f"[{theme.category_color}]{escape(header)}[/{theme.category_color}]")
                label = first.headers[-1]
                if not table_mode:
                    lines.append(f"  [{theme.leaf_color}]{escape(label)}[/{theme.leaf_color}]")

            glyphs = " ".join(self._render_cell(cells[i]) for i in visual_row)
            if table_mode:
                padded = escape(label[: theme.label_width].ljust(theme.label_width))
                glyphs = f"  [{theme.leaf_color}]{padded}[/{theme.leaf_color}] {glyphs}"
            else:
                glyphs = f"    {glyphs}"

            if cursor is not None and cursor.index in visual_row:
                cursor_line = len(lines)
            lines.append(glyphs)

        return lines, cursor_line

    def _footer(self) -> str:
        theme = self.theme
        item = self.session.focused_item
        parts: list[str] = []
        if item is not None:
            name = item.name or item.glyph
            parts.append(f"{escape(item.glyph)} {escape(name)}")
        if self.picked:
            parts.append(f"picked: {escape(''.join(self.picked))}")
        status = "  ".join(parts)
        hint = (
            f"[{theme.dim_color}]type to search • ←→↑↓ move • PgUp/PgDn section "
            f"• Enter pick • Space multi • Esc back[/{theme.dim_color}]"
        )
        return f"{status}\n{hint}" if status else hint

    def render(self) -> Panel:
        """Render the picker as a Rich Panel."""
        theme = self.theme
        projection = self.session.projection

        if projection.empty:
            body = [f"[{theme.empty_color}]No emojis found[/{theme.empty_color}]"]
            cursor_line = None
        elif not projection:
            body = [f"[{theme.empty_color}]No emojis configured[/{theme.empty_color}]"]
            cursor_line = None
        else:
            body, cursor_line = self._body_lines()

        max_visible = self._max_visible()
        self._update_window(cursor_line, len(body), max_visible)
        window_end = min(self.window_offset + max_visible, len(body))

        lines = [self._search_line(), ""]
        if self.window_offset > 0:
            lines.append(
                f"[{theme.dim_color}]  {theme.scroll_up_icon} "
                f"{self.window_offset} more above[/{theme.dim_color}]"
            )
        lines.extend(body[self.window_offset : window_end])
        below = len(body) - window_end
        if below > 0:
            lines.append(
                f"[{theme.dim_color}]  {theme.scroll_down_icon} "
                f"{below} more below[/{theme.dim_color}]"
            )

        content = "\n".join(lines)
        return Panel(
            f"{content}\n\n{self._footer()}",
            title=f"[bold]{escape(self.title)}[/bold]",
            border_style=theme.border_color,
            width=self.panel_width,
        )

    # ── loop ──────────────────────────────────────────────────────────

    def handle_raw_key(self, key: str) -> bool:
        """Decode a raw readchar key and feed it to the session."""
        event = decode_key(key)
        if event is None:
            return False
        return self.session.handle_key(event)

    def show(self, initial_query: str = "") -> list[str]:
        """Display the picker and block until a terminal pick or an abort.

        Args:
            initial_query: Search text to start with.

        Returns:
            Glyphs picked during this run, in order (empty if aborted first).
        """
        self.should_exit = False
        self.picked = []
        self.window_offset = 0
        self.session.set_layout_width(self.grid_width())
        self.session.open()
        if initial_query:
            self.session.set_query(initial_query)

        with Live(self.render(), console=self.console, refresh_per_second=20) as live:
            while not self.should_exit:
                try:
                    key = readchar.readkey()
                except KeyboardInterrupt:
                    self.session.close()
                    raise
                self.handle_raw_key(key)
                live.update(self.render())

        self.session.close()
        return list(self.picked)
