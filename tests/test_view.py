"""Tests for the Rich picker view."""

import io

import pytest
import readchar
from rich.console import Console

from glyph_picker import view as view_module
from glyph_picker.session import PickerSession
from glyph_picker.themes import DEFAULT_THEME, THEMES, get_theme
from glyph_picker.tree import build
from glyph_picker.types import FocusTarget, LayoutMode
from glyph_picker.view import PickerView


def make_console():
    return Console(file=io.StringIO(), width=80, height=40, color_system=None)


def rendered(view):
    view.console.print(view.render())
    return view.console.file.getvalue()


@pytest.fixture
def view(faces_tree):
    session = PickerSession(faces_tree)
    session.open()
    return PickerView(session, console=make_console())


class TestRender:
    def test_shows_categories_and_glyphs(self, view):
        out = rendered(view)
        assert "Faces" in out
        assert "Happy" in out
        assert "Sad" in out
        assert "🙂" in out and "🙁" in out

    def test_footer_names_focused_item(self, view):
        assert "slight" in rendered(view)

    def test_no_results(self, view):
        view.session.set_query("zebra")
        assert "No emojis found" in rendered(view)

    def test_empty_tree(self):
        session = PickerSession(build({}))
        session.open()
        out = rendered(PickerView(session, console=make_console()))
        assert "No emojis configured" in out

    def test_query_shown(self, view):
        view.session.set_query("gr")
        out = rendered(view)
        assert "gr" in out
        assert "🙁" not in out

    def test_grid_layout_labels_on_own_line(self, faces_tree):
        session = PickerSession(faces_tree, layout_mode=LayoutMode.GRID)
        view = PickerView(session, console=make_console())
        session.set_layout_width(view.grid_width())
        session.open()
        lines, cursor_line = view._body_lines()
        assert lines[1].strip().endswith("Happy[/dim]")
        assert cursor_line == 2

    def test_grid_width_reserves_label_column(self, view):
        assert view.grid_width() == 80 - 4 - DEFAULT_THEME.label_width - 1


class TestWindow:
    def test_scrolls_to_cursor(self, view):
        view._update_window(cursor_line=20, total=30, max_visible=10)
        assert view.window_offset == 11
        view._update_window(cursor_line=5, total=30, max_visible=10)
        assert view.window_offset == 5

    def test_short_body_not_scrolled(self, view):
        view.window_offset = 3
        view._update_window(cursor_line=1, total=4, max_visible=10)
        assert view.window_offset == 0


class TestKeys:
    def test_typing_updates_query(self, view):
        assert view.handle_raw_key("g")
        assert view.session.query == "g"

    def test_unknown_key_ignored(self, view):
        assert not view.handle_raw_key("\x01")

    def test_enter_picks_and_exits(self, view):
        view.handle_raw_key(readchar.key.RIGHT)
        view.handle_raw_key("\r")
        assert view.picked == ["😀"]
        assert view.should_exit

    def test_space_picks_and_stays(self, view):
        view.handle_raw_key(" ")
        view.handle_raw_key(readchar.key.RIGHT)
        view.handle_raw_key(" ")
        assert view.picked == ["🙂", "😀"]
        assert not view.should_exit
        assert "picked: 🙂😀" in rendered(view)

    def test_escape_exits_without_pick(self, view):
        view.handle_raw_key("x")
        view.handle_raw_key("\x1b")
        assert not view.should_exit
        view.handle_raw_key("\x1b")
        assert view.should_exit
        assert view.picked == []

    def test_tab_moves_focus(self, view):
        view.handle_raw_key("\t")
        assert view.session.state.focus == FocusTarget.INPUT


class _StaticLive:
    def __init__(self, renderable, **kwargs):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def update(self, renderable):
        pass


class TestShow:
    @pytest.fixture
    def feed_keys(self, monkeypatch):
        monkeypatch.setattr(view_module, "Live", _StaticLive)

        def _feed(*keys):
            monkeypatch.setattr(view_module.readchar, "readkey", iter(keys).__next__)

        return _feed

    def test_show_returns_pick(self, view, feed_keys):
        feed_keys(readchar.key.RIGHT, "\r")
        assert view.show() == ["😀"]

    def test_second_run_starts_clean(self, view, feed_keys):
        feed_keys("\r")
        assert view.show() == ["🙂"]

        view.window_offset = 5
        feed_keys("\x1b")
        assert view.show() == []
        assert view.picked == []
        assert view.window_offset == 0

    def test_initial_query(self, view, feed_keys):
        feed_keys("\r")
        assert view.show(initial_query="frown") == ["🙁"]


class TestThemes:
    def test_get_theme(self):
        assert get_theme(None) is DEFAULT_THEME
        assert get_theme("MONO") is THEMES["mono"]
        assert get_theme("nope") is DEFAULT_THEME
