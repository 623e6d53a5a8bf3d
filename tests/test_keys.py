"""Tests for raw key decoding."""

import readchar

from glyph_picker.keys import SHIFT_TAB, decode_key, is_modified_enter, is_printable
from glyph_picker.types import Key, KeyEvent


class TestDecodeKey:
    def test_arrows(self):
        assert decode_key(readchar.key.UP) == KeyEvent(Key.UP)
        assert decode_key(readchar.key.DOWN) == KeyEvent(Key.DOWN)
        assert decode_key(readchar.key.LEFT) == KeyEvent(Key.LEFT)
        assert decode_key(readchar.key.RIGHT) == KeyEvent(Key.RIGHT)

    def test_paging(self):
        assert decode_key(readchar.key.PAGE_UP) == KeyEvent(Key.PAGE_UP)
        assert decode_key("\x1b[6~") == KeyEvent(Key.PAGE_DOWN)

    def test_tab(self):
        assert decode_key(readchar.key.TAB) == KeyEvent(Key.TAB)
        assert decode_key(SHIFT_TAB) == KeyEvent(Key.SHIFT_TAB)

    def test_enter(self):
        assert decode_key("\r") == KeyEvent(Key.ENTER)
        assert decode_key("\n") == KeyEvent(Key.ENTER)

    def test_alt_enter_is_modified(self):
        assert is_modified_enter("\x1b\r")
        assert decode_key("\x1b\r") == KeyEvent(Key.ENTER, ctrl=True)

    def test_escape_and_backspace(self):
        assert decode_key("\x1b") == KeyEvent(Key.ESCAPE)
        assert decode_key("\x7f") == KeyEvent(Key.BACKSPACE)

    def test_space(self):
        assert decode_key(" ") == KeyEvent(Key.SPACE, char=" ")

    def test_letters_are_text(self):
        # vim keys must reach the query
        assert decode_key("j") == KeyEvent.char_key("j")
        assert decode_key("q") == KeyEvent.char_key("q")

    def test_unicode_char(self):
        assert decode_key("é") == KeyEvent.char_key("é")

    def test_unknown_sequence(self):
        assert decode_key("\x1b[15~") is None
        assert decode_key("\x01") is None

    def test_is_printable(self):
        assert is_printable("a")
        assert not is_printable("\t")
        assert not is_printable("ab")
