"""Pytest fixtures for glyph-picker tests."""

import pytest

from glyph_picker import config
from glyph_picker.tree import build
from glyph_picker.types import PickerEvent

FACES = {"Faces": {"Happy": "🙂😀", "Sad": "🙁"}}
FACE_KEYWORDS = {"🙂": "slight", "😀": "grin", "🙁": "frown"}

# Cell indices (table layout):
#   Fruit > Green   🍏 🍎 🍐   0-2
#   Fruit > Orange  🍊         3
#   Pets > Small    🐶 🐱 🐭 🐹 🐰   4-8
SHELF = {
    "Fruit": {"Green": "🍏🍎🍐", "Orange": "🍊"},
    "Pets": {"Small": "🐶🐱🐭🐹🐰"},
}
SHELF_KEYWORDS = {
    "🍏": "green apple",
    "🍎": "red apple",
    "🍐": "pear",
    "🍊": "tangerine",
    "🐶": "dog face",
    "🐱": "cat face",
    "🐭": "mouse face",
    "🐹": "hamster",
    "🐰": "rabbit face",
}


@pytest.fixture
def faces_tree():
    """Two-leaf tree used by the end-to-end scenarios."""
    return build(FACES, FACE_KEYWORDS)


@pytest.fixture
def shelf_tree():
    """Three leaves of uneven length for navigation tests."""
    return build(SHELF, SHELF_KEYWORDS)


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """Point settings at a temp config dir and clear the layout override."""
    config_dir = tmp_path / "glyph-picker"
    config_dir.mkdir()
    monkeypatch.setattr(config, "get_config_dir", lambda: config_dir)
    monkeypatch.delenv(config.LAYOUT_ENV, raising=False)
    return config_dir


@pytest.fixture
def recorder():
    """Collects events published by a session."""

    class Recorder:
        def __init__(self):
            self.commits = []
            self.aborts = 0
            self.changes = 0

        def attach(self, session):
            session.subscribe(PickerEvent.COMMIT, self.commits.append)
            session.subscribe(PickerEvent.ABORT, self._abort)
            session.subscribe(PickerEvent.CHANGE, self._change)
            return self

        def _abort(self):
            self.aborts += 1

        def _change(self, session):
            self.changes += 1

        @property
        def glyphs(self):
            return [selection.glyph for selection in self.commits]

    return Recorder()
