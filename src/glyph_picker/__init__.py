"""glyph-picker: keyboard-driven emoji picker engine.

Example:
    from glyph_picker import PickerEvent, PickerSession, build

    session = PickerSession(build({"Faces": {"Happy": "🙂😀"}}, {"😀": "grin"}))
    session.subscribe(PickerEvent.COMMIT, lambda selection: print(selection.glyph))
    session.open()
"""

__version__ = "0.3.0"

from .filtering import filter_tree, make_filter
from .navigation import FocusResolutionMiss, NavigationState, Navigator
from .projector import project
from .session import PickerSession, TypeAheadBuffer
from .tree import ConfigError, build, iter_items, split_glyphs
from .types import (
    Category,
    Cell,
    FocusTarget,
    Item,
    Key,
    KeyEvent,
    LayoutMode,
    Leaf,
    NavMode,
    PickerEvent,
    Projection,
    RowGroup,
    Selection,
)

__all__ = [
    "__version__",
    # Engine
    "build",
    "split_glyphs",
    "iter_items",
    "filter_tree",
    "make_filter",
    "project",
    "Navigator",
    "NavigationState",
    "PickerSession",
    "TypeAheadBuffer",
    # Errors
    "ConfigError",
    "FocusResolutionMiss",
    # Types
    "Category",
    "Leaf",
    "Item",
    "Cell",
    "RowGroup",
    "Projection",
    "Key",
    "KeyEvent",
    "LayoutMode",
    "FocusTarget",
    "NavMode",
    "PickerEvent",
    "Selection",
]
