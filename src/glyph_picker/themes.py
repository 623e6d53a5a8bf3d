"""Configurable themes for the terminal picker.

The Theme dataclass holds the Rich styles and icons used by PickerView.
"""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for the picker panel.

    All colors use Rich markup format (e.g., "green", "bold cyan", "dim").

    Attributes:
        category_color: Style for category header lines.
        leaf_color: Style for subcategory (row) labels.
        focus_style: Style of the focused cell.
        input_color: Style of the search input when it holds focus.
        dim_color: Style for hints and secondary text.
        empty_color: Style of the no-results message.
        border_color: Color for panel border.

        cursor_icon: Caret shown after the query text.
        search_icon: Prompt shown before the query text.
        scroll_up_icon: Indicator for rows above the window.
        scroll_down_icon: Indicator for rows below the window.

        panel_width: Fixed width of the panel (None uses the terminal width).
        label_width: Width of the subcategory label column.
        max_visible_rows: Maximum visual rows shown at once.
        panel_padding: Lines reserved for borders/search/footer.
    """

    # Colors
    category_color: str = "bold cyan"
    leaf_color: str = "dim"
    focus_style: str = "reverse"
    input_color: str = "bold"
    dim_color: str = "dim"
    empty_color: str = "italic dim"
    border_color: str = "cyan"

    # Icons
    cursor_icon: str = "█"
    search_icon: str = "🔍"
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"

    # Layout
    panel_width: int | None = 80
    label_width: int = 14
    max_visible_rows: int = 16
    panel_padding: int = 8


DEFAULT_THEME = Theme()

THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "mono": Theme(
        category_color="bold",
        leaf_color="dim",
        focus_style="reverse",
        border_color="white",
    ),
}


def get_theme(name: str | None) -> Theme:
    """Look up a theme by name, falling back to the default."""
    if not name:
        return DEFAULT_THEME
    return THEMES.get(name.strip().lower(), DEFAULT_THEME)
