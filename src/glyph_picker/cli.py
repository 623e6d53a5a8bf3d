"""CLI interface for glyph-picker."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .types import LayoutMode

_console = None


def _print(msg: str = "") -> None:
    """Print with Rich markup support."""
    global _console
    if _console is None:
        from rich.console import Console

        _console = Console(highlight=False)
    _console.print(msg)


def _load_session(args, cfg):
    from .config import load_data
    from .session import PickerSession
    from .tree import build

    emojis, keywords = load_data(
        args.emojis or cfg.get("emojis"),
        args.keywords or cfg.get("keywords"),
    )
    tree = build(emojis, keywords)
    return PickerSession(
        tree,
        layout_mode=args.layout or cfg["layout"],
        cell_width=cfg.get("cell_width"),
    )


def cmd_list(session, query: str) -> int:
    """Print the filtered tree, one subcategory per line."""
    from rich.markup import escape

    session.set_query(query)
    projection = session.projection
    if projection.empty:
        _print("[dim]No emojis found[/dim]")
        return 1
    if not projection:
        _print("[dim]No emojis configured[/dim]")
        return 1

    for row in projection.rows:
        first = projection.cells[row.start]
        for header in first.headers[:-1]:
            _print(f"[bold]{escape(header)}[/bold]")
        glyphs = " ".join(cell.item.glyph for cell in projection.cells[row.start : row.stop])
        _print(f"  [dim]{escape(row.label)}[/dim]  {glyphs}")
    return 0


def cmd_pick(session, query: str, theme_name: str | None) -> int:
    """Run the interactive picker and print what was picked."""
    from .themes import get_theme
    from .view import PickerView

    picked = PickerView(session, theme=get_theme(theme_name)).show(initial_query=query)
    if not picked:
        return 1
    print("".join(picked))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="glyph-picker",
        description="glyph-picker: search and pick emoji from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"glyph-picker {__version__}")
    parser.add_argument("--emojis", help="Emoji category YAML file (default: bundled set)")
    parser.add_argument("--keywords", help="Emoji keyword YAML file (default: bundled set)")
    parser.add_argument(
        "--layout",
        choices=[mode.value for mode in LayoutMode],
        help="Navigation layout (default: from config, else table)",
    )
    parser.add_argument("--theme", help="Theme name (default, mono)")
    parser.add_argument("-q", "--query", default="", help="Initial search text")
    parser.add_argument("--list", action="store_true", help="Print matching emoji and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    from .config import load_config
    from .tree import ConfigError

    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config()

    if args.debug or cfg.get("debug"):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        session = _load_session(args, cfg)
        if args.list:
            code = cmd_list(session, args.query)
        else:
            code = cmd_pick(session, args.query, args.theme or cfg.get("theme"))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print()
        sys.exit(130)

    sys.exit(code)
