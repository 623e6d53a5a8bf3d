"""YAML-based configuration and emoji data loading.

Two kinds of files are handled here:
1. Settings: ~/.config/glyph-picker/config.yaml (layout, data paths, theme)
2. Data: the emoji category file and the glyph -> name keyword file

Settings problems fall back to defaults. Data problems raise ConfigError,
because a picker without data cannot start.
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .tree import ConfigError
from .types import LayoutMode

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_EMOJIS_PATH = DATA_DIR / "emojis.yaml"
DEFAULT_KEYWORDS_PATH = DATA_DIR / "keywords.yaml"

LAYOUT_ENV = "GLYPH_PICKER_LAYOUT"

DEFAULT_CONFIG: dict[str, Any] = {
    "layout": LayoutMode.TABLE.value,
    "cell_width": None,
    "emojis": None,
    "keywords": None,
    "theme": "default",
    "debug": False,
}


def get_config_dir() -> Path:
    """Get the glyph-picker config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "glyph-picker"


def get_config_path() -> Path:
    """Get the path to the settings file."""
    return get_config_dir() / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Load settings merged over DEFAULT_CONFIG; env overrides the layout."""
    config_path = get_config_path()
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            cfg = _deep_merge(cfg, data)
    except FileNotFoundError:
        pass
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")

    env_layout = (os.environ.get(LAYOUT_ENV) or "").strip().lower()
    if env_layout:
        cfg["layout"] = env_layout

    try:
        cfg["layout"] = LayoutMode(cfg["layout"]).value
    except ValueError:
        logger.warning(f"Unknown layout {cfg['layout']!r}, using table")
        cfg["layout"] = LayoutMode.TABLE.value
    return cfg


def save_config(cfg: dict[str, Any]) -> None:
    """Save settings to the config file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(cfg, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


# ── data files ────────────────────────────────────────────────────────────


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e


def _pairs(entries: list, what: str, path: tuple[str, ...] = ()) -> dict[str, Any]:
    """Collapse a list of single-key mappings into one mapping."""
    result: dict[str, Any] = {}
    for entry in entries:
        if not isinstance(entry, Mapping) or len(entry) != 1:
            raise ConfigError(f"expected single-key {what} entries, got {entry!r}", path)
        (key, value), = entry.items()
        result[str(key)] = value
    return result


def normalize_emoji_config(data: Any, path: tuple[str, ...] = ()) -> dict[str, Any]:
    """Normalize category data to a plain nested mapping.

    Accepts nested mappings and the list-of-single-key-mappings form
    (``Faces: [{Happy: "🙂😀"}, {Sad: "🙁"}]``) at any level.
    """
    if isinstance(data, list):
        data = _pairs(data, "category", path)
    if not isinstance(data, Mapping):
        raise ConfigError(f"expected a mapping of categories, got {type(data).__name__}", path)

    result: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key)
        if isinstance(value, (list, Mapping)):
            result[name] = normalize_emoji_config(value, (*path, name))
        else:
            result[name] = value
    return result


def normalize_keywords(data: Any) -> dict[str, str]:
    """Normalize keyword data (mapping or list of single-key mappings)."""
    if data is None:
        return {}
    if isinstance(data, list):
        data = _pairs(data, "keyword")
    if not isinstance(data, Mapping):
        raise ConfigError(f"expected a mapping of glyph to name, got {type(data).__name__}")

    keywords: dict[str, str] = {}
    for glyph, name in data.items():
        if not isinstance(glyph, str) or not isinstance(name, str):
            logger.warning(f"Skipping keyword entry {glyph!r}: {name!r}")
            continue
        keywords[glyph] = name
    return keywords


def load_emoji_config(path: Path | str) -> dict[str, Any]:
    """Load and normalize an emoji category file."""
    return normalize_emoji_config(_read_yaml(Path(path)))


def load_keywords(path: Path | str) -> dict[str, str]:
    """Load a glyph -> name keyword file."""
    return normalize_keywords(_read_yaml(Path(path)))


def load_data(
    emojis_path: Path | str | None = None,
    keywords_path: Path | str | None = None,
) -> tuple[dict[str, Any], dict[str, str]]:
    """Load category and keyword data, defaulting to the bundled files."""
    emojis = load_emoji_config(emojis_path or DEFAULT_EMOJIS_PATH)
    keywords = load_keywords(keywords_path or DEFAULT_KEYWORDS_PATH)
    logger.debug(f"Loaded {len(emojis)} categories and {len(keywords)} keywords")
    return emojis, keywords
