"""Persistent JSON config helpers.

Supplies the editor command, hidden-file default, preview line cap and
highlight/UI theme names. All reads are defensive: a missing or malformed
file, or a field of the wrong type, falls back to the documented default.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .editor import resolve_editor

logger = logging.getLogger(__name__)

APP_NAME = "vfv"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "VFV_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / "vfv.json"


@dataclass(frozen=True)
class AppConfig:
    editor: str = "vim"
    editor_args: list[str] = field(default_factory=list)
    show_hidden: bool = False
    preview_max_lines: int = 1000
    theme: str = "monokai"
    ui_theme: str = "default"

    def to_json(self) -> dict[str, object]:
        return asdict(self)


def config_path() -> Path:
    """Return the active config path (``$VFV_CONFIG`` wins)."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    path = config_path()
    if path.exists():
        return path
    if path == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return path


def load_raw_config() -> dict[str, object]:
    """Load the persisted JSON object, or an empty dict when unusable."""
    path = _load_config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", path)
        return {}
    return data


def _string(value: object, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _string_list(value: object, default: list[str]) -> list[str]:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return list(default)


def _positive_int(value: object, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_config() -> AppConfig:
    """Build an ``AppConfig`` from the config file, field by field."""
    raw = load_raw_config()
    defaults = AppConfig()
    show_hidden = raw.get("show_hidden")
    return AppConfig(
        editor=_string(raw.get("editor"), resolve_editor("") or defaults.editor),
        editor_args=_string_list(raw.get("editor_args"), defaults.editor_args),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else defaults.show_hidden,
        preview_max_lines=_positive_int(raw.get("preview_max_lines"), defaults.preview_max_lines),
        theme=_string(raw.get("theme"), defaults.theme),
        ui_theme=_string(raw.get("ui_theme"), defaults.ui_theme),
    )


def write_default_config(force: bool = False) -> tuple[Path, bool]:
    """Write the default config file.

    Returns ``(path, written)``; an existing file is left alone unless
    ``force`` is set. Filesystem errors propagate to the caller.
    """
    path = config_path()
    if path.exists() and not force:
        return path, False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(AppConfig().to_json(), indent=2) + "\n", encoding="utf-8")
    logger.info("wrote default config to %s", path)
    return path, True
