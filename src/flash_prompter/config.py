"""Settings model and normalization for Flash Prompter."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import os
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

APP_NAME = "flash-prompter"
SETTINGS_KEY = "flash-prompter-settings"

Number = Union[int, float]

WORDS_PER_MINUTE = 60
FONT_SIZE = 34
LINE_HEIGHT = 48

# field -> (min, max, slider step)
SETTING_RANGES: dict[str, tuple[int, int, int]] = {
    "words_per_minute": (20, 240, 5),
    "font_size": (20, 64, 1),
    "line_height": (28, 96, 2),
}

_RECORD_KEYS = {
    "words_per_minute": "wordsPerMinute",
    "font_size": "fontSize",
    "line_height": "lineHeight",
    "auto_start": "autoStart",
}


@dataclass(frozen=True)
class Settings:
    """User-tunable prompter parameters."""

    words_per_minute: Number = WORDS_PER_MINUTE
    font_size: Number = FONT_SIZE
    line_height: Number = LINE_HEIGHT
    auto_start: bool = False


DEFAULT_SETTINGS = Settings()


def get_config_dir(app_name: str = APP_NAME) -> Path:
    """Return the per-user config directory for the current platform."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            root = Path(base)
        else:
            root = Path.home() / "AppData" / "Roaming"
        return _ensure_dir(root / app_name)
    elif os.name == "posix":
        if _is_macos():
            return _ensure_dir(
                Path.home() / "Library" / "Application Support" / app_name
            )
        base = os.environ.get("XDG_CONFIG_HOME")
        root = Path(base) if base else Path.home() / ".config"
        return _ensure_dir(root / app_name)
    else:
        return _ensure_dir(Path.home() / ".config" / app_name)


def get_storage_path() -> Path:
    """Return the key-value store file path."""
    return get_config_dir() / "storage.json"


def clamp(value: Number, min_value: Number, max_value: Number) -> Number:
    return min(max_value, max(min_value, value))


def clamp_setting(field: str, value: Number) -> Number:
    """Clamp a numeric setting into its allowed range."""
    try:
        min_value, max_value, _step = SETTING_RANGES[field]
    except KeyError:
        raise ValueError(f"Not a numeric setting: {field}") from None
    return clamp(value, min_value, max_value)


def settings_from_mapping(raw: dict[str, Any]) -> Settings:
    """Normalize a persisted record into clamped Settings."""
    return Settings(
        words_per_minute=_get_number(raw, "words_per_minute", WORDS_PER_MINUTE),
        font_size=_get_number(raw, "font_size", FONT_SIZE),
        line_height=_get_number(raw, "line_height", LINE_HEIGHT),
        auto_start=_get_bool(raw, "auto_start", False),
    )


def settings_to_mapping(settings: Settings) -> dict[str, Any]:
    """Return the camelCase record persisted for Settings."""
    return {
        _RECORD_KEYS["words_per_minute"]: settings.words_per_minute,
        _RECORD_KEYS["font_size"]: settings.font_size,
        _RECORD_KEYS["line_height"]: settings.line_height,
        _RECORD_KEYS["auto_start"]: settings.auto_start,
    }


def _ensure_dir(path: Path) -> Path:
    """Create the directory if needed and return the path."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def _is_macos() -> bool:
    """Return True when running on macOS."""
    return os.uname().sysname == "Darwin" if hasattr(os, "uname") else False  # pyright: ignore[reportAttributeAccessIssue]


def _get_bool(raw: dict[str, Any], field: str, default: bool) -> bool:
    value = raw.get(_RECORD_KEYS[field], default)
    if isinstance(value, bool):
        return value
    return default


def _get_number(raw: dict[str, Any], field: str, default: Number) -> Number:
    """Fetch a numeric value, clamped into the field's range."""
    value = raw.get(_RECORD_KEYS[field], default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.debug("Ignoring invalid %s=%r", field, value)
        value = default
    elif isinstance(value, float) and not math.isfinite(value):
        value = default
    return clamp_setting(field, value)
