"""
Settings - Persisted CLI defaults (game mode, pattern file, debug).

Stored as a JSON object in config.json. Each key is validated on its own:
a bad value is replaced by its default (with a warning) instead of
discarding the whole file, and unknown keys are kept untouched.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .matcher.library import DEFAULT_PATTERNS_FILE
from .modes import GameMode

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "mode": GameMode.CLASSIC.value,
    "patterns_file": str(DEFAULT_PATTERNS_FILE),
}


def _check_debug(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected true/false, got {value!r}")
    return value


def _check_mode(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a mode name, got {value!r}")
    return GameMode.parse(value).value


def _check_patterns_file(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"expected a file path, got {value!r}")
    return value.strip()


# Key -> normalizer; raises ValueError on an unusable value
VALIDATORS: Dict[str, Callable[[Any], Any]] = {
    "debug_enabled": _check_debug,
    "mode": _check_mode,
    "patterns_file": _check_patterns_file,
}


def validate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge settings over the defaults, normalizing known keys.

    Mode names are canonicalized ("Ice Storm" -> "ice_storm"). Invalid
    values fall back to the default for that key.

    Returns:
        New settings dictionary
    """
    result = DEFAULT_SETTINGS.copy()
    for key, value in settings.items():
        check = VALIDATORS.get(key)
        if check is None:
            result[key] = value
            continue
        try:
            result[key] = check(value)
        except ValueError as e:
            logger.warning(f"Invalid setting {key}: {e}, using {DEFAULT_SETTINGS[key]!r}")
    return result


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Returns:
        Validated settings. Defaults if the file is missing, unreadable or
        not a JSON object.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(settings, dict):
        logger.warning(f"Settings file {path} is not a JSON object, using defaults")
        return DEFAULT_SETTINGS.copy()

    result = validate_settings(settings)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Validate and write settings to config.json.

    IOError is logged, not raised.
    """
    path = path or SETTINGS_FILE
    settings = validate_settings(settings)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
