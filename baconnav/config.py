"""Persistent JSON config helpers.

Stores marker filenames, the bacon client command, quickfix mirroring and
color preferences. All access is defensive: malformed or missing config falls
back to defaults, and each key is validated on its own.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "baconnav"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_LOCATIONS_FILENAME = ".bacon-locations"
DEFAULT_SOCKET_FILENAME = ".bacon.socket"
DEFAULT_BACON_COMMAND = "bacon"
DEFAULT_QUICKFIX_PATH = ".bacon-quickfix"


@dataclass(frozen=True)
class BaconSettings:
    locations_filename: str = DEFAULT_LOCATIONS_FILENAME
    socket_filename: str = DEFAULT_SOCKET_FILENAME
    bacon_command: str = DEFAULT_BACON_COMMAND
    quickfix_enabled: bool = False
    quickfix_path: str = DEFAULT_QUICKFIX_PATH
    color: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _filename(value: object, default: str) -> str:
    """Accept only a bare, non-empty file name (no directory separators)."""
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    if not stripped or "/" in stripped or "\\" in stripped:
        return default
    return stripped


def _nonempty_str(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def settings_from_dict(data: dict[str, object]) -> BaconSettings:
    """Build settings from a decoded config object, dropping invalid values."""
    defaults = BaconSettings()
    quickfix = data.get("quickfix")
    if not isinstance(quickfix, dict):
        quickfix = {}
    return BaconSettings(
        locations_filename=_filename(data.get("locations_filename"), defaults.locations_filename),
        socket_filename=_filename(data.get("socket_filename"), defaults.socket_filename),
        bacon_command=_nonempty_str(data.get("bacon_command"), defaults.bacon_command),
        quickfix_enabled=_bool(quickfix.get("enabled"), defaults.quickfix_enabled),
        quickfix_path=_nonempty_str(quickfix.get("path"), defaults.quickfix_path),
        color=_bool(data.get("color"), defaults.color),
    )


def load_settings() -> BaconSettings:
    return settings_from_dict(load_config())


def save_quickfix_enabled(enabled: bool) -> None:
    """Persist the quickfix mirroring switch, keeping other quickfix keys."""
    config = load_config()
    quickfix = config.get("quickfix")
    if not isinstance(quickfix, dict):
        quickfix = {}
    quickfix["enabled"] = bool(enabled)
    config["quickfix"] = quickfix
    save_config(config)
