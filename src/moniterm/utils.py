"""Utility helpers: XDG paths, file I/O, app configuration."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


APP_NAME = "moniterm"

DEFAULT_SETTINGS: dict = {
    "output_path": "~/.config/hypr/configs/autogen/monitors.conf",
    "backup": True,
    "position_step": 10,
}


def _xdg_home(var: str, fallback: str) -> Path:
    return Path(os.environ.get(var) or Path.home() / fallback)


def config_dir() -> Path:
    """Return ~/.config/moniterm, creating it if needed."""
    d = _xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def state_dir() -> Path:
    """Return ~/.local/state/moniterm, creating it if needed."""
    d = _xdg_home("XDG_STATE_HOME", ".local/state") / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def default_log_path() -> Path:
    return state_dir() / f"{APP_NAME}.log"


def read_json(path: Path) -> dict | list | None:
    """Read and parse a JSON file, returning None on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def write_json(path: Path, data: dict | list) -> None:
    """Write data as formatted JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    """Write text to a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def backup_file(path: Path) -> Path | None:
    """Create a .bak copy of a file. Returns backup path or None."""
    if not path.exists():
        return None
    bak = path.with_suffix(path.suffix + ".bak")
    bak.write_bytes(path.read_bytes())
    return bak


def _settings_path() -> Path:
    """Return the path to the global app settings file."""
    return config_dir() / "settings.json"


def load_app_settings() -> dict:
    """Load settings.json merged over the defaults.

    Values of the wrong type (or a non-positive ``position_step``) are
    replaced by their defaults; unknown keys are kept as they are.
    """
    data = read_json(_settings_path())
    settings = dict(DEFAULT_SETTINGS)
    if not isinstance(data, dict):
        return settings
    for key, value in data.items():
        default = DEFAULT_SETTINGS.get(key)
        if default is not None and not _valid_setting(key, value, default):
            log.warning("Ignoring invalid setting %s=%r, using %r", key, value, default)
            continue
        settings[key] = value
    return settings


def _valid_setting(key: str, value, default) -> bool:
    # bool is an int subclass; keep the two apart
    if isinstance(value, bool) != isinstance(default, bool):
        return False
    if not isinstance(value, type(default)):
        return False
    if key == "position_step":
        return value > 0
    if key == "output_path":
        return bool(value.strip())
    return True


def save_app_settings(settings: dict) -> None:
    """Save global application settings."""
    write_json(_settings_path(), settings)


def save_config(path: Path, text: str, *, backup: bool = True) -> Path | None:
    """Write the generated monitors.conf. Returns the backup path, if any."""
    bak = backup_file(path) if backup else None
    write_text(path, text)
    return bak
