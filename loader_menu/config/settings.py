"""Settings for the menu engine.

Values are loaded once from DEFAULT_SETTINGS and an optional JSON file.
Nothing is written back: choices made in the menu last for the boot
session only.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


SETTINGS_PATH = Path(
    os.environ.get(
        "LOADER_MENU_SETTINGS_PATH",
        Path.home() / ".config" / "loader-menu" / "settings.json",
    )
)

# Default values - use these constants instead of hardcoding values elsewhere
DEFAULT_AUTOBOOT_DELAY = 10
DEFAULT_AUTOBOOT_TICK_SECONDS = 0.05
DEFAULT_AUTOBOOT_TIMEOUT_X = 5
DEFAULT_AUTOBOOT_TIMEOUT_Y = 22
DEFAULT_SCREEN_WIDTH = 80

DEFAULT_SETTINGS: dict[str, Any] = {
    "autoboot_delay": DEFAULT_AUTOBOOT_DELAY,
    "autoboot_tick_seconds": DEFAULT_AUTOBOOT_TICK_SECONDS,
    "autoboot_timeout_x": DEFAULT_AUTOBOOT_TIMEOUT_X,
    "autoboot_timeout_y": DEFAULT_AUTOBOOT_TIMEOUT_Y,
    "autoboot_disabled_token": "NO",
    "screen_width": DEFAULT_SCREEN_WIDTH,
    "menu_title": "Boot Menu",
}


@dataclass
class SettingsStore:
    values: dict[str, Any] = field(default_factory=dict)


settings_store = SettingsStore()


def load_settings(path: Path | None = None) -> None:
    settings_store.values = dict(DEFAULT_SETTINGS)
    path = path or SETTINGS_PATH
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return
    if isinstance(data, dict):
        settings_store.values.update(data)


def get_setting(key: str, default: Any | None = None) -> Any:
    return settings_store.values.get(key, default)


def get_int(key: str, default: int = 0) -> int:
    try:
        return int(get_setting(key, default))
    except (TypeError, ValueError):
        return default


def get_float(key: str, default: float = 0.0) -> float:
    try:
        return float(get_setting(key, default))
    except (TypeError, ValueError):
        return default


load_settings()
