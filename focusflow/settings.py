"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/FocusFlow/settings.json

(or ``$FOCUSFLOW_HOME/settings.json`` when that variable is set).

Usage::

    settings = load_settings()
    settings.last_duration_seconds = 45 * 60
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import DEFAULT_SECONDS, clamp_seconds

logger = logging.getLogger(__name__)


def _app_support_dir() -> Path:
    override = os.environ.get("FOCUSFLOW_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "FocusFlow"


APP_SUPPORT_DIR = _app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

# Older builds stored whole minutes under this key.
LEGACY_MINUTES_KEY = "last_duration_minutes"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    last_duration_seconds: int = DEFAULT_SECONDS

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 460
    window_height: int = 640

    def __post_init__(self) -> None:
        self.last_duration_seconds = clamp_seconds(self.last_duration_seconds)


def _migrate(data: dict) -> bool:
    """Fold the legacy minutes field into seconds.  Returns True if changed."""
    if LEGACY_MINUTES_KEY not in data:
        return False
    minutes = data.pop(LEGACY_MINUTES_KEY)
    if "last_duration_seconds" not in data:
        try:
            data["last_duration_seconds"] = float(minutes) * 60
        except (TypeError, ValueError):
            data["last_duration_seconds"] = DEFAULT_SECONDS
    return True


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            migrated = _migrate(data)
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)
            if migrated:
                logger.info("Migrated legacy duration setting to seconds")
                save_settings(settings)
            return settings
    except Exception:
        logger.warning("Unable to load settings from %s", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON.  Failures are logged, not raised."""
    try:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(asdict(settings), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError:
        logger.warning("Unable to save settings to %s", SETTINGS_PATH, exc_info=True)
