# src/vibe_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

One Settings object for the whole app, built once and read through
get_settings(). Malformed values fall back to their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "VIBE"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    log_level: str
    log_dir: Path

    # ---- Storage ----
    data_file: Path

    # ---- Notifications ----
    notifications_enabled: bool
    notify_command: str
    notify_window_hours: float
    notify_cooldown_hours: float
    notify_overdue_grace_minutes: float

    @staticmethod
    def from_env() -> "Settings":
        home = Path.home()
        return Settings(
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR"), home / ".local" / "state" / "vibe_tasks"),
            data_file=_env_path(_k("DATA_FILE"), home / ".vibe_tasks.json"),
            notifications_enabled=_env_bool(_k("NOTIFICATIONS_ENABLED"), True),
            notify_command=_env(_k("NOTIFY_COMMAND"), "notify-send").strip() or "notify-send",
            notify_window_hours=_env_float(_k("NOTIFY_WINDOW_HOURS"), 24.0),
            notify_cooldown_hours=_env_float(_k("NOTIFY_COOLDOWN_HOURS"), 6.0),
            notify_overdue_grace_minutes=_env_float(_k("NOTIFY_OVERDUE_GRACE_MINUTES"), 0.0),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
