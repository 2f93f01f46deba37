# src/puptrack/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Bad values never raise at import time; they fall back to defaults.
- Components get settings injected, so tests can pass any object with the same attributes.
"""

from __future__ import annotations

import calendar
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PUPTRACK"

SNAPSHOT_FILE_NAME = "PupTrackData.json"
PHOTOS_DIR_NAME = "Photos"

_WEEKDAY_NAMES = {
    "monday": calendar.MONDAY,
    "mon": calendar.MONDAY,
    "tuesday": calendar.TUESDAY,
    "tue": calendar.TUESDAY,
    "wednesday": calendar.WEDNESDAY,
    "wed": calendar.WEDNESDAY,
    "thursday": calendar.THURSDAY,
    "thu": calendar.THURSDAY,
    "friday": calendar.FRIDAY,
    "fri": calendar.FRIDAY,
    "saturday": calendar.SATURDAY,
    "sat": calendar.SATURDAY,
    "sunday": calendar.SUNDAY,
    "sun": calendar.SUNDAY,
}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def parse_weekday(raw: str | None, default: int) -> int:
    """Accept 0..6 (0=Monday) or a weekday name/abbreviation."""
    if raw is None or raw.strip() == "":
        return default
    s = raw.strip().lower()
    if s in _WEEKDAY_NAMES:
        return _WEEKDAY_NAMES[s]
    try:
        n = int(s)
    except ValueError:
        return default
    return n if 0 <= n <= 6 else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    snapshot_path: Path
    photos_dir_name: str
    export_dir: Path

    # ---- Calendar ----
    first_weekday: int
    timezone: str | None

    # ---- Export ----
    csv_quote: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "puptrack").strip() or "puptrack"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/puptrack"))
        snapshot_path = _env_path(_k("SNAPSHOT_PATH"), data_dir / SNAPSHOT_FILE_NAME)
        export_dir = _env_path(_k("EXPORT_DIR"), Path(tempfile.gettempdir()))

        first_weekday = parse_weekday(os.getenv(_k("FIRST_WEEKDAY")), calendar.firstweekday())
        timezone = _env(_k("TIMEZONE"), "").strip() or None

        csv_quote = _env_bool(_k("CSV_QUOTE"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            snapshot_path=snapshot_path,
            photos_dir_name=PHOTOS_DIR_NAME,
            export_dir=export_dir,
            first_weekday=first_weekday,
            timezone=timezone,
            csv_quote=csv_quote,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
