# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required: every value has a local default.
- Bad values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data (ignored by git) ----
    data_dir: Path
    db_path: Path
    storage_key: str

    # ---- Behaviour ----
    save_on_exit: bool
    show_dates: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist")
        log_level = _env(_k("LOG_LEVEL"), "INFO").upper()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "tasklist.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), "tasks")

        save_on_exit = _env_bool(_k("SAVE_ON_EXIT"), True)
        show_dates = _env_bool(_k("SHOW_DATES"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            storage_key=storage_key,
            save_on_exit=save_on_exit,
            show_dates=show_dates,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
