# src/todo_webmcp/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time: every variable has a working default.
- The conventional PORT variable is honoured when TODO_PORT is not set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


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
    log_dir: Path

    # ---- HTTP listener ----
    host: str
    port: int

    # ---- Storage / assets ----
    db_path: Path
    static_dir: Path

    # ---- Identity cookie ----
    cookie_name: str
    cookie_max_age_days: int

    @property
    def cookie_max_age(self) -> int:
        """Cookie lifetime in seconds."""
        return self.cookie_max_age_days * 86400

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-webmcp") or "todo-webmcp"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/todo"))

        host = (_first_env(_k("HOST"), default="0.0.0.0") or "0.0.0.0").strip()
        port = _env_int(_k("PORT"), _env_int("PORT", 8080))

        db_path = _env_path(_k("DB_PATH"), Path("todos.db"))
        static_dir = _env_path(_k("STATIC_DIR"), Path("."))

        cookie_name = (_env(_k("COOKIE_NAME"), "user_id") or "user_id").strip()
        cookie_max_age_days = _env_int(_k("COOKIE_MAX_AGE_DAYS"), 365)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            host=host,
            port=port,
            db_path=db_path,
            static_dir=static_dir,
            cookie_name=cookie_name,
            cookie_max_age_days=cookie_max_age_days,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
