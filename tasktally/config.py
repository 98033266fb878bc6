# tasktally/config.py

"""Settings loaded from environment variables (+ optional .env).

All variables share the TASKTALLY_ prefix. Nothing is required; every value
has a default that works for a local desktop run.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTALLY"

DEFAULT_TICK_MS = 1000
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


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


@dataclass(frozen=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Paths ----
    data_dir: Path
    db_path: Path
    export_dir: Path

    # ---- Behaviour ----
    export_prefix: str
    tick_ms: int
    store_quota_bytes: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktally") or "tasktally"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasktally"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "tasktally.db")
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        export_prefix = _env(_k("EXPORT_PREFIX"), "timetracker").strip() or "timetracker"

        tick_ms = _env_int(_k("TICK_MS"), DEFAULT_TICK_MS)
        if tick_ms <= 0:
            tick_ms = DEFAULT_TICK_MS

        store_quota_bytes = _env_int(_k("STORE_QUOTA_BYTES"), DEFAULT_QUOTA_BYTES)
        if store_quota_bytes <= 0:
            store_quota_bytes = DEFAULT_QUOTA_BYTES

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            export_dir=export_dir,
            export_prefix=export_prefix,
            tick_ms=tick_ms,
            store_quota_bytes=store_quota_bytes,
        )


def get_settings() -> Settings:
    load_dotenv(override=False)
    return Settings.from_env()
