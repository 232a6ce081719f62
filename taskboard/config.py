from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    database_path: Optional[Path]
    host: str
    port: int
    log_level: str
    session_cookie: str

    @property
    def uses_database(self) -> bool:
        return self.database_path is not None

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Read settings from the environment (and `.env`, if present).

    DATABASE unset or empty means in-memory storage.
    """
    load_dotenv(env_file)

    db_raw = os.getenv("DATABASE", "").strip()
    host = os.getenv("HOST", "127.0.0.1").strip()
    port_raw = os.getenv("PORT", "8000").strip()
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    cookie = os.getenv("SESSION_COOKIE", "session").strip()

    try:
        port = int(port_raw)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got {port_raw!r}") from None
    if not 0 < port < 65536:
        raise RuntimeError(f"PORT out of range: {port}")
    if log_level not in _LOG_LEVELS:
        raise RuntimeError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
    if not cookie:
        raise RuntimeError("SESSION_COOKIE must not be empty")

    return Settings(
        database_path=Path(db_raw) if db_raw else None,
        host=host,
        port=port,
        log_level=log_level,
        session_cookie=cookie,
    )
