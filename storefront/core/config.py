"""
Configuration helpers for the storefront storage layer.

Settings are read from environment variables once and cached, so backends and
the engine factory never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    db_pool_size: int
    db_max_overflow: int
    db_pool_timeout: int
    db_pool_recycle: int
    db_connect_timeout: int
    db_echo: bool
    log_level: str

    @property
    def is_production(self) -> bool:
        return self.app_env in {"prod", "production"}

    @property
    def is_development(self) -> bool:
        return self.app_env in {"dev", "development"}


def _env_int(name: str, default: int) -> int:
    """Integer variable; unset or malformed values give the default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").strip().lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        db_pool_size=_env_int("DB_POOL_SIZE", 10),
        db_max_overflow=_env_int("DB_MAX_OVERFLOW", 5),
        db_pool_timeout=_env_int("DB_POOL_TIMEOUT", 30),
        db_pool_recycle=_env_int("DB_POOL_RECYCLE", 30),
        db_connect_timeout=_env_int("DB_CONNECT_TIMEOUT", 5),
        db_echo=_env_bool("DB_ECHO"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )
