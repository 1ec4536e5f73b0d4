"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

import logging
import re
import threading
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from storefront.core.config import Settings, get_settings
from storefront.repositories.errors import BackendUnavailableError, ConfigurationMissingError

logger = logging.getLogger(__name__)

Base = declarative_base()

_engine: Engine | None = None
_sessionmaker: sessionmaker | None = None
_engine_lock = threading.Lock()


def normalize_database_url(value: str) -> str:
    """Strip common mistakes: 'psql \'...\'', extra quotes, whitespace, postgres:// scheme."""
    s = (value or "").strip()
    if re.match(r"^psql\s+", s, re.IGNORECASE):
        s = re.sub(r"^psql\s+", "", s, flags=re.IGNORECASE).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    if s.startswith("postgres://"):
        s = "postgresql://" + s[len("postgres://"):]
    return s


def _engine_options(url: str, settings: Settings) -> dict:
    try:
        backend = make_url(url).get_backend_name()
    except ArgumentError as exc:
        raise ConfigurationMissingError(f"DATABASE_URL is not a valid connection string: {exc}") from exc
    options: dict = {
        "future": True,
        "pool_pre_ping": True,
        "echo": settings.db_echo and settings.is_development,
    }
    if backend == "sqlite":
        return options
    connect_args: dict = {"connect_timeout": settings.db_connect_timeout}
    if settings.is_production:
        connect_args["sslmode"] = "require"
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        connect_args=connect_args,
    )
    return options


def get_engine() -> Engine:
    """
    Return the process-wide engine, creating and testing it on first use.

    Concurrent first callers wait on the same lock, so only one pool is built.
    """
    global _engine, _sessionmaker
    if _engine is not None:
        return _engine
    with _engine_lock:
        if _engine is not None:
            return _engine
        settings = get_settings()
        url = normalize_database_url(settings.database_url)
        if not url:
            raise ConfigurationMissingError("DATABASE_URL must be configured to use the SQL backend.")
        options = _engine_options(url, settings)
        logger.info("Initializing database connection...")
        engine = None
        try:
            engine = create_engine(url, **options)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection test successful")
        except SQLAlchemyError as exc:
            logger.error("Database connection failed: %s", exc)
            if engine is not None:
                engine.dispose()
            raise BackendUnavailableError("Database connection not established") from exc
        _engine = engine
        _sessionmaker = sessionmaker(
            bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True
        )
        logger.info("Database connection ready")
        return _engine


def _get_sessionmaker() -> sessionmaker:
    get_engine()
    factory = _sessionmaker
    if factory is None:
        # dispose_engine() ran between get_engine() and here
        raise BackendUnavailableError("Database engine was disposed")
    return factory


@contextmanager
def get_session() -> Session:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


def dispose_engine() -> bool:
    """Close every pooled connection. Returns False when nothing was open."""
    global _engine, _sessionmaker
    with _engine_lock:
        if _engine is None:
            return False
        logger.info("Closing database connection...")
        _engine.dispose()
        _engine = None
        _sessionmaker = None
        logger.info("Database connection closed")
        return True
