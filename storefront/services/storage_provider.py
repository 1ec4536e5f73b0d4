"""
Process-wide choice of storage backend.

The host application calls init_storage() once at startup (or lets
get_storage() do it lazily) and passes the returned instance to whatever
needs it. The database backend is preferred; any failure while building it
falls back to MemoryStorage for the rest of the process.
"""

from __future__ import annotations

import logging
import signal
import threading
from typing import Optional

from storefront.db.session import dispose_engine
from storefront.repositories.base import Storage
from storefront.repositories.errors import ConfigurationMissingError
from storefront.repositories.memory_storage import MemoryStorage
from storefront.repositories.sql_storage import SQLStorage

logger = logging.getLogger(__name__)

_storage: Optional[Storage] = None
_closed = False
_lock = threading.RLock()


def init_storage() -> Storage:
    """Select the backend once; later calls return the same instance."""
    global _storage
    if _storage is not None:
        return _storage
    with _lock:
        if _storage is not None:
            return _storage
        try:
            _storage = SQLStorage()
            logger.info("Using database storage")
        except ConfigurationMissingError as exc:
            logger.info("%s Using in-memory storage", exc)
            _storage = MemoryStorage()
        except Exception as exc:
            logger.warning("Database storage failed, using in-memory storage: %s", exc, exc_info=True)
            dispose_engine()
            _storage = MemoryStorage()
        return _storage


def get_storage() -> Storage:
    if _storage is None:
        return init_storage()
    return _storage


def shutdown_storage() -> bool:
    """Close the active backend and its connection pool. Runs at most once."""
    global _closed
    with _lock:
        if _storage is None or _closed:
            return False
        _closed = True
        logger.info("Shutting down %s storage", _storage.name)
        _storage.close()
        return True


def reset_storage() -> None:
    """Forget the selected backend so the next call selects again (tests only)."""
    global _storage, _closed
    with _lock:
        if _storage is not None and not _closed:
            _storage.close()
        _storage = None
        _closed = False


def _handle_shutdown_signal(signum, frame) -> None:
    logger.info("Received %s, closing storage", signal.Signals(signum).name)
    shutdown_storage()
    raise SystemExit(0)


def install_signal_handlers() -> None:
    """Close storage on SIGINT/SIGTERM, then exit. Must run on the main thread."""
    signal.signal(signal.SIGINT, _handle_shutdown_signal)
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)
