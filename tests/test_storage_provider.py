from __future__ import annotations

import logging
import signal

import pytest

from storefront.core import config as core_config
from storefront.db import session as db_session
from storefront.repositories.errors import BackendUnavailableError
from storefront.repositories.memory_storage import MemoryStorage
from storefront.repositories.sql_storage import SQLStorage
from storefront.services import storage_provider


def test_falls_back_to_memory_without_database_url(no_db, caplog):
    caplog.set_level(logging.INFO, logger="storefront.services.storage_provider")
    storage = storage_provider.init_storage()
    assert isinstance(storage, MemoryStorage)
    assert len(storage.list_products()) == 4
    assert "DATABASE_URL" in caplog.text
    assert storage_provider.get_storage() is storage


def test_selects_database_when_reachable(temp_db):
    storage = storage_provider.get_storage()
    assert isinstance(storage, SQLStorage)
    assert storage.count_products() == 8
    assert storage_provider.init_storage() is storage


def test_construction_failure_is_logged_and_falls_back(temp_db, monkeypatch, caplog):
    def broken(*args, **kwargs):
        raise BackendUnavailableError("seeding failed")

    monkeypatch.setattr(storage_provider, "SQLStorage", broken)
    caplog.set_level(logging.WARNING, logger="storefront.services.storage_provider")

    storage = storage_provider.init_storage()
    assert isinstance(storage, MemoryStorage)
    assert "Database storage failed" in caplog.text
    assert "seeding failed" in caplog.text
    assert db_session._engine is None


def test_selection_is_not_retried(no_db, tmp_path, monkeypatch):
    first = storage_provider.init_storage()
    assert isinstance(first, MemoryStorage)

    # a database showing up later does not change the choice
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'late.db'}")
    core_config.get_settings.cache_clear()
    assert storage_provider.init_storage() is first
    assert storage_provider.get_storage() is first
    assert db_session._engine is None


def test_shutdown_runs_once(temp_db):
    storage_provider.init_storage()
    assert db_session._engine is not None
    assert storage_provider.shutdown_storage() is True
    assert db_session._engine is None
    assert storage_provider.shutdown_storage() is False


def test_signal_handler_closes_storage_and_exits(temp_db):
    storage_provider.init_storage()
    with pytest.raises(SystemExit) as excinfo:
        storage_provider._handle_shutdown_signal(signal.SIGTERM, None)
    assert excinfo.value.code == 0
    assert db_session._engine is None


def test_install_signal_handlers(monkeypatch):
    installed = {}
    monkeypatch.setattr(storage_provider.signal, "signal", lambda sig, handler: installed.setdefault(sig, handler))
    storage_provider.install_signal_handlers()
    assert installed[signal.SIGINT] is storage_provider._handle_shutdown_signal
    assert installed[signal.SIGTERM] is storage_provider._handle_shutdown_signal
