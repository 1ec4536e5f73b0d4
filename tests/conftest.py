from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote storefront seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.core import config as core_config  # noqa: E402
from storefront.db import session as db_session  # noqa: E402
from storefront.domain.entities import ContactDraft, OrderDraft, ProductDraft  # noqa: E402
from storefront.services import storage_provider  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.dispose_engine()
    storage_provider.reset_storage()

    yield db_file

    storage_provider.reset_storage()
    db_session.dispose_engine()
    core_config.get_settings.cache_clear()
    if db_file.exists():
        try:
            db_file.unlink()
        except OSError:
            pass


@pytest.fixture()
def no_db(monkeypatch):
    """Environment without any database configured."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    core_config.get_settings.cache_clear()
    db_session.dispose_engine()
    storage_provider.reset_storage()

    yield

    storage_provider.reset_storage()
    db_session.dispose_engine()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def product_draft() -> ProductDraft:
    return ProductDraft(
        name="Travel Mug",
        description="Double-walled steel mug that keeps coffee hot",
        price="24.50",
        image_url="https://example.com/mug.jpg",
        category="home",
    )


@pytest.fixture()
def order_draft() -> OrderDraft:
    return OrderDraft(
        first_name="Ana",
        last_name="Souza",
        email="ana@example.com",
        phone="+5511999990000",
        address="Rua das Flores, 100",
        city="Sao Paulo",
        state="SP",
        zip_code="01000-000",
        country="BR",
        payment_method="credit_card",
        items=[
            {"productId": 1, "name": "Wireless Headphones", "price": "199.99", "quantity": 2},
            {"productId": 4, "name": "Modern Desk Lamp", "price": "89.99", "quantity": 1},
        ],
        subtotal="489.97",
        discount="10.00",
        tax="38.40",
        shipping="0.00",
        total="518.37",
    )


@pytest.fixture()
def contact_draft() -> ContactDraft:
    return ContactDraft(
        name="Bruno Lima",
        email="bruno@example.com",
        subject="Wholesale",
        message="Do you offer volume discounts for offices?",
    )
