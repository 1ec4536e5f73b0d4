"""
Tests for the in-memory fallback storage.
"""
from __future__ import annotations

import threading
from dataclasses import replace

import pytest

from storefront.domain.catalog import MEMORY_CATALOG
from storefront.domain.entities import NewsletterDraft
from storefront.repositories.errors import (
    DuplicateOrderNumberError,
    DuplicateSubscriptionError,
    InvalidOrderStatusError,
    InvalidPaymentMethodError,
)
from storefront.repositories.memory_storage import MemoryStorage


def test_fresh_storage_has_seeded_catalog(product_draft):
    storage = MemoryStorage()
    products = storage.list_products()
    assert [p.id for p in products] == [1, 2, 3, 4]
    assert [p.name for p in products] == [d.name for d in MEMORY_CATALOG]

    created = storage.create_product(product_draft)
    assert created.id == 5
    assert len(storage.list_products()) == 5


def test_create_product_applies_defaults_and_round_trips(product_draft):
    storage = MemoryStorage(seed=False)
    created = storage.create_product(product_draft)
    assert created.id == 1
    assert created.original_price is None
    assert created.rating is None
    assert created.in_stock is True
    assert storage.get_product(created.id) == created


def test_get_product_unknown_id_returns_none():
    storage = MemoryStorage()
    assert storage.get_product(99) is None
    assert storage.get_product(0) is None
    assert storage.get_product(-3) is None


def test_list_is_a_snapshot():
    storage = MemoryStorage()
    products = storage.list_products()
    products.clear()
    assert len(storage.list_products()) == 4


def test_order_lifecycle(order_draft):
    storage = MemoryStorage()
    order = storage.create_order(order_draft)
    assert order.id == 1
    assert order.status == "pending"
    assert order.created_at is not None
    assert storage.get_order(order.id) == order

    shipped = storage.update_order_status(order.id, "shipped")
    assert shipped.status == "shipped"
    assert shipped.total == order.total == "518.37"
    assert shipped == replace(order, status="shipped")
    assert storage.get_order(order.id) == shipped


def test_order_defaults(order_draft):
    storage = MemoryStorage()
    order_draft.payment_method = None
    order_draft.discount = None
    order_draft.shipping = None
    order = storage.create_order(order_draft)
    assert order.payment_method == "cash_on_delivery"
    assert order.discount == "0.00"
    assert order.shipping == "0.00"
    assert order.notes is None


def test_update_status_missing_order_leaves_set_unchanged(order_draft):
    storage = MemoryStorage()
    storage.create_order(order_draft)
    before = storage.list_orders()
    assert storage.update_order_status(42, "delivered") is None
    assert storage.list_orders() == before


def test_update_status_rejects_unknown_value(order_draft):
    storage = MemoryStorage()
    order = storage.create_order(order_draft)
    with pytest.raises(InvalidOrderStatusError):
        storage.update_order_status(order.id, "lost")
    assert storage.get_order(order.id).status == "pending"


def test_order_items_are_not_shared_with_callers(order_draft):
    storage = MemoryStorage()
    order = storage.create_order(order_draft)
    order_draft.items.append({"productId": 2, "quantity": 1})
    order.items[0]["quantity"] = 50
    stored = storage.get_order(order.id)
    assert len(stored.items) == 2
    assert stored.items[0]["quantity"] == 2


def test_contacts(contact_draft):
    storage = MemoryStorage()
    contact = storage.create_contact(contact_draft)
    assert contact.id == 1
    assert contact.phone is None
    assert contact.status == "unread"
    assert storage.list_contacts() == [contact]


def test_duplicate_newsletter_subscription_is_rejected():
    storage = MemoryStorage()
    first = storage.create_newsletter_subscriber(NewsletterDraft(email="a@x.com"))
    assert first.id == 1
    assert first.subscribed is True

    with pytest.raises(DuplicateSubscriptionError) as excinfo:
        storage.create_newsletter_subscriber(NewsletterDraft(email="a@x.com", name="Again"))
    assert excinfo.value.email == "a@x.com"

    subscribers = storage.list_newsletter_subscribers()
    assert [s.email for s in subscribers] == ["a@x.com"]

    second = storage.create_newsletter_subscriber(NewsletterDraft(email="b@x.com"))
    assert second.id == 2


def test_concurrent_subscriptions_admit_one():
    storage = MemoryStorage(seed=False)
    results: list[str] = []
    barrier = threading.Barrier(8)

    def subscribe():
        barrier.wait()
        try:
            storage.create_newsletter_subscriber(NewsletterDraft(email="race@x.com"))
            results.append("ok")
        except DuplicateSubscriptionError:
            results.append("dup")

    threads = [threading.Thread(target=subscribe) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert len(storage.list_newsletter_subscribers()) == 1


def test_duplicate_order_number_is_rejected(order_draft):
    storage = MemoryStorage()
    order_draft.order_number = "ORD-1"
    first = storage.create_order(order_draft)

    with pytest.raises(DuplicateOrderNumberError) as excinfo:
        storage.create_order(order_draft)
    assert excinfo.value.order_number == "ORD-1"
    assert storage.list_orders() == [first]

    order_draft.order_number = None
    second = storage.create_order(order_draft)
    assert second.id == 2
    assert second.order_number is None


def test_concurrent_orders_with_same_number_admit_one(order_draft):
    storage = MemoryStorage(seed=False)
    order_draft.order_number = "ORD-RACE"
    results: list[str] = []
    barrier = threading.Barrier(8)

    def place():
        barrier.wait()
        try:
            storage.create_order(order_draft)
            results.append("ok")
        except DuplicateOrderNumberError:
            results.append("dup")

    threads = [threading.Thread(target=place) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert len(storage.list_orders()) == 1


def test_unknown_payment_method_is_rejected(order_draft):
    storage = MemoryStorage()
    order_draft.payment_method = "bitcoin"
    with pytest.raises(InvalidPaymentMethodError):
        storage.create_order(order_draft)
    assert storage.list_orders() == []

    order_draft.payment_method = "Bank_Transfer"
    assert storage.create_order(order_draft).payment_method == "bank_transfer"
