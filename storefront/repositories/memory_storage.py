"""
In-memory storage used when no database is configured or reachable.

Keeps the same contract as SQLStorage so the storefront can run without
Postgres. Everything is lost when the process exits.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Optional

from storefront.domain.catalog import MEMORY_CATALOG
from storefront.domain.entities import (
    Contact,
    ContactDraft,
    NewsletterDraft,
    NewsletterSubscriber,
    Order,
    OrderDraft,
    OrderStatus,
    Product,
    ProductDraft,
    parse_order_status,
    parse_payment_method,
)
from storefront.repositories.base import Storage, valid_id
from storefront.repositories.errors import DuplicateOrderNumberError, DuplicateSubscriptionError

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _snapshot(order: Order) -> Order:
    return replace(order, items=copy.deepcopy(order.items))


class MemoryStorage(Storage):
    """Dict-backed storage with one id counter per collection."""

    name = "memory"

    def __init__(self, *, seed: bool = True) -> None:
        self._products: Dict[int, Product] = {}
        self._orders: Dict[int, Order] = {}
        self._contacts: Dict[int, Contact] = {}
        self._subscribers: Dict[int, NewsletterSubscriber] = {}
        self._next_product_id = 1
        self._next_order_id = 1
        self._next_contact_id = 1
        self._next_subscriber_id = 1
        self._lock = threading.Lock()
        if seed:
            for draft in MEMORY_CATALOG:
                self.create_product(draft)
            logger.info("Seeded in-memory catalog with %d products", len(MEMORY_CATALOG))

    # -------------------------- products --------------------------
    def list_products(self) -> list[Product]:
        with self._lock:
            return list(self._products.values())

    def get_product(self, product_id: int) -> Optional[Product]:
        if not valid_id(product_id):
            return None
        return self._products.get(product_id)

    def create_product(self, draft: ProductDraft) -> Product:
        with self._lock:
            product_id = self._next_product_id
            self._next_product_id += 1
            product = Product(
                id=product_id,
                name=draft.name,
                description=draft.description,
                price=draft.price,
                image_url=draft.image_url,
                category=draft.category,
                original_price=draft.original_price or None,
                rating=draft.rating or None,
                in_stock=True if draft.in_stock is None else bool(draft.in_stock),
            )
            self._products[product_id] = product
            return product

    # -------------------------- orders --------------------------
    def list_orders(self) -> list[Order]:
        with self._lock:
            return [_snapshot(order) for order in self._orders.values()]

    def get_order(self, order_id: int) -> Optional[Order]:
        if not valid_id(order_id):
            return None
        order = self._orders.get(order_id)
        return _snapshot(order) if order else None

    def create_order(self, draft: OrderDraft) -> Order:
        method = parse_payment_method(draft.payment_method)
        order_number = draft.order_number or None
        with self._lock:
            if order_number and any(o.order_number == order_number for o in self._orders.values()):
                logger.info("Rejected duplicate order number %s", order_number)
                raise DuplicateOrderNumberError(order_number)
            order_id = self._next_order_id
            self._next_order_id += 1
            order = Order(
                id=order_id,
                order_number=order_number,
                first_name=draft.first_name,
                last_name=draft.last_name,
                email=draft.email,
                phone=draft.phone,
                address=draft.address,
                address2=draft.address2 or None,
                city=draft.city,
                state=draft.state,
                zip_code=draft.zip_code,
                country=draft.country,
                payment_method=method.value,
                payment_status=draft.payment_status or "pending",
                transaction_id=draft.transaction_id or None,
                notes=draft.notes or None,
                items=copy.deepcopy(list(draft.items or [])),
                subtotal=draft.subtotal,
                discount=draft.discount or "0.00",
                tax=draft.tax,
                shipping=draft.shipping or "0.00",
                total=draft.total,
                status=OrderStatus.PENDING.value,
                tracking_number=draft.tracking_number or None,
                tracking_company=draft.tracking_company or None,
                created_at=_now(),
            )
            self._orders[order_id] = order
            return _snapshot(order)

    def update_order_status(self, order_id: int, status: str | OrderStatus) -> Optional[Order]:
        new_status = parse_order_status(status)
        if not valid_id(order_id):
            return None
        with self._lock:
            order = self._orders.get(order_id)
            if not order:
                return None
            updated = replace(order, status=new_status.value)
            self._orders[order_id] = updated
            return _snapshot(updated)

    # -------------------------- contacts --------------------------
    def list_contacts(self) -> list[Contact]:
        with self._lock:
            return list(self._contacts.values())

    def create_contact(self, draft: ContactDraft) -> Contact:
        with self._lock:
            contact_id = self._next_contact_id
            self._next_contact_id += 1
            contact = Contact(
                id=contact_id,
                name=draft.name,
                email=draft.email,
                subject=draft.subject,
                message=draft.message,
                phone=draft.phone or None,
                status="unread",
                created_at=_now(),
            )
            self._contacts[contact_id] = contact
            return contact

    # -------------------------- newsletter --------------------------
    def list_newsletter_subscribers(self) -> list[NewsletterSubscriber]:
        with self._lock:
            return list(self._subscribers.values())

    def create_newsletter_subscriber(self, draft: NewsletterDraft) -> NewsletterSubscriber:
        with self._lock:
            if any(sub.email == draft.email for sub in self._subscribers.values()):
                logger.info("Rejected duplicate newsletter subscription for %s", draft.email)
                raise DuplicateSubscriptionError(draft.email)
            subscriber_id = self._next_subscriber_id
            self._next_subscriber_id += 1
            subscriber = NewsletterSubscriber(
                id=subscriber_id,
                email=draft.email,
                name=draft.name or None,
                subscribed=True if draft.subscribed is None else bool(draft.subscribed),
                created_at=_now(),
            )
            self._subscribers[subscriber_id] = subscriber
            return subscriber
