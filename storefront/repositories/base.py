"""
Contract shared by every storage backend.

Lookups return None for unknown ids; only real faults raise (see
storefront.repositories.errors).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

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
)


class Storage(ABC):
    """Products, orders, contacts and newsletter subscribers."""

    name = "abstract"

    # -------------------------- products --------------------------
    @abstractmethod
    def list_products(self) -> list[Product]:
        ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        ...

    @abstractmethod
    def create_product(self, draft: ProductDraft) -> Product:
        ...

    # -------------------------- orders --------------------------
    @abstractmethod
    def list_orders(self) -> list[Order]:
        ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]:
        ...

    @abstractmethod
    def create_order(self, draft: OrderDraft) -> Order:
        ...

    @abstractmethod
    def update_order_status(self, order_id: int, status: str | OrderStatus) -> Optional[Order]:
        """Replace the status of one order, leaving every other field untouched."""

    # -------------------------- contacts --------------------------
    @abstractmethod
    def list_contacts(self) -> list[Contact]:
        ...

    @abstractmethod
    def create_contact(self, draft: ContactDraft) -> Contact:
        ...

    # -------------------------- newsletter --------------------------
    @abstractmethod
    def list_newsletter_subscribers(self) -> list[NewsletterSubscriber]:
        ...

    @abstractmethod
    def create_newsletter_subscriber(self, draft: NewsletterDraft) -> NewsletterSubscriber:
        """Raises DuplicateSubscriptionError when the email is already subscribed."""

    def close(self) -> None:
        """Release backend resources. Safe to call more than once."""
        return None


def valid_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
