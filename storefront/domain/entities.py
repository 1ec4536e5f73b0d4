"""
Storefront records handed out by the storage backends, plus the drafts callers
submit to create them.

Entities are frozen: backends keep the authoritative copy and callers only
ever see values. Monetary amounts travel as fixed-scale decimal strings
("199.99") so both backends render them identically.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from storefront.repositories.errors import InvalidOrderStatusError, InvalidPaymentMethodError


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
    CASH_ON_DELIVERY = "cash_on_delivery"


DEFAULT_PAYMENT_METHOD = PaymentMethod.CASH_ON_DELIVERY.value


def parse_order_status(value: str | OrderStatus) -> OrderStatus:
    """Return the OrderStatus for value or raise InvalidOrderStatusError."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus((value or "").strip().lower())
    except (ValueError, AttributeError):
        raise InvalidOrderStatusError(str(value)) from None


def parse_payment_method(value: str | PaymentMethod | None) -> PaymentMethod:
    """Return the PaymentMethod for value; empty means cash on delivery."""
    if isinstance(value, PaymentMethod):
        return value
    if value is None or not str(value).strip():
        return PaymentMethod(DEFAULT_PAYMENT_METHOD)
    try:
        return PaymentMethod(value.strip().lower())
    except (ValueError, AttributeError):
        raise InvalidPaymentMethodError(str(value)) from None


# -------------------------- entities --------------------------
@dataclass(frozen=True)
class Product:
    id: int
    name: str
    description: str
    price: str
    image_url: str
    category: str
    original_price: Optional[str] = None
    rating: Optional[str] = None
    in_stock: bool = True


@dataclass(frozen=True)
class Order:
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    payment_method: str
    items: list[dict[str, Any]]
    subtotal: str
    tax: str
    total: str
    status: str
    created_at: datetime
    discount: str = "0.00"
    shipping: str = "0.00"
    address2: Optional[str] = None
    order_number: Optional[str] = None
    payment_status: str = "pending"
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_company: Optional[str] = None


@dataclass(frozen=True)
class Contact:
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime
    phone: Optional[str] = None
    status: str = "unread"


@dataclass(frozen=True)
class NewsletterSubscriber:
    id: int
    email: str
    created_at: datetime
    name: Optional[str] = None
    subscribed: bool = True


# -------------------------- drafts --------------------------
@dataclass
class ProductDraft:
    name: str
    description: str
    price: str
    image_url: str
    category: str
    original_price: Optional[str] = None
    rating: Optional[str] = None
    in_stock: Optional[bool] = None


@dataclass
class OrderDraft:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str
    subtotal: str
    tax: str
    total: str
    items: list[dict[str, Any]] = field(default_factory=list)
    payment_method: Optional[str] = None
    discount: Optional[str] = None
    shipping: Optional[str] = None
    address2: Optional[str] = None
    order_number: Optional[str] = None
    payment_status: Optional[str] = None
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_company: Optional[str] = None


@dataclass
class ContactDraft:
    name: str
    email: str
    subject: str
    message: str
    phone: Optional[str] = None


@dataclass
class NewsletterDraft:
    email: str
    name: Optional[str] = None
    subscribed: Optional[bool] = None
