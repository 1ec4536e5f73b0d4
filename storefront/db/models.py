"""SQLAlchemy models for the storefront tables."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Integer,
    Numeric,
    String,
    Text,
    JSON,
    func,
)

from storefront.domain.entities import OrderStatus, PaymentMethod

from .session import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, index=True)
    original_price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(Text, nullable=False)
    category = Column(Text, nullable=False, index=True)
    rating = Column(Numeric(2, 1), default=Decimal("0"), nullable=True)
    in_stock = Column(Boolean, default=True, nullable=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(64), unique=True, nullable=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=False)
    address = Column(Text, nullable=False)
    address2 = Column(Text, nullable=True)
    city = Column(Text, nullable=False)
    state = Column(Text, nullable=False)
    zip_code = Column(String(32), nullable=False)
    country = Column(Text, nullable=False)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", values_callable=_enum_values, validate_strings=True),
        nullable=False,
    )
    payment_status = Column(String(32), default="pending", nullable=False)
    transaction_id = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    items = Column(JSON, nullable=False, default=list)
    subtotal = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    shipping = Column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values, validate_strings=True),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    tracking_number = Column(Text, nullable=True)
    tracking_company = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)
    subject = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default="unread", server_default="unread")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class NewsletterSubscriber(Base):
    __tablename__ = "newsletters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(Text, nullable=True)
    subscribed = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
