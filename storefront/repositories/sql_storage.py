"""Storage backed by SQLAlchemy (Postgres in production, SQLite in tests)."""
from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.db.create_tables import create_all
from storefront.db.models import (
    Contact as ContactRow,
    NewsletterSubscriber as NewsletterRow,
    Order as OrderRow,
    Product as ProductRow,
)
from storefront.db.session import dispose_engine, get_session
from storefront.domain.catalog import DATABASE_CATALOG
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
from storefront.repositories.errors import (
    BackendUnavailableError,
    DuplicateOrderNumberError,
    DuplicateSubscriptionError,
)

logger = logging.getLogger(__name__)


def _decimal(value: str | None) -> Decimal | None:
    if value is None or value == "":
        return None
    return Decimal(str(value))


def _fixed(value, places: int) -> str | None:
    if value is None:
        return None
    return f"{Decimal(str(value)):.{places}f}"


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite drops the offset; stored timestamps are UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_product(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=_fixed(row.price, 2),
        original_price=_fixed(row.original_price, 2),
        image_url=row.image_url,
        category=row.category,
        rating=_fixed(row.rating, 1),
        in_stock=bool(row.in_stock),
    )


def _to_order(row: OrderRow) -> Order:
    return Order(
        id=row.id,
        order_number=row.order_number,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        address=row.address,
        address2=row.address2,
        city=row.city,
        state=row.state,
        zip_code=row.zip_code,
        country=row.country,
        payment_method=_enum_value(row.payment_method),
        payment_status=row.payment_status,
        transaction_id=row.transaction_id,
        notes=row.notes,
        items=copy.deepcopy(row.items or []),
        subtotal=_fixed(row.subtotal, 2),
        discount=_fixed(row.discount, 2),
        tax=_fixed(row.tax, 2),
        shipping=_fixed(row.shipping, 2),
        total=_fixed(row.total, 2),
        status=_enum_value(row.status),
        tracking_number=row.tracking_number,
        tracking_company=row.tracking_company,
        created_at=_aware(row.created_at),
    )


def _to_contact(row: ContactRow) -> Contact:
    return Contact(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        subject=row.subject,
        message=row.message,
        status=row.status or "unread",
        created_at=_aware(row.created_at),
    )


def _to_subscriber(row: NewsletterRow) -> NewsletterSubscriber:
    return NewsletterSubscriber(
        id=row.id,
        email=row.email,
        name=row.name,
        subscribed=bool(row.subscribed),
        created_at=_aware(row.created_at),
    )


class SQLStorage(Storage):
    """CRUD helpers wrapping the SQLAlchemy session."""

    name = "database"

    def __init__(self, *, seed: bool = True) -> None:
        try:
            create_all()
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(f"Could not create tables: {exc}") from exc
        if seed:
            self.seed_catalog()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with get_session() as session:
            try:
                yield session
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise BackendUnavailableError(f"Database operation failed: {exc}") from exc
            except Exception:
                session.rollback()
                raise

    def seed_catalog(self) -> int:
        """Insert the sample catalog unless products already exist. Returns rows inserted."""
        if self.list_products():
            logger.info("Catalog already populated; skipping seed")
            return 0
        for draft in DATABASE_CATALOG:
            self.create_product(draft)
        logger.info("Seeded database catalog with %d products", len(DATABASE_CATALOG))
        return len(DATABASE_CATALOG)

    def count_products(self) -> int:
        with self._session() as session:
            return int(session.execute(select(func.count(ProductRow.id))).scalar_one())

    # -------------------------- products --------------------------
    def list_products(self) -> list[Product]:
        with self._session() as session:
            rows = session.execute(select(ProductRow).order_by(ProductRow.id)).scalars().all()
            return [_to_product(row) for row in rows]

    def get_product(self, product_id: int) -> Optional[Product]:
        if not valid_id(product_id):
            return None
        with self._session() as session:
            row = session.get(ProductRow, product_id)
            return _to_product(row) if row else None

    def create_product(self, draft: ProductDraft) -> Product:
        row = ProductRow(
            name=draft.name,
            description=draft.description,
            price=_decimal(draft.price),
            original_price=_decimal(draft.original_price),
            image_url=draft.image_url,
            category=draft.category,
        )
        if draft.rating:
            row.rating = _decimal(draft.rating)
        if draft.in_stock is not None:
            row.in_stock = bool(draft.in_stock)
        with self._session() as session:
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_product(row)

    # -------------------------- orders --------------------------
    def list_orders(self) -> list[Order]:
        with self._session() as session:
            rows = session.execute(select(OrderRow).order_by(OrderRow.id)).scalars().all()
            return [_to_order(row) for row in rows]

    def get_order(self, order_id: int) -> Optional[Order]:
        if not valid_id(order_id):
            return None
        with self._session() as session:
            row = session.get(OrderRow, order_id)
            return _to_order(row) if row else None

    def create_order(self, draft: OrderDraft) -> Order:
        method = parse_payment_method(draft.payment_method)
        order_number = draft.order_number or None
        row = OrderRow(
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
            payment_method=method,
            payment_status=draft.payment_status or "pending",
            transaction_id=draft.transaction_id or None,
            notes=draft.notes or None,
            items=copy.deepcopy(list(draft.items or [])),
            subtotal=_decimal(draft.subtotal),
            discount=_decimal(draft.discount) or Decimal("0"),
            tax=_decimal(draft.tax),
            shipping=_decimal(draft.shipping) or Decimal("0"),
            total=_decimal(draft.total),
            status=OrderStatus.PENDING,
            tracking_number=draft.tracking_number or None,
            tracking_company=draft.tracking_company or None,
        )
        with self._session() as session:
            if order_number and self._order_number_taken(session, order_number):
                logger.info("Rejected duplicate order number %s", order_number)
                raise DuplicateOrderNumberError(order_number)
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                if not order_number:
                    raise
                logger.info("Rejected duplicate order number %s", order_number)
                raise DuplicateOrderNumberError(order_number) from exc
            session.refresh(row)
            return _to_order(row)

    def _order_number_taken(self, session: Session, order_number: str) -> bool:
        stmt = select(OrderRow.id).where(OrderRow.order_number == order_number).limit(1)
        return session.execute(stmt).first() is not None

    def update_order_status(self, order_id: int, status: str | OrderStatus) -> Optional[Order]:
        new_status = parse_order_status(status)
        if not valid_id(order_id):
            return None
        with self._session() as session:
            stmt = update(OrderRow).where(OrderRow.id == order_id).values(status=new_status)
            result = session.execute(stmt)
            if result.rowcount == 0:
                return None
            row = session.get(OrderRow, order_id, populate_existing=True)
            return _to_order(row) if row else None

    # -------------------------- contacts --------------------------
    def list_contacts(self) -> list[Contact]:
        with self._session() as session:
            rows = session.execute(select(ContactRow).order_by(ContactRow.id)).scalars().all()
            return [_to_contact(row) for row in rows]

    def create_contact(self, draft: ContactDraft) -> Contact:
        row = ContactRow(
            name=draft.name,
            email=draft.email,
            phone=draft.phone or None,
            subject=draft.subject,
            message=draft.message,
        )
        with self._session() as session:
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_contact(row)

    # -------------------------- newsletter --------------------------
    def list_newsletter_subscribers(self) -> list[NewsletterSubscriber]:
        with self._session() as session:
            rows = session.execute(select(NewsletterRow).order_by(NewsletterRow.id)).scalars().all()
            return [_to_subscriber(row) for row in rows]

    def create_newsletter_subscriber(self, draft: NewsletterDraft) -> NewsletterSubscriber:
        with self._session() as session:
            if self._email_taken(session, draft.email):
                logger.info("Rejected duplicate newsletter subscription for %s", draft.email)
                raise DuplicateSubscriptionError(draft.email)
            row = NewsletterRow(
                email=draft.email,
                name=draft.name or None,
                subscribed=True if draft.subscribed is None else bool(draft.subscribed),
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                # lost a race with a concurrent insert of the same email
                logger.info("Rejected duplicate newsletter subscription for %s", draft.email)
                raise DuplicateSubscriptionError(draft.email) from exc
            session.refresh(row)
            return _to_subscriber(row)

    def _email_taken(self, session: Session, email: str) -> bool:
        stmt = select(NewsletterRow.id).where(NewsletterRow.email == email).limit(1)
        return session.execute(stmt).first() is not None

    def close(self) -> None:
        dispose_engine()
