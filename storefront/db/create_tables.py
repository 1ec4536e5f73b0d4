"""Create or drop the storefront schema (products, orders, contacts, newsletters)."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.repositories.errors import StorageError

from . import models  # noqa: F401  # registers the tables on Base.metadata
from .session import Base, get_engine

logger = logging.getLogger(__name__)


def create_all(engine: Optional[Engine] = None) -> list[str]:
    """Create any missing storefront table. Returns the table names."""
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine, checkfirst=True)
    names = sorted(Base.metadata.tables)
    logger.debug("Schema ready: %s", ", ".join(names))
    return names


def drop_all(engine: Optional[Engine] = None) -> None:
    """Drop every storefront table. Data is lost."""
    engine = engine or get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.warning("Dropped storefront tables on %s", engine.url.render_as_string(hide_password=True))


def main() -> None:
    from storefront.core.config import get_settings
    from storefront.core.logging import configure_logging

    configure_logging(get_settings().log_level)
    try:
        names = create_all()
    except (SQLAlchemyError, StorageError) as exc:
        raise SystemExit(f"Schema creation failed: {exc}") from exc
    print(f"Tables ready: {', '.join(names)}")


if __name__ == "__main__":
    main()
