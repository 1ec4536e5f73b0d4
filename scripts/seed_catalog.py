#!/usr/bin/env python3
"""
Create the storefront tables and seed the sample catalog in the database.

Uso:
  DATABASE_URL=postgresql://... python scripts/seed_catalog.py [--no-seed] [--verbose]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Garantir que o pacote storefront seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.core.config import get_settings
from storefront.core.logging import configure_logging
from storefront.repositories.errors import StorageError
from storefront.repositories.sql_storage import SQLStorage


def main() -> None:
    ap = argparse.ArgumentParser(description="Create tables and seed the storefront catalog")
    ap.add_argument("--no-seed", action="store_true", help="Only create tables, skip the sample catalog")
    ap.add_argument("--verbose", action="store_true", help="Log SQL statements")
    args = ap.parse_args()

    settings = get_settings()
    configure_logging(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        sql_echo=args.verbose,
    )

    try:
        storage = SQLStorage(seed=not args.no_seed)
    except StorageError as exc:
        raise SystemExit(f"Failed to prepare database: {exc}") from exc
    try:
        total = storage.count_products()
    finally:
        storage.close()
    print("OK: database ready")
    print(f"  Products: {total}")


if __name__ == "__main__":
    main()
