#!/usr/bin/env python3
# backend/scripts/seed_global_categories.py
"""
Load the default global expense categories and, optionally, copy the default
tenant catalog into every company.

    python -m scripts.seed_global_categories [--backfill-tenant-copies]
"""
import argparse
import logging
import sys

from expense_catalog.core.logging import configure_logging
from expense_catalog.db import SessionLocal
from expense_catalog.models import Company
from expense_catalog.services.global_category_admin import GlobalCategoryAdmin

logger = logging.getLogger("seed_global_categories")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Seed global expense categories")
    parser.add_argument(
        "--backfill-tenant-copies",
        action="store_true",
        help="Also upsert the default tenant categories into every company",
    )
    return parser.parse_args(argv)


def run(db, backfill_tenant_copies: bool = False) -> None:
    admin = GlobalCategoryAdmin(db)
    inserted, updated = admin.seed_defaults()
    logger.info("Global categories: %d created, %d updated", inserted, updated)

    if backfill_tenant_copies:
        companies = db.query(Company).order_by(Company.id).all()
        logger.info("%d companies found", len(companies))
        for company in companies:
            created, matched = admin.backfill_tenant(company.tenant_id)
            logger.info("Backfill for %s (%s): %d created, %d updated",
                        company.name, company.tenant_id, created, matched)


def main(argv=None) -> int:
    configure_logging()
    args = parse_args(argv)
    db = SessionLocal()
    try:
        run(db, backfill_tenant_copies=args.backfill_tenant_copies)
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()
    logger.info("Seeding completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
