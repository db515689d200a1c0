#!/usr/bin/env python3
import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from sqlalchemy.exc import OperationalError

from expense_catalog.core.logging import configure_logging

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"

logger = logging.getLogger("migrate")


def run_migrations(revision: str = "head") -> None:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_INI.parent / "alembic"))
    try:
        logger.info("Running database migrations up to %s...", revision)
        command.upgrade(config, revision)
        logger.info("Migrations completed successfully!")
    except (CommandError, OperationalError):
        logger.exception("Migration failed")
        sys.exit(1)


if __name__ == "__main__":
    configure_logging()
    run_migrations(sys.argv[1] if len(sys.argv) > 1 else "head")
