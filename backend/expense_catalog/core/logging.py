import logging
from typing import Optional

from .settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings (idempotent)."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    # Engine echo is controlled by SQLAlchemy itself; keep its logger quiet by default
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
