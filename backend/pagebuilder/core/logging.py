"""Process-wide logging setup."""

import logging

from pagebuilder.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the root logger. Safe to call more than once."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel((level or settings.LOG_LEVEL).upper())
    # SQLAlchemy echoes every statement at INFO; keep it quiet unless debugging.
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
