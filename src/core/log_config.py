"""Logging setup shared by every entry point."""

import logging

from src.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """Attach a stream handler to the root logger using the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    # the SQL echo of SQLAlchemy is controlled separately
    if not settings.sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
