"""Entrypoint for a host application: wires the match service to the in-memory match store."""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from src.core.config import Settings, get_settings
from src.core.log_config import configure_logging
from src.db.database import SessionLocal
from src.db.sql_repository import SQLMatchRepository
from src.services.match_service import MatchService


def create_service(
    session_factory: Optional[Callable[[], Session]] = None,
    settings: Optional[Settings] = None,
) -> MatchService:
    """Service backed by SQLAlchemy. Without a session factory the process-wide in-memory database is used."""
    configure_logging(settings or get_settings())
    return MatchService(SQLMatchRepository(session_factory or SessionLocal))
