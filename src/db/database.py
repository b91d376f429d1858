"""Generate database session

Matches only live as long as the process: the engine is an in-memory SQLite database shared by every session (StaticPool).
"""

from typing import Generator

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base

DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    echo=get_settings().sql_echo,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SessionLocal = sessionmaker(autoflush=False, bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
