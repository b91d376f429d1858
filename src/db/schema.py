"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBMatch(Base):
    __tablename__ = "matches"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[list[list[int]]] = mapped_column(JSON)
    player_count: Mapped[int]
    current_player_index: Mapped[int] = mapped_column(default=0)
    pass_count: Mapped[int] = mapped_column(default=0)
    phase: Mapped[str]
    moves: Mapped[list[dict]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
