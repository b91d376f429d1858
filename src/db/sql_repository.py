"""Implementation of (Match)Repository using SQLAlchemy"""

from threading import Lock
from typing import Callable
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import MatchModel
from src.db.schema import DBMatch


class SQLMatchRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy.

    Every call opens and closes its own Session from the factory. The in-memory engine has a single connection,
    so calls are serialised with a store-wide lock.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory
        self._lock = Lock()

    def get_match(self, match_id: UUID) -> MatchModel | None:
        """Get match by ID, if record exists."""
        with self._lock, self.session_factory() as db:
            match_db = self._fetch_match(db, match_id)
            if match_db:
                return self._to_model(match_db)
            return None

    def create_match(self, match: MatchModel) -> tuple[MatchModel, UUID]:
        """Store new match and return the stored data + newly created match ID."""

        new_id = uuid4()
        match_db = DBMatch(
            id=new_id,
            board=match.board,
            player_count=match.player_count,
            current_player_index=match.current_player_index,
            pass_count=match.pass_count,
            phase=match.phase,
            moves=match.moves,
        )
        with self._lock, self.session_factory() as db:
            db.add(match_db)
            db.commit()
            db.refresh(match_db)
            return self._to_model(match_db), new_id

    def update_match(self, match_id: UUID, match: MatchModel) -> MatchModel | None:
        """Overwrite an existing record with the new state."""
        with self._lock, self.session_factory() as db:
            match_db = self._fetch_match(db, match_id)
            if not match_db:
                return None
            # JSON columns: assign new objects so SQLAlchemy notices the change
            match_db.board = [list(row) for row in match.board]
            match_db.player_count = match.player_count
            match_db.current_player_index = match.current_player_index
            match_db.pass_count = match.pass_count
            match_db.phase = match.phase
            match_db.moves = list(match.moves)
            db.commit()
            db.refresh(match_db)
            return self._to_model(match_db)

    def delete_match(self, match_id: UUID) -> MatchModel | None:
        """Remove a match's record."""
        with self._lock, self.session_factory() as db:
            match_db = self._fetch_match(db, match_id)
            if not match_db:
                return None
            match_model = self._to_model(match_db)
            db.delete(match_db)
            db.commit()
            return match_model

    def _fetch_match(self, db: Session, match_id: UUID) -> DBMatch | None:
        query = select(DBMatch).where(DBMatch.id == match_id)
        return db.scalar(query)

    def _to_model(self, match_db: DBMatch) -> MatchModel:
        """Convert SQLAlchemy model to data transfer model."""
        return MatchModel(
            board=[list(row) for row in match_db.board],
            player_count=match_db.player_count,
            current_player_index=match_db.current_player_index,
            pass_count=match_db.pass_count,
            phase=match_db.phase,
            moves=list(match_db.moves),
        )
