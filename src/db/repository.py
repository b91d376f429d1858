"""Protocol repository (the service only depends on this, not on SQLAlchemy)"""

from typing import Protocol
from uuid import UUID

from src.core.models import MatchModel


class MatchRepository(Protocol):
    """Match storage orchestration"""

    def get_match(self, match_id: UUID) -> MatchModel | None:
        """Get match by ID, if record exists."""
        ...

    def create_match(self, match: MatchModel) -> tuple[MatchModel, UUID]:
        """Store new match and return the stored data + newly created match ID."""
        ...

    def update_match(self, match_id: UUID, match: MatchModel) -> MatchModel | None:
        """Overwrite an existing record with the new state."""
        ...

    def delete_match(self, match_id: UUID) -> MatchModel | None:
        """Remove a match's record."""
        ...
