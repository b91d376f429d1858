"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any

# Type aliases to make MatchModel easier to read
BoardRows = list[list[int]]
MoveEntry = dict[str, Any]


@dataclass
class MatchModel:
    """Transport-safe representation of a match used between API, Service, DB, and Match layers."""

    board: BoardRows
    player_count: int
    current_player_index: int
    pass_count: int
    phase: str
    moves: list[MoveEntry] = field(default_factory=list)
