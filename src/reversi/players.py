"""Defines the players taking part in a match"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import InvalidPlayerCountError

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 8

PLAYER_COLORS: tuple[str, ...] = (
    "#FF4757",  # red
    "#2F80ED",  # blue
    "#27AE60",  # green
    "#FF9500",  # orange
    "#8E44AD",  # purple
    "#F1C40F",  # yellow
    "#E91E63",  # pink
    "#607D8B",  # grey
)


def player_color(player_id: int) -> str:
    # player ids start at 1
    return PLAYER_COLORS[(player_id - 1) % len(PLAYER_COLORS)]


@dataclass(frozen=True)
class Player:
    id: int
    name: str = ""
    color: str = field(init=False)

    def __post_init__(self):
        # frozen dataclass: fill in the derived fields through object.__setattr__
        if not self.name:
            object.__setattr__(self, "name", f"Player {self.id}")
        object.__setattr__(self, "color", player_color(self.id))

    def to_dict(self) -> dict[str, int | str]:
        return {"id": self.id, "name": self.name, "color": self.color}


def validate_player_count(player_count: int) -> None:
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise InvalidPlayerCountError(
            f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {player_count}."
        )


@dataclass(frozen=True)
class PlayerRegistry:
    """Ordered players of a single match. Rebuilt for every new match, never edited."""

    players: tuple[Player, ...]

    @classmethod
    def create(cls, player_count: int) -> Self:
        validate_player_count(player_count)
        registry = cls(tuple(Player(player_id) for player_id in range(1, player_count + 1)))
        logger.info(
            "Registered %d players: %s",
            player_count,
            [player.to_dict() for player in registry.players],
        )
        return registry

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def colors(self) -> list[str]:
        return [player.color for player in self.players]

    def get_player(self, player_id: int) -> Optional[Player]:
        return next((player for player in self.players if player.id == player_id), None)

    def at(self, index: int) -> Optional[Player]:
        """Player at a turn index, None if the registry is empty."""
        if not self.players:
            return None
        return self.players[index % len(self.players)]


def preview_players(player_count: int) -> list[Player]:
    """
    The players a match with `player_count` players would get.
    ---

    Pure function: it does not create or touch any match. (Meant for showing a preview while the player count is still being chosen.)
    """
    validate_player_count(player_count)
    return [Player(player_id) for player_id in range(1, player_count + 1)]
