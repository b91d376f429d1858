"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Phase
from src.reversi.players import MAX_PLAYERS, MIN_PLAYERS
from src.reversi.square import BOARD_SIZE


def _validate_player_count(value: int) -> int:
    if not MIN_PLAYERS <= value <= MAX_PLAYERS:
        raise InvalidRequestError(
            f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {value}."
        )
    return value


# --- REQUEST MODELS ---
class CreateMatchRequest(BaseModel):
    player_count: int

    @field_validator("player_count")
    @classmethod
    def validate_player_count(cls, value: int) -> int:
        return _validate_player_count(value)


class PreviewRequest(BaseModel):
    player_count: int

    @field_validator("player_count")
    @classmethod
    def validate_player_count(cls, value: int) -> int:
        return _validate_player_count(value)


class MoveRequest(BaseModel):
    match_id: UUID
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Coordinate {value} is off the board (0-{BOARD_SIZE - 1})."
            )
        return value


class PassRequest(BaseModel):
    match_id: UUID


class GetMatchRequest(BaseModel):
    match_id: UUID


class ValidMovesRequest(BaseModel):
    match_id: UUID


class DeleteMatchRequest(BaseModel):
    match_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    id: int
    name: str
    color: str


class SquareResponse(BaseModel):
    row: int
    col: int


class MoveRecordResponse(BaseModel):
    player_id: int
    row: int
    col: int
    move_number: int
    timestamp: datetime


class GameResultResponse(BaseModel):
    winners: list[int]
    piece_counts: dict[int, int]
    is_draw: bool


class MatchResponse(BaseModel):
    match_id: UUID
    phase: Phase
    players: list[PlayerResponse]
    current_player: Optional[PlayerResponse]
    board: list[list[int]]
    piece_counts: dict[int, int]
    pass_count: int
    move_history: list[MoveRecordResponse]
    result: Optional[GameResultResponse] = None


class ActionResponse(BaseModel):
    """Outcome of a move or a pass. A rejected action has success=False and leaves the match unchanged."""

    match_id: UUID
    success: bool
    message: str
    game_over: bool
    current_player: Optional[PlayerResponse] = None
    piece_counts: Optional[dict[int, int]] = None
    result: Optional[GameResultResponse] = None


class ValidMovesResponse(BaseModel):
    match_id: UUID
    player: Optional[PlayerResponse]
    valid_moves: list[SquareResponse]


class PreviewResponse(BaseModel):
    player_count: int
    players: list[PlayerResponse]
    board: list[list[int]]
