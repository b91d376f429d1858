"""Unit tests for src/api/models.py"""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.api.models import CreateMatchRequest, MoveRequest, PreviewRequest


@pytest.mark.parametrize("player_count", range(2, 9))
def test_valid_player_count(player_count: int) -> None:
    assert CreateMatchRequest(player_count=player_count).player_count == player_count
    assert PreviewRequest(player_count=player_count).player_count == player_count


@pytest.mark.parametrize("player_count", [0, 1, 9])
def test_invalid_player_count(player_count: int) -> None:
    with pytest.raises(ValidationError):
        CreateMatchRequest(player_count=player_count)
    with pytest.raises(ValidationError):
        PreviewRequest(player_count=player_count)


def test_valid_move_request() -> None:
    request = MoveRequest(match_id=uuid4(), row=0, col=9)
    assert (request.row, request.col) == (0, 9)


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (10, 0), (0, 10)])
def test_move_request_off_the_board(row: int, col: int) -> None:
    with pytest.raises(ValidationError):
        MoveRequest(match_id=uuid4(), row=row, col=col)


def test_move_request_needs_a_match_id() -> None:
    with pytest.raises(ValidationError):
        MoveRequest(match_id="not-a-uuid", row=4, col=4)  # type: ignore[arg-type]
