"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import MatchModel
from src.db.schema import Base
from src.reversi.board import Board
from src.reversi.square import BOARD_SIZE

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Session factory of a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


def rows_from_diagram(diagram: str) -> list[list[int]]:
    """
    Read a board from a small drawing: one line per row, '.' for an empty cell, a digit for a player's piece.
    Rows / columns that are not drawn are empty.
    """
    rows = [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    lines = [line.strip() for line in diagram.strip().splitlines()]
    for row_idx, line in enumerate(lines):
        for col_idx, character in enumerate(line.replace(" ", "")):
            rows[row_idx][col_idx] = 0 if character == "." else int(character)
    return rows


@pytest.fixture
def board_from_diagram() -> Callable[[str], Board]:
    """Call the inner function with a drawing of the board (see rows_from_diagram)."""

    def _create_board(diagram: str) -> Board:
        return Board.from_rows(rows_from_diagram(diagram))

    return _create_board


@pytest.fixture
def playing_model() -> Callable[..., MatchModel]:
    """Call the inner function with a drawing to get a match in progress on that board."""

    def _create_model(
        diagram: str,
        player_count: int = 2,
        current_player_index: int = 0,
        pass_count: int = 0,
    ) -> MatchModel:
        return MatchModel(
            board=rows_from_diagram(diagram),
            player_count=player_count,
            current_player_index=current_player_index,
            pass_count=pass_count,
            phase="playing",
        )

    return _create_model
