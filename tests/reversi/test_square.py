"""Unit tests for /src/reversi/square.py"""

import pytest

from src.reversi.square import BOARD_SIZE, Cell, Square


def test_square_within_bounds() -> None:
    """happy case: every square of the 10x10 board"""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            assert Square(row, col).is_within_bounds()


@pytest.mark.parametrize(
    "row, col", [(-1, 0), (0, -1), (BOARD_SIZE, 0), (0, BOARD_SIZE), (-1, BOARD_SIZE)]
)
def test_square_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


def test_shifted_square() -> None:
    assert Square(4, 4).shifted((-1, 1)) == Square(3, 5)
    # shifting returns a new square
    square = Square(0, 0)
    square.shifted((1, 1))
    assert square == Square(0, 0)


def test_square_is_hashable() -> None:
    """Squares are used as dictionary keys for the starting layouts"""
    layout = {Square(1, 2): 1}
    assert layout[Square(1, 2)] == 1


def test_cell_exposes_coordinates() -> None:
    cell = Cell(Square(3, 7), 2)
    assert (cell.row, cell.col, cell.value) == (3, 7, 2)
    assert Square(3, 7).to_dict() == {"row": 3, "col": 7}
