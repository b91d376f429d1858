"""Unit tests for /src/reversi/board.py"""

from collections.abc import Iterator
from typing import Callable

import pytest

from src.core.exceptions import InvalidRequestError
from src.reversi.board import Board
from src.reversi.square import BOARD_SIZE, EMPTY, OUT_OF_BOUNDS, Square

BoardFactory = Callable[[str], Board]


def test_empty_board() -> None:
    board = Board.empty()
    assert len(board.cells) == BOARD_SIZE
    assert all(len(row) == BOARD_SIZE for row in board.cells)
    assert all(value == EMPTY for row in board.cells for value in row)
    assert len(board.empty_cells()) == BOARD_SIZE * BOARD_SIZE


def test_two_player_starting_pieces() -> None:
    """Classic diagonal block in the centre"""
    board = Board.empty()
    board.setup_initial_pieces(2)
    assert board.cell(4, 4) == 1
    assert board.cell(4, 5) == 2
    assert board.cell(5, 4) == 2
    assert board.cell(5, 5) == 1
    assert board.piece_counts(2) == {1: 2, 2: 2}
    assert len(board.empty_cells()) == 96


@pytest.mark.parametrize("player_count", range(3, 9))
def test_multi_player_starting_pieces(player_count: int) -> None:
    """Every player gets 3 pieces (3 * 8 = 24 is exactly the number of radial positions)."""
    board = Board.empty()
    board.setup_initial_pieces(player_count)
    assert board.piece_counts(player_count) == {
        player_id: 3 for player_id in range(1, player_count + 1)
    }


def test_three_player_starting_pieces_follow_radial_order() -> None:
    board = Board.empty()
    board.setup_initial_pieces(3)
    expected = {
        (4, 4): 1, (4, 5): 2, (5, 4): 3, (5, 5): 1,
        (3, 4): 2, (3, 5): 3, (6, 4): 1, (6, 5): 2, (4, 3): 3,
    }  # fmt: skip
    for (row, col), player_id in expected.items():
        assert board.cell(row, col) == player_id
    assert len(board.empty_cells()) == 100 - len(expected)


def test_custom_seeding_policy() -> None:
    board = Board.empty()
    board.setup_initial_pieces(2, policy=lambda _: {Square(0, 0): 2})
    assert board.cell(0, 0) == 2
    assert board.piece_counts(2) == {1: 0, 2: 1}


def test_place_piece_on_empty_square() -> None:
    board = Board.empty()
    assert board.place_piece(0, 9, 3)
    assert board.cell(0, 9) == 3


def test_place_piece_on_occupied_square_fails() -> None:
    board = Board.empty()
    board.place_piece(2, 2, 1)
    before = board.snapshot()
    assert not board.place_piece(2, 2, 2)
    assert board.snapshot() == before


@pytest.mark.parametrize("row, col", [(-1, 0), (0, 10), (10, 10)])
def test_place_piece_out_of_bounds_fails(row: int, col: int) -> None:
    board = Board.empty()
    assert not board.place_piece(row, col, 1)
    assert board.snapshot() == Board.empty().snapshot()


def test_set_piece_overwrites() -> None:
    board = Board.empty()
    board.place_piece(2, 2, 1)
    assert board.set_piece(2, 2, 2)
    assert board.cell(2, 2) == 2


def test_set_piece_out_of_bounds_fails() -> None:
    board = Board.empty()
    assert not board.set_piece(10, 0, 1)


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (10, 0), (0, 10)])
def test_cell_out_of_bounds_returns_sentinel(row: int, col: int) -> None:
    assert Board.empty().cell(row, col) == OUT_OF_BOUNDS


def test_snapshot_is_a_copy() -> None:
    """Changing the snapshot must not change the board"""
    board = Board.empty()
    snapshot = board.snapshot()
    snapshot[0][0] = 5
    assert board.cell(0, 0) == EMPTY


def test_count_pieces(board_from_diagram: BoardFactory) -> None:
    board = board_from_diagram(
        """
        1 2 3 .
        1 1 . 3
        """
    )
    assert board.count_pieces(1) == 3
    assert board.count_pieces(2) == 1
    assert board.piece_counts(4) == {1: 3, 2: 1, 3: 2, 4: 0}


def test_empty_cells_are_row_major(board_from_diagram: BoardFactory) -> None:
    board = board_from_diagram("1 1 1 1 1 1 1 1 . 1")
    empty = board.empty_cells()
    assert empty[0] == Square(0, 8)
    assert empty[1] == Square(1, 0)


def test_cells_in_direction_walks_to_the_edge(board_from_diagram: BoardFactory) -> None:
    board = board_from_diagram(
        """
        . . .
        . 2 .
        . . 3
        """
    )
    cells = list(board.cells_in_direction(0, 0, 1, 1))
    assert [cell.square for cell in cells] == [Square(i, i) for i in range(1, BOARD_SIZE)]
    assert [cell.value for cell in cells[:3]] == [2, 3, EMPTY]


def test_cells_in_direction_from_the_edge_is_empty() -> None:
    board = Board.empty()
    assert list(board.cells_in_direction(0, 0, -1, 0)) == []
    assert list(board.cells_in_direction(9, 9, 0, 1)) == []


def test_cells_in_direction_is_lazy() -> None:
    board = Board.empty()
    walk = board.cells_in_direction(5, 5, 0, -1)
    assert isinstance(walk, Iterator)
    assert next(walk).square == Square(5, 4)


def test_from_rows_round_trip() -> None:
    board = Board.empty()
    board.setup_initial_pieces(4)
    assert Board.from_rows(board.to_rows()) == board


def test_from_rows_rejects_wrong_size() -> None:
    with pytest.raises(InvalidRequestError):
        Board.from_rows([[0] * BOARD_SIZE for _ in range(BOARD_SIZE - 1)])


def test_from_rows_rejects_negative_values() -> None:
    rows = [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    rows[3][3] = -1
    with pytest.raises(InvalidRequestError):
        Board.from_rows(rows)


def test_clear() -> None:
    board = Board.empty()
    board.setup_initial_pieces(2)
    board.clear()
    assert board == Board.empty()


def test_render(board_from_diagram: BoardFactory) -> None:
    board = board_from_diagram("1 . 2")
    lines = board.render().splitlines()
    assert lines[0] == "   0 1 2 3 4 5 6 7 8 9"
    assert lines[1] == " 0 1 . 2 . . . . . . ."
    assert len(lines) == BOARD_SIZE + 1
