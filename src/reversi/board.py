"""The Board owns the 10x10 grid of cell values and every primitive operation on it (no game rules in here)"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidRequestError
from src.reversi.seeding import SeedingPolicy, default_layout
from src.reversi.square import BOARD_SIZE, EMPTY, OUT_OF_BOUNDS, Cell, Square

Rows = list[list[int]]


@dataclass
class Board:
    cells: Rows

    @classmethod
    def empty(cls) -> Self:
        """A grid with every cell empty."""
        return cls([[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def from_rows(cls, rows: Rows) -> Self:
        """Construct a board from a (copied) grid of cell values. Used to rebuild a match from its transport model."""
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise InvalidRequestError(
                f"Board must be {BOARD_SIZE}x{BOARD_SIZE}, got {len(rows)} rows."
            )
        if any(value < 0 for row in rows for value in row):
            raise InvalidRequestError("Cell values must be 0 (empty) or a player id.")
        return cls([list(row) for row in rows])

    def to_rows(self) -> Rows:
        return self.snapshot()

    def clear(self) -> None:
        self.cells = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def setup_initial_pieces(
        self, player_count: int, policy: SeedingPolicy = default_layout
    ) -> None:
        """Seed the starting pieces. Overwrites whatever is on the seeded squares."""
        for square, player_id in policy(player_count).items():
            self.cells[square.row][square.col] = player_id

    # --- PLACEMENT ---
    def place_piece(self, row: int, col: int, player_id: int) -> bool:
        """Put a new piece on an empty square. Returns False (and leaves the board alone) otherwise."""
        if not self.is_valid_position(row, col):
            return False
        if self.cells[row][col] != EMPTY:
            return False
        self.cells[row][col] = player_id
        return True

    def set_piece(self, row: int, col: int, player_id: int) -> bool:
        """Overwrite a square regardless of its content (capturing flips)."""
        if not self.is_valid_position(row, col):
            return False
        self.cells[row][col] = player_id
        return True

    # --- QUERIES ---
    def is_valid_position(self, row: int, col: int) -> bool:
        return Square(row, col).is_within_bounds()

    def cell(self, row: int, col: int) -> int:
        """Value on the square, or OUT_OF_BOUNDS (-1) instead of raising."""
        if not self.is_valid_position(row, col):
            return OUT_OF_BOUNDS
        return self.cells[row][col]

    def count_pieces(self, player_id: int) -> int:
        return sum(row.count(player_id) for row in self.cells)

    def piece_counts(self, player_count: int) -> dict[int, int]:
        """Tally the pieces of every player id 1..player_count"""
        return {
            player_id: self.count_pieces(player_id)
            for player_id in range(1, player_count + 1)
        }

    def empty_cells(self) -> list[Square]:
        return [
            Square(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.cells[row][col] == EMPTY
        ]

    def snapshot(self) -> Rows:
        """Independent copy of the grid. Callers can never reach the live cells through it."""
        return [list(row) for row in self.cells]

    def cells_in_direction(
        self, row: int, col: int, d_row: int, d_col: int
    ) -> Iterator[Cell]:
        """
        Walk from just past (row, col) towards the edge of the board
        ---

        Lazy: the caller can stop as soon as it found what it was looking for.
        The walk ends at the edge of the board.
        """
        square = Square(row, col).shifted((d_row, d_col))
        while square.is_within_bounds():
            yield Cell(square, self.cells[square.row][square.col])
            square = square.shifted((d_row, d_col))

    def render(self) -> str:
        """Text dump of the board (debug logging)."""
        header = "   " + " ".join(str(col) for col in range(BOARD_SIZE))
        lines = [header]
        for row_idx, row in enumerate(self.cells):
            values = " ".join("." if value == EMPTY else str(value) for value in row)
            lines.append(f"{row_idx:>2} {values}")
        return "\n".join(lines)
