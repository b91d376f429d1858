"""
A square (cell coordinate) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# The board is always 10x10.
BOARD_SIZE = 10

# cell values
EMPTY = 0
OUT_OF_BOUNDS = -1

Vector = tuple[int, int]


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def shifted(self, direction: Vector) -> Square:
        d_row, d_col = direction
        return Square(self.row + d_row, self.col + d_col)

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True)
class Cell:
    """A square together with the value found on it while walking the board."""

    square: Square
    value: int

    @property
    def row(self) -> int:
        return self.square.row

    @property
    def col(self) -> int:
        return self.square.col
