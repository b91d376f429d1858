"""
Capturing rules of the game

Key idea: a placement is legal when it brackets at least one run of opposing pieces.
We use raycasting along the 8 directions: walk away from the placed piece until we hit an empty square,
the edge of the board, or one of our own pieces.

Rules never own the board: Match decides which Board they are bound to.
"""

import logging
from dataclasses import dataclass

from src.reversi.board import Board
from src.reversi.square import BOARD_SIZE, EMPTY, Square, Vector

logger = logging.getLogger(__name__)

DIRECTIONS: tuple[Vector, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)  # fmt: skip


@dataclass
class GameResult:
    """Outcome of a finished match. Every player tied for the most pieces is a winner."""

    winners: list[int]
    piece_counts: dict[int, int]
    is_draw: bool


class Rules:
    def __init__(self, board: Board) -> None:
        self.board = board

    # --- LEGALITY ---
    def is_valid_move(self, row: int, col: int, player_id: int) -> bool:
        # also rejects squares off the board (cell returns -1 there)
        if self.board.cell(row, col) != EMPTY:
            return False
        return any(
            self.can_flip_in_direction(row, col, direction, player_id)
            for direction in DIRECTIONS
        )

    def can_flip_in_direction(
        self, row: int, col: int, direction: Vector, player_id: int
    ) -> bool:
        """True if the ray is a run of >= 1 opposing pieces closed off by one of your own pieces."""
        return bool(self._bracketed_squares(row, col, direction, player_id))

    def valid_moves(self, player_id: int) -> list[Square]:
        """All legal placements, in row-major order."""
        return [
            Square(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.is_valid_move(row, col, player_id)
        ]

    # --- CAPTURING ---
    def make_move(self, row: int, col: int, player_id: int) -> bool:
        """
        Place the piece and flip every bracketed run
        ---

        1. illegal placement? --> nothing happens
        2. place the piece
        3. for each direction (independently): flip the opposing pieces up to (not including) the bracketing piece

        NOTE the runs to flip are determined before anything is flipped, so the order of the directions does not matter.
        """
        if not self.is_valid_move(row, col, player_id):
            logger.debug("Rejected move (%d, %d) for player %d", row, col, player_id)
            return False

        runs = self._flippable_runs(row, col, player_id)
        self.board.place_piece(row, col, player_id)

        total_flipped = 0
        for direction, run in runs.items():
            for square in run:
                self.board.set_piece(square.row, square.col, player_id)
            logger.debug("Direction %s: flipped %d piece(s)", direction, len(run))
            total_flipped += len(run)

        logger.debug(
            "Player %d placed at (%d, %d) and flipped %d piece(s)",
            player_id,
            row,
            col,
            total_flipped,
        )
        return True

    def simulate_move(self, row: int, col: int, player_id: int) -> int:
        """Number of pieces make_move would flip (0 if illegal). Never touches the board."""
        if not self.is_valid_move(row, col, player_id):
            return 0
        return sum(len(run) for run in self._flippable_runs(row, col, player_id).values())

    # --- END OF GAME ---
    def should_pass(self, player_id: int) -> bool:
        return not self.valid_moves(player_id)

    def is_game_over(self, player_count: int) -> bool:
        """Nobody can place a piece anymore (regardless of whose turn it is)."""
        return all(
            self.should_pass(player_id) for player_id in range(1, player_count + 1)
        )

    def determine_winner(self, player_count: int) -> GameResult:
        piece_counts = self.board.piece_counts(player_count)
        max_count = max(piece_counts.values(), default=0)
        winners = [
            player_id for player_id, count in piece_counts.items() if count == max_count
        ]
        return GameResult(
            winners=winners, piece_counts=piece_counts, is_draw=len(winners) > 1
        )

    # -- PRIVATE HELPERS ---
    def _bracketed_squares(
        self, row: int, col: int, direction: Vector, player_id: int
    ) -> list[Square]:
        """
        Raycast from (row, col)
        ---

        * empty square before reaching your own piece --> nothing to flip
        * edge of the board before reaching your own piece --> nothing to flip
        * your own piece right away --> nothing to flip
        * otherwise: all squares passed before reaching your own piece
        """
        passed: list[Square] = []
        for cell in self.board.cells_in_direction(row, col, *direction):
            if cell.value == EMPTY:
                return []
            if cell.value == player_id:
                return passed
            passed.append(cell.square)
        return []

    def _flippable_runs(
        self, row: int, col: int, player_id: int
    ) -> dict[Vector, list[Square]]:
        runs: dict[Vector, list[Square]] = {}
        for direction in DIRECTIONS:
            run = self._bracketed_squares(row, col, direction, player_id)
            if run:
                runs[direction] = run
        return runs
