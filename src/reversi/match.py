"""
The Match class will be the entrypoint into the domain layer for the service layer (and for any presentation layer).
It is responsible for orchestrating players, board and rules into a playable match -->
every public action returns a result object, so callers never have to catch exceptions for illegal input.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Self

from src.core.config import get_settings
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    IllegalPassError,
    InvalidPlayerCountError,
    InvalidRequestError,
)
from src.core.models import MatchModel
from src.core.shared_types import Phase
from src.reversi.board import Board, Rows
from src.reversi.players import Player, PlayerRegistry
from src.reversi.rules import GameResult, Rules
from src.reversi.seeding import SeedingPolicy, default_layout
from src.reversi.square import EMPTY, Square

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MoveRecord:
    """One accepted placement. Passes are not recorded here."""

    player_id: int
    row: int
    col: int
    move_number: int
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "row": self.row,
            "col": self.col,
            "move_number": self.move_number,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            player_id=data["player_id"],
            row=data["row"],
            col=data["col"],
            move_number=data["move_number"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class MoveResult:
    success: bool
    message: str
    game_over: bool = False
    result: Optional[GameResult] = None
    current_player: Optional[Player] = None
    piece_counts: Optional[dict[int, int]] = None


@dataclass
class PassResult:
    success: bool
    message: str
    game_over: bool = False
    result: Optional[GameResult] = None
    current_player: Optional[Player] = None


@dataclass
class GameStats:
    total_moves: int
    current_turn: int
    pass_count: int
    piece_counts: dict[int, int]
    current_player: Optional[Player]
    phase: Phase
    player_count: int


@dataclass
class Match:
    # --- DOMAIN LAYER API CALLED BY SERVICE / PRESENTATION ---

    phase: Phase = Phase.SETUP
    registry: Optional[PlayerRegistry] = None
    board: Optional[Board] = None
    rules: Optional[Rules] = None
    current_player_index: int = 0
    pass_count: int = 0
    total_moves: int = 0
    move_log: list[MoveRecord] = field(default_factory=list)
    seeding: SeedingPolicy = default_layout

    @classmethod
    def start(cls, player_count: int, seeding: SeedingPolicy = default_layout) -> Self:
        """Create a match that is ready to be played. Raises InvalidPlayerCountError for a bad player count."""
        match = cls(seeding=seeding)
        match._build(player_count)
        return match

    @classmethod
    def from_model(cls, model: MatchModel) -> Self:
        """Define how to construct a Match from the information the Service layer actually has"""

        # Validation
        if model.phase not in {phase.value for phase in Phase}:
            raise GameStateError(
                f"Invalid phase: {model.phase!r}. \nPick one from {','.join(phase.value for phase in Phase)}"
            )
        phase = Phase(model.phase)
        if phase == Phase.SETUP:
            return cls()

        registry = PlayerRegistry.create(model.player_count)
        board = Board.from_rows(model.board)
        if any(value > model.player_count for row in model.board for value in row):
            raise InvalidRequestError(
                f"Board contains pieces of players beyond player {model.player_count}."
            )
        moves = [MoveRecord.from_dict(entry) for entry in model.moves]
        return cls(
            phase=phase,
            registry=registry,
            board=board,
            rules=Rules(board),
            current_player_index=model.current_player_index % model.player_count,
            pass_count=model.pass_count,
            total_moves=len(moves),
            move_log=moves,
        )

    def to_model(self) -> MatchModel:
        """Encode back into a format the Service layer uses"""
        return MatchModel(
            board=self.board_state(),
            player_count=self.player_count,
            current_player_index=self.current_player_index,
            pass_count=self.pass_count,
            phase=self.phase.value,
            moves=[record.to_dict() for record in self.move_log],
        )

    # --- PUBLIC API ---
    def init_game(self, player_count: int) -> bool:
        """
        (Re)start the match with `player_count` players.
        ---

        Returns False for a player count outside of 2..8. In that case nothing changes: a match in progress stays in progress.
        """
        try:
            self._build(player_count)
        except InvalidPlayerCountError as error:
            logger.warning("Cannot start match: %s", error)
            return False
        return True

    @property
    def player_count(self) -> int:
        return self.registry.player_count if self.registry else 0

    @property
    def result(self) -> Optional[GameResult]:
        """Only known once the match is finished"""
        if self.phase != Phase.FINISHED or self.rules is None:
            return None
        return self.rules.determine_winner(self.player_count)

    def current_player(self) -> Optional[Player]:
        if self.registry is None:
            return None
        return self.registry.at(self.current_player_index)

    def current_player_id(self) -> int:
        """0 if there is no current player"""
        player = self.current_player()
        return player.id if player else 0

    def current_player_valid_moves(self) -> list[Square]:
        player_id = self.current_player_id()
        if player_id == 0 or self.rules is None:
            return []
        return self.rules.valid_moves(player_id)

    def make_move(self, row: int, col: int) -> MoveResult:
        """
        Attempt to place a piece for the current player
        -----

        1. make sure the match is in progress and somebody is to move
        2. let the rules place the piece and flip the captured ones
        3. record the move / reset the pass counter
        4. check for the end of the match
        5. not over? --> next player
        """
        try:
            player_id = self._assert_turn_player()
            self._place_piece(row, col, player_id)
        except GameError as error:
            return MoveResult(success=False, message=str(error))

        self._record_move(row, col, player_id)
        self.pass_count = 0
        self._log_board()

        if self._nobody_can_move():
            result = self._finish()
            return MoveResult(
                success=True, message="Move played.", game_over=True, result=result
            )

        self._next_turn()
        return MoveResult(
            success=True,
            message="Move played.",
            game_over=False,
            current_player=self.current_player(),
            piece_counts=self._piece_counts(),
        )

    def pass_turn(self) -> PassResult:
        """
        The current player gives up their turn. Only allowed when they have no legal placement.
        ---

        The match ends once every player passed in a row, or when nobody can move at all anymore.
        """
        try:
            player_id = self._assert_turn_player()
            self._assert_must_pass(player_id)
        except GameError as error:
            return PassResult(success=False, message=str(error))

        logger.info("Player %d passed", player_id)
        self.pass_count += 1

        if self.pass_count >= self.player_count or self._nobody_can_move():
            result = self._finish()
            return PassResult(
                success=True, message="Passed.", game_over=True, result=result
            )

        self._next_turn()
        return PassResult(
            success=True,
            message="Passed.",
            game_over=False,
            current_player=self.current_player(),
        )

    def game_stats(self) -> GameStats:
        return GameStats(
            total_moves=self.total_moves,
            current_turn=self.total_moves + 1,
            pass_count=self.pass_count,
            piece_counts=self._piece_counts(),
            current_player=self.current_player(),
            phase=self.phase,
            player_count=self.player_count,
        )

    def board_state(self) -> Rows:
        if self.board is None:
            return Board.empty().snapshot()
        return self.board.snapshot()

    def move_history(self) -> list[MoveRecord]:
        return list(self.move_log)

    def reset_game(self) -> None:
        """Throw away players, board, rules and all counters. Back to setup."""
        self.phase = Phase.SETUP
        self.registry = None
        self.board = None
        self.rules = None
        self.current_player_index = 0
        self.pass_count = 0
        self.total_moves = 0
        self.move_log = []
        logger.info("Match reset")

    # -- PRIVATE HELPERS ---
    def _build(self, player_count: int) -> None:
        """Validate first, so a bad player count cannot break a match in progress."""
        registry = PlayerRegistry.create(player_count)
        board = Board.empty()
        board.setup_initial_pieces(player_count, self.seeding)

        self.registry = registry
        self.board = board
        self.rules = Rules(board)
        self.current_player_index = 0
        self.pass_count = 0
        self.total_moves = 0
        self.move_log = []
        self._change_phase(Phase.PLAYING)
        logger.info("Match started with %d players", player_count)
        self._log_board()

    def _assert_turn_player(self) -> int:
        if self.phase != Phase.PLAYING:
            raise GameStateError(f"Match is not in progress. phase: {self.phase}")
        player_id = self.current_player_id()
        if player_id == 0:
            raise GameStateError("There is no player to move.")
        return player_id

    def _assert_must_pass(self, player_id: int) -> None:
        # for the typechecker: a match in progress always has rules
        assert self.rules is not None
        if not self.rules.should_pass(player_id):
            raise IllegalPassError(
                f"Player {player_id} has a legal move and cannot pass."
            )

    def _place_piece(self, row: int, col: int, player_id: int) -> None:
        assert self.rules is not None and self.board is not None
        if not self.rules.make_move(row, col, player_id):
            raise IllegalMoveError(self._illegal_move_reason(row, col))

    def _illegal_move_reason(self, row: int, col: int) -> str:
        assert self.board is not None
        if not self.board.is_valid_position(row, col):
            return f"Square ({row}, {col}) is off the board."
        if self.board.cell(row, col) != EMPTY:
            return f"Square ({row}, {col}) is already occupied."
        return f"Placing on ({row}, {col}) captures nothing."

    def _record_move(self, row: int, col: int, player_id: int) -> None:
        record = MoveRecord(
            player_id=player_id,
            row=row,
            col=col,
            move_number=self.total_moves + 1,
            timestamp=utc_now(),
        )
        self.move_log.append(record)
        self.total_moves += 1
        logger.info(
            "Move %d: player %d placed at (%d, %d)",
            record.move_number,
            player_id,
            row,
            col,
        )

    def _nobody_can_move(self) -> bool:
        assert self.rules is not None
        return self.rules.is_game_over(self.player_count)

    def _finish(self) -> GameResult:
        assert self.rules is not None
        self._change_phase(Phase.FINISHED)
        result = self.rules.determine_winner(self.player_count)
        logger.info(
            "Match finished. winners: %s, draw: %s, pieces: %s",
            result.winners,
            result.is_draw,
            result.piece_counts,
        )
        return result

    def _next_turn(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % self.player_count
        logger.debug("Player %d to move", self.current_player_id())

    def _change_phase(self, new_phase: Phase) -> None:
        self.phase = new_phase

    def _piece_counts(self) -> dict[int, int]:
        if self.board is None:
            return {}
        return self.board.piece_counts(self.player_count)

    def _log_board(self) -> None:
        if (
            self.board is not None
            and get_settings().log_board
            and logger.isEnabledFor(logging.DEBUG)
        ):
            logger.debug("Board:\n%s", self.board.render())
