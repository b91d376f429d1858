"""Orchestration of communication from the calling layer to the match logic and storage layers (and the reverse direction)."""

import logging
from collections import defaultdict
from contextlib import contextmanager
from threading import Lock
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    ActionResponse,
    CreateMatchRequest,
    DeleteMatchRequest,
    GameResultResponse,
    GetMatchRequest,
    MatchResponse,
    MoveRecordResponse,
    MoveRequest,
    PassRequest,
    PlayerResponse,
    PreviewRequest,
    PreviewResponse,
    SquareResponse,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.core.exceptions import RepositoryError
from src.core.models import MatchModel
from src.db.repository import MatchRepository
from src.reversi.board import Board
from src.reversi.match import Match, MoveResult, PassResult
from src.reversi.players import Player, preview_players
from src.reversi.rules import GameResult
from src.reversi.seeding import preview_layout

logger = logging.getLogger(__name__)


class MatchService:
    """
    Orchestration of layers for any number of matches.

    The Match itself is single threaded. The service makes sure at most one move/pass per match is in flight.
    """

    def __init__(self, repository: MatchRepository) -> None:
        self.repo = repository
        self._locks: defaultdict[UUID, Lock] = defaultdict(Lock)
        self._locks_guard = Lock()

    # -- Calling layer logic ---
    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """Start a new match and store it."""
        match = Match.start(request.player_count)
        stored_match, match_id = self.repo.create_match(match.to_model())
        logger.info("Created match %s with %d players", match_id, request.player_count)
        return self._create_match_response(match_id, stored_match)

    def get_match(self, request: GetMatchRequest) -> MatchResponse:
        """Retrieve current match state (used by a polling frontend to find out whose turn it is)."""
        match_model = self._fetch_match(request.match_id)
        return self._create_match_response(request.match_id, match_model)

    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        """Legal placements of the player to move."""
        match = Match.from_model(self._fetch_match(request.match_id))
        return ValidMovesResponse(
            match_id=request.match_id,
            player=self._player_response(match.current_player()),
            valid_moves=[
                SquareResponse(row=square.row, col=square.col)
                for square in match.current_player_valid_moves()
            ],
        )

    def make_move(self, request: MoveRequest) -> ActionResponse:
        """Place a piece for the player to move. A rejected move is reported, not raised."""
        with self._locked_match(request.match_id) as match_model:
            match = Match.from_model(match_model)
            outcome = match.make_move(request.row, request.col)
            if outcome.success:
                self.repo.update_match(request.match_id, match.to_model())
        return self._create_action_response(request.match_id, outcome)

    def pass_turn(self, request: PassRequest) -> ActionResponse:
        """The player to move passes (only accepted when they have no legal move)."""
        with self._locked_match(request.match_id) as match_model:
            match = Match.from_model(match_model)
            outcome = match.pass_turn()
            if outcome.success:
                self.repo.update_match(request.match_id, match.to_model())
        return self._create_action_response(request.match_id, outcome)

    def preview(self, request: PreviewRequest) -> PreviewResponse:
        """Players and starting pieces for a player count. Nothing gets created or stored."""
        board = Board.empty()
        for square, player_id in preview_layout(request.player_count).items():
            board.set_piece(square.row, square.col, player_id)
        return PreviewResponse(
            player_count=request.player_count,
            players=[
                PlayerResponse(**player.to_dict())
                for player in preview_players(request.player_count)
            ],
            board=board.snapshot(),
        )

    def delete_match(self, request: DeleteMatchRequest) -> None:
        """Handle a request to delete a Match record."""
        with self._match_lock(request.match_id):
            self.repo.delete_match(request.match_id)
        self._forget_lock(request.match_id)

    # -- Internal helpers --
    def _match_lock(self, match_id: UUID) -> Lock:
        with self._locks_guard:
            return self._locks[match_id]

    def _forget_lock(self, match_id: UUID) -> None:
        with self._locks_guard:
            self._locks.pop(match_id, None)

    @contextmanager
    def _locked_match(self, match_id: UUID) -> Iterator[MatchModel]:
        """Hold the match's lock while the stored state is read, changed and written back."""
        with self._match_lock(match_id):
            try:
                match_model = self._fetch_match(match_id)
            except RepositoryError:
                # unknown ids must not leave a lock behind
                self._forget_lock(match_id)
                raise
            yield match_model

    def _fetch_match(self, match_id: UUID) -> MatchModel:
        """Attempt to find the match in the repository and raise error if it fails."""
        match_model = self.repo.get_match(match_id)
        if match_model is None:
            raise RepositoryError(f"Match with {match_id=} not found.")
        return match_model

    def _create_match_response(self, match_id: UUID, model: MatchModel) -> MatchResponse:
        """Convert info in MatchModel to a MatchResponse (for match with given ID.)"""
        match = Match.from_model(model)
        players = list(match.registry.players) if match.registry else []
        stats = match.game_stats()
        return MatchResponse(
            match_id=match_id,
            phase=match.phase,
            players=[PlayerResponse(**player.to_dict()) for player in players],
            current_player=self._player_response(stats.current_player),
            board=match.board_state(),
            piece_counts=stats.piece_counts,
            pass_count=stats.pass_count,
            move_history=[
                MoveRecordResponse(**record.to_dict()) for record in match.move_history()
            ],
            result=self._result_response(match.result),
        )

    def _create_action_response(
        self, match_id: UUID, outcome: MoveResult | PassResult
    ) -> ActionResponse:
        return ActionResponse(
            match_id=match_id,
            success=outcome.success,
            message=outcome.message,
            game_over=outcome.game_over,
            current_player=self._player_response(outcome.current_player),
            piece_counts=getattr(outcome, "piece_counts", None),
            result=self._result_response(outcome.result),
        )

    @staticmethod
    def _player_response(player: Optional[Player]) -> Optional[PlayerResponse]:
        if player is None:
            return None
        return PlayerResponse(**player.to_dict())

    @staticmethod
    def _result_response(result: Optional[GameResult]) -> Optional[GameResultResponse]:
        if result is None:
            return None
        return GameResultResponse(
            winners=result.winners,
            piece_counts=result.piece_counts,
            is_draw=result.is_draw,
        )
