"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from chess_puzzles.api.models import (
    ChangeModeRequest,
    ChangeSizeRequest,
    CreatePuzzleRequest,
    DeletePuzzleRequest,
    GetPuzzleRequest,
    PuzzleResponse,
    ResetPuzzleRequest,
    SelectPieceRequest,
    SelectTeamRequest,
    ToggleRequest,
    ToggleResponse,
)
from chess_puzzles.chess.modes import PuzzleMode
from chess_puzzles.chess.requirements import PuzzleRequirements
from chess_puzzles.chess.session import PuzzleSession
from chess_puzzles.core.config import load_requirements
from chess_puzzles.core.exceptions import RepositoryError
from chess_puzzles.core.models import PuzzleModel
from chess_puzzles.db.repository import PuzzleRepository

logger = logging.getLogger(__name__)


class PuzzleService:
    """Orchestration of layers for the puzzles."""

    def __init__(
        self,
        repository: PuzzleRepository,
        requirements: Optional[PuzzleRequirements] = None,
    ) -> None:
        """Without explicit requirements, the tables configured in the environment are used (see core/config.py)."""
        self.repo = repository
        self.requirements = requirements if requirements is not None else load_requirements()

    # -- API routes logic ---
    def create_puzzle(self, request: CreatePuzzleRequest) -> PuzzleResponse:
        """Start a new puzzle on an empty board."""

        mode = PuzzleMode(request.rule, request.piece_type)
        session = PuzzleSession.initialize(request.size, mode, self.requirements)

        stored_model, puzzle_id = self.repo.create_puzzle(session.to_model())
        logger.info("Created puzzle %s", puzzle_id)
        return self._create_puzzle_response(puzzle_id, stored_model)

    def get_puzzle(self, request: GetPuzzleRequest) -> PuzzleResponse:
        """
        Retrieve current puzzle state.
        ----
        Used by the frontend to redraw the board (masks, counters, solved flags).
        """
        model = self._fetch_puzzle(request.puzzle_id)
        return self._create_puzzle_response(request.puzzle_id, model)

    def toggle_square(self, request: ToggleRequest) -> ToggleResponse:
        """A click on a square. A rejected placement is not stored (nothing changed), only reported in the response."""

        session = self._load_session(request.puzzle_id)
        result = session.toggle(request.row, request.col)

        if result.accepted:
            self.repo.update_puzzle(request.puzzle_id, session.to_model())

        return ToggleResponse(
            puzzle_id=request.puzzle_id,
            row=request.row,
            col=request.col,
            action=result.action,
            accepted=result.accepted,
            counts=result.counts,
            team_counts=result.team_counts,
            next_team=result.next_team,
            coverage_percentage=(
                result.coverage.percentage if result.coverage is not None else None
            ),
        )

    def reset_puzzle(self, request: ResetPuzzleRequest) -> PuzzleResponse:
        session = self._load_session(request.puzzle_id)
        session.reset()
        return self._store(request.puzzle_id, session)

    def change_size(self, request: ChangeSizeRequest) -> PuzzleResponse:
        session = self._load_session(request.puzzle_id)
        session.change_size(request.size)
        return self._store(request.puzzle_id, session)

    def change_mode(self, request: ChangeModeRequest) -> PuzzleResponse:
        session = self._load_session(request.puzzle_id)
        session.change_mode(PuzzleMode(request.rule, request.piece_type))
        return self._store(request.puzzle_id, session)

    def select_piece(self, request: SelectPieceRequest) -> PuzzleResponse:
        session = self._load_session(request.puzzle_id)
        session.select_piece(request.piece_type)
        return self._store(request.puzzle_id, session)

    def select_team(self, request: SelectTeamRequest) -> PuzzleResponse:
        session = self._load_session(request.puzzle_id)
        session.select_team(request.team)
        return self._store(request.puzzle_id, session)

    def delete_puzzle(self, request: DeletePuzzleRequest) -> None:
        """Handle a request to delete a puzzle record."""
        if self.repo.delete_puzzle(request.puzzle_id) is None:
            raise RepositoryError(f"Puzzle with {request.puzzle_id=} not found.")
        logger.info("Deleted puzzle %s", request.puzzle_id)

    # -- Internal helpers --
    def _store(self, puzzle_id: UUID, session: PuzzleSession) -> PuzzleResponse:
        """Persist the session and return the fresh state"""
        model = session.to_model()
        self.repo.update_puzzle(puzzle_id, model)
        return self._create_puzzle_response(puzzle_id, model)

    def _create_puzzle_response(self, puzzle_id: UUID, model: PuzzleModel) -> PuzzleResponse:
        """Convert info in PuzzleModel to a PuzzleResponse (for puzzle with given ID.)"""
        snapshot = PuzzleSession.from_model(model, self.requirements).query()
        return PuzzleResponse(
            puzzle_id=puzzle_id,
            size=snapshot.size,
            rule=snapshot.mode.rule,
            piece_type=snapshot.mode.piece_type,
            status=snapshot.status,
            layout=snapshot.layout,
            selected_piece=snapshot.selected_piece,
            selected_team=snapshot.selected_team,
            counts=snapshot.counts,
            team_counts=snapshot.team_counts,
            valid_counts=snapshot.valid_counts,
            required_counts=snapshot.required_counts,
            conflicts=[(square.row, square.col) for square in snapshot.conflicts],
            threatened=snapshot.threatened_mask,
            covered=snapshot.covered_mask,
            coverage_percentage=snapshot.coverage.percentage,
            solved=snapshot.solved,
            optimal=snapshot.optimal,
        )

    def _load_session(self, puzzle_id: UUID) -> PuzzleSession:
        return PuzzleSession.from_model(self._fetch_puzzle(puzzle_id), self.requirements)

    def _fetch_puzzle(self, puzzle_id: UUID) -> PuzzleModel:
        """Attempt to find the puzzle in the repository and raise error if it fails."""
        model = self.repo.get_puzzle(puzzle_id)
        if model is None:
            raise RepositoryError(f"Puzzle with {puzzle_id=} not found.")
        return model
