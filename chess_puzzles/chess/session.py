"""
The PuzzleSession will be the entrypoint into the domain layer for the service layer.
It holds the one board of an active puzzle and is the only object that mutates it:
a click on a square (toggle) either removes the piece standing there, or tries to place the selected piece.

Everything the presentation layer shows (masks, counters, solved flag) is pulled with `query()`,
which works on a snapshot of the board.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from chess_puzzles.chess.board import Board
from chess_puzzles.chess.coverage import (
    CoverageReport,
    Mask,
    covered_squares,
    is_optimal,
    is_solved,
    threatened_squares,
    to_mask,
)
from chess_puzzles.chess.modes import PuzzleMode
from chess_puzzles.chess.pieces import Piece, parse_piece_type
from chess_puzzles.chess.requirements import DEFAULT_REQUIREMENTS, PuzzleRequirements
from chess_puzzles.chess.square import Square
from chess_puzzles.chess.validation import (
    can_place,
    conflicting_squares,
    count_valid_pieces,
)
from chess_puzzles.core.exceptions import (
    InvalidLayoutError,
    ModeMismatchError,
    PuzzleModeError,
)
from chess_puzzles.core.models import PuzzleModel
from chess_puzzles.core.shared_types import PieceType, Rule, Status, Team, ToggleAction

logger = logging.getLogger(__name__)

FIRST_TEAM = Team.WHITE


def other_team(team: Team) -> Team:
    return Team.BLACK if team == Team.WHITE else Team.WHITE


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a single click. A rejected placement is a normal outcome: nothing changed."""

    action: ToggleAction
    square: Square
    piece: Optional[Piece]
    counts: dict[PieceType, int]
    team_counts: dict[Team, dict[PieceType, int]]
    next_team: Optional[Team]
    coverage: Optional[CoverageReport]

    @property
    def accepted(self) -> bool:
        return self.action != ToggleAction.REJECTED


@dataclass(frozen=True)
class PuzzleSnapshot:
    """Everything the presentation layer needs to draw the puzzle. Computed from a copy of the board."""

    size: int
    mode: PuzzleMode
    status: Status
    layout: str
    selected_piece: PieceType
    selected_team: Optional[Team]
    counts: dict[PieceType, int]
    team_counts: dict[Team, dict[PieceType, int]]
    valid_counts: dict[PieceType, int]
    required_counts: dict[PieceType, Optional[int]]
    conflicts: list[Square]
    threatened_mask: Mask
    covered_mask: Mask
    coverage: CoverageReport
    solved: bool
    optimal: bool

    @property
    def total_pieces(self) -> int:
        return sum(self.counts.values())


@dataclass
class PuzzleSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    mode: PuzzleMode
    selected_piece: PieceType
    selected_team: Optional[Team] = None
    status: Status = Status.CONFIGURED
    requirements: PuzzleRequirements = DEFAULT_REQUIREMENTS
    # caches of the board occupancy, rebuilt after every change
    counts: dict[PieceType, int] = field(init=False)
    team_counts: dict[Team, dict[PieceType, int]] = field(init=False)

    def __post_init__(self):
        self._recount()

    @classmethod
    def initialize(
        cls,
        size: int,
        mode: PuzzleMode,
        requirements: PuzzleRequirements = DEFAULT_REQUIREMENTS,
    ) -> Self:
        """Start a puzzle on an empty board"""
        session = cls(
            board=Board.empty(size),
            mode=mode,
            selected_piece=mode.default_piece,
            selected_team=FIRST_TEAM if mode.is_team else None,
            requirements=requirements,
        )
        logger.info("New %s puzzle on a %dx%d board", session._describe_mode(), size, size)
        return session

    @classmethod
    def from_model(
        cls, model: PuzzleModel, requirements: PuzzleRequirements = DEFAULT_REQUIREMENTS
    ) -> Self:
        """Define how to construct a session from the information the Service layer actually has"""

        # Validation
        if model.rule not in [rule.value for rule in Rule]:
            raise PuzzleModeError(
                f"Invalid puzzle rule: {model.rule!r}. \nPick one from {', '.join(Rule)}"
            )
        if model.status not in [status.value for status in Status]:
            raise PuzzleModeError(
                f"Invalid status: {model.status!r}. \nPick one from {', '.join(Status)}"
            )

        piece_type = parse_piece_type(model.piece_type) if model.piece_type else None
        mode = PuzzleMode(Rule(model.rule), piece_type)
        board = Board.from_layout(model.layout, with_teams=mode.is_team)
        if board.size != model.size:
            raise InvalidLayoutError(
                f"Layout describes a {board.size}x{board.size} board, expected size {model.size}."
            )
        if mode.is_single_kind and any(
            piece.type != mode.piece_type for piece in board.position.values()
        ):
            raise InvalidLayoutError(
                f"Layout {model.layout!r} holds other pieces than {mode.piece_type}."
            )

        session = cls(
            board=board,
            mode=mode,
            selected_piece=mode.default_piece,
            selected_team=FIRST_TEAM if mode.is_team else None,
            status=Status(model.status),
            requirements=requirements,
        )
        session.select_piece(parse_piece_type(model.selected_piece))
        if mode.is_team and model.selected_team:
            session.select_team(Team(model.selected_team))
        return session

    def to_model(self) -> PuzzleModel:
        """Encode back into a format the Service layer uses"""
        return PuzzleModel(
            size=self.board.size,
            rule=self.mode.rule.value,
            piece_type=self.mode.piece_type.value if self.mode.piece_type else None,
            layout=self.board.to_layout(),
            selected_piece=self.selected_piece.value,
            selected_team=self.selected_team.value if self.selected_team else None,
            status=self.status.value,
        )

    @property
    def size(self) -> int:
        return self.board.size

    def toggle(self, row: int, col: int) -> ToggleResult:
        """
        Click on a square
        -----

        * occupied square: the piece is removed. Always allowed.
        * empty square: place the selected piece if the puzzle's rule allows it, otherwise nothing happens.
          In team mode the other team gets selected after a successful placement.

        Raises OutOfBoundsError for coordinates outside the board.
        """
        square = Square(row, col)
        existing = self.board.piece(square)

        if existing is not None:
            self.board.remove(square)
            self._recount()
            self._change_status(Status.ACTIVE)
            logger.debug("Removed %s from %s", existing.type, square)
            return self._toggle_result(ToggleAction.REMOVED, square, existing)

        piece = Piece(self.selected_piece, self.selected_team)
        if not self._can_place(square, piece.type):
            logger.debug("Rejected %s on %s", piece.type, square)
            return self._toggle_result(ToggleAction.REJECTED, square, piece)

        self.board.place(square, piece)
        self._recount()
        self._change_status(Status.ACTIVE)
        if self.selected_team is not None:
            self.selected_team = other_team(self.selected_team)
        logger.debug("Placed %s on %s", piece.type, square)
        return self._toggle_result(ToggleAction.PLACED, square, piece)

    def reset(self) -> None:
        """Same size, same puzzle, empty board"""
        self._clear_board(self.size)
        logger.info("Reset %s puzzle", self._describe_mode())

    def change_size(self, new_size: int) -> None:
        """A new board size means a new puzzle: placements are discarded"""
        self._clear_board(new_size)
        logger.info("Board size changed to %dx%d", new_size, new_size)

    def change_mode(self, mode: PuzzleMode) -> None:
        """Switching puzzles discards the placements as well"""
        self.mode = mode
        self.selected_piece = mode.default_piece
        self._clear_board(self.size)
        logger.info("Switched to %s puzzle", self._describe_mode())

    def select_piece(self, piece_type: PieceType) -> None:
        """Pick the kind placed by the next click. Single-kind puzzles only accept their own kind."""
        if self.mode.is_single_kind and piece_type != self.mode.piece_type:
            raise ModeMismatchError(
                f"Cannot select {piece_type} in a {self._describe_mode()} puzzle."
            )
        self.selected_piece = piece_type

    def select_team(self, team: Team) -> None:
        if not self.mode.is_team:
            raise ModeMismatchError(
                f"Teams are only used in {Rule.DOMINATION_TEAM} puzzles, not in {self._describe_mode()}."
            )
        self.selected_team = team

    def query(self) -> PuzzleSnapshot:
        """Pull all derived state at once, from a snapshot of the board"""
        board = self.board.snapshot()
        valid_counts = count_valid_pieces(board)
        return PuzzleSnapshot(
            size=board.size,
            mode=self.mode,
            status=self.status,
            layout=board.to_layout(),
            selected_piece=self.selected_piece,
            selected_team=self.selected_team,
            counts=board.count_pieces(),
            team_counts=board.count_team_pieces(),
            valid_counts=valid_counts,
            required_counts=self.required_counts(),
            conflicts=conflicting_squares(board),
            threatened_mask=to_mask(board.size, threatened_squares(board)),
            covered_mask=to_mask(board.size, covered_squares(board)),
            coverage=CoverageReport.from_board(board),
            solved=is_solved(board, self.mode, self.requirements, valid_counts),
            optimal=is_optimal(board, self.mode, self.requirements),
        )

    def required_counts(self) -> dict[PieceType, Optional[int]]:
        """Target counts of the active puzzle. None: no target known for this board size."""
        piece_type = self.mode.piece_type
        if self.mode.rule == Rule.INDEPENDENT:
            return {piece_type: self.requirements.independent_count(piece_type, self.size)}
        if self.mode.rule == Rule.DOMINATION:
            return {piece_type: self.requirements.domination_count(piece_type, self.size)}
        if self.mode.rule == Rule.INDEPENDENT_MIXED:
            return {kind: self.requirements.mixed_count(kind) for kind in PieceType}
        # no targets for the team puzzle
        return {}

    # -- PRIVATE HELPERS ---
    def _can_place(self, square: Square, piece_type: PieceType) -> bool:
        """The rule of the puzzle + the limited supply of the mixed chess set"""
        if self.mode.rule == Rule.INDEPENDENT_MIXED and self.counts[
            piece_type
        ] >= self.requirements.mixed_count(piece_type):
            return False
        return can_place(self.board, square, piece_type, self.mode)

    def _toggle_result(
        self, action: ToggleAction, square: Square, piece: Optional[Piece]
    ) -> ToggleResult:
        coverage = (
            CoverageReport.from_board(self.board) if self.mode.is_domination else None
        )
        return ToggleResult(
            action=action,
            square=square,
            piece=piece,
            counts=dict(self.counts),
            team_counts={team: dict(c) for team, c in self.team_counts.items()},
            next_team=self.selected_team,
            coverage=coverage,
        )

    def _clear_board(self, size: int) -> None:
        self.board = Board.empty(size)
        self.selected_team = FIRST_TEAM if self.mode.is_team else None
        self._recount()
        self._change_status(Status.CONFIGURED)

    def _recount(self) -> None:
        self.counts = self.board.count_pieces()
        self.team_counts = self.board.count_team_pieces()

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status

    def _describe_mode(self) -> str:
        if self.mode.piece_type is None:
            return self.mode.rule.value
        return f"{self.mode.rule.value} {self.mode.piece_type.value}"
