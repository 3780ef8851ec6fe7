"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from chess_puzzles.chess.modes import SINGLE_KIND_RULES
from chess_puzzles.core.exceptions import InvalidRequestError
from chess_puzzles.core.shared_types import PieceType, Rule, Status, Team, ToggleAction

Coordinate = tuple[int, int]


def _validate_board_size(value: int) -> int:
    if value < 1:
        raise InvalidRequestError(f"Board size must be at least 1, got {value}.")
    return value


def _validate_rule_and_piece(rule: Rule, piece_type: Optional[PieceType]) -> None:
    """single-kind puzzles need a piece type, the others must not get one"""
    if rule in SINGLE_KIND_RULES and piece_type is None:
        raise InvalidRequestError(f"A {rule} puzzle needs a piece_type.")
    if rule not in SINGLE_KIND_RULES and piece_type is not None:
        raise InvalidRequestError(
            f"A {rule} puzzle does not take a piece_type (got {piece_type})."
        )


# --- REQUEST MODELS ---
class CreatePuzzleRequest(BaseModel):
    size: int
    rule: Rule
    piece_type: Optional[PieceType] = None

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: int) -> int:
        return _validate_board_size(value)

    @model_validator(mode="after")
    def validate_piece_type(self) -> Self:
        _validate_rule_and_piece(self.rule, self.piece_type)
        return self


class ToggleRequest(BaseModel):
    puzzle_id: UUID
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        # the upper bound depends on the stored puzzle: checked by the domain layer
        if value < 0:
            raise InvalidRequestError(f"Coordinates cannot be negative, got {value}.")
        return value


class GetPuzzleRequest(BaseModel):
    puzzle_id: UUID


class ResetPuzzleRequest(BaseModel):
    puzzle_id: UUID


class DeletePuzzleRequest(BaseModel):
    puzzle_id: UUID


class ChangeSizeRequest(BaseModel):
    puzzle_id: UUID
    size: int

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: int) -> int:
        return _validate_board_size(value)


class ChangeModeRequest(BaseModel):
    puzzle_id: UUID
    rule: Rule
    piece_type: Optional[PieceType] = None

    @model_validator(mode="after")
    def validate_piece_type(self) -> Self:
        _validate_rule_and_piece(self.rule, self.piece_type)
        return self


class SelectPieceRequest(BaseModel):
    puzzle_id: UUID
    piece_type: PieceType


class SelectTeamRequest(BaseModel):
    puzzle_id: UUID
    team: Team


# --- RESPONSE MODELS ---
class PuzzleResponse(BaseModel):
    puzzle_id: UUID
    size: int
    rule: Rule
    piece_type: Optional[PieceType]
    status: Status
    layout: str
    selected_piece: PieceType
    selected_team: Optional[Team]
    counts: dict[PieceType, int]
    team_counts: dict[Team, dict[PieceType, int]]
    valid_counts: dict[PieceType, int]
    required_counts: dict[PieceType, Optional[int]]
    conflicts: list[Coordinate]
    threatened: list[list[bool]]
    covered: list[list[bool]]
    coverage_percentage: int
    solved: bool
    optimal: bool


class ToggleResponse(BaseModel):
    puzzle_id: UUID
    row: int
    col: int
    action: ToggleAction
    accepted: bool
    counts: dict[PieceType, int]
    team_counts: dict[Team, dict[PieceType, int]]
    next_team: Optional[Team]
    coverage_percentage: Optional[int]
