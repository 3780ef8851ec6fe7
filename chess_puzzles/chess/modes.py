"""The four puzzle families and the piece kind they are played with"""

from dataclasses import dataclass
from typing import Optional, Self

from chess_puzzles.core.exceptions import PuzzleModeError
from chess_puzzles.core.shared_types import PieceType, Rule

SINGLE_KIND_RULES = (Rule.INDEPENDENT, Rule.DOMINATION)
INDEPENDENCE_RULES = (Rule.INDEPENDENT, Rule.INDEPENDENT_MIXED)
DOMINATION_RULES = (Rule.DOMINATION, Rule.DOMINATION_TEAM)


@dataclass(frozen=True)
class PuzzleMode:
    rule: Rule
    piece_type: Optional[PieceType] = None

    def __post_init__(self):
        if self.rule in SINGLE_KIND_RULES and self.piece_type is None:
            raise PuzzleModeError(f"A {self.rule} puzzle needs a piece type.")
        if self.rule not in SINGLE_KIND_RULES and self.piece_type is not None:
            raise PuzzleModeError(
                f"A {self.rule} puzzle is played with several piece types, got {self.piece_type}."
            )

    @classmethod
    def independent(cls, piece_type: PieceType) -> Self:
        return cls(Rule.INDEPENDENT, piece_type)

    @classmethod
    def independent_mixed(cls) -> Self:
        return cls(Rule.INDEPENDENT_MIXED)

    @classmethod
    def domination(cls, piece_type: PieceType) -> Self:
        return cls(Rule.DOMINATION, piece_type)

    @classmethod
    def domination_team(cls) -> Self:
        return cls(Rule.DOMINATION_TEAM)

    @property
    def is_independence(self) -> bool:
        return self.rule in INDEPENDENCE_RULES

    @property
    def is_domination(self) -> bool:
        return self.rule in DOMINATION_RULES

    @property
    def is_single_kind(self) -> bool:
        return self.rule in SINGLE_KIND_RULES

    @property
    def is_team(self) -> bool:
        return self.rule == Rule.DOMINATION_TEAM

    @property
    def default_piece(self) -> PieceType:
        """Piece selected when a session starts"""
        if self.piece_type is not None:
            return self.piece_type
        return PieceType.PAWN if self.rule == Rule.INDEPENDENT_MIXED else PieceType.QUEEN
