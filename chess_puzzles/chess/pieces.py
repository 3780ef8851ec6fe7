"""Defines the kinds of chess pieces the puzzles are played with"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from chess_puzzles.core.exceptions import UnknownPieceError
from chess_puzzles.core.shared_types import PieceType, Team


class Movement(Enum):
    SLIDING = auto()
    STEPPING = auto()


MOVEMENT_CLASS: dict[PieceType, Movement] = {
    PieceType.PAWN: Movement.STEPPING,
    PieceType.KNIGHT: Movement.STEPPING,
    PieceType.BISHOP: Movement.SLIDING,
    PieceType.ROOK: Movement.SLIDING,
    PieceType.QUEEN: Movement.SLIDING,
    PieceType.KING: Movement.STEPPING,
}

LETTER_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_LETTER: dict[PieceType, str] = {
    value: key for key, value in LETTER_TO_PIECE.items()
}


def parse_piece_type(name: str) -> PieceType:
    """Accepts the enum value ('queen') as used by the API / DB layers"""
    try:
        return PieceType(name.lower())
    except ValueError as exc:
        raise UnknownPieceError(
            f"Unknown piece kind {name!r}. Pick one from {', '.join(PieceType)}"
        ) from exc


@dataclass(frozen=True)
class Piece:
    type: PieceType
    team: Optional[Team] = None

    @property
    def movement(self) -> Movement:
        return MOVEMENT_CLASS[self.type]

    @property
    def is_sliding(self) -> bool:
        return self.movement == Movement.SLIDING

    @classmethod
    def from_letter(cls, character: str, with_team: bool = False) -> Self:
        """
        Single-kind puzzles write every piece upper case.
        In team mode upper case is the white team, lower case the black team.
        """
        if character.lower() not in LETTER_TO_PIECE:
            raise UnknownPieceError(f"Cannot interpret {character!r} as a piece.")
        piece_type = LETTER_TO_PIECE[character.lower()]
        if not with_team:
            return cls(piece_type)
        team = Team.WHITE if character.isupper() else Team.BLACK
        return cls(piece_type, team)

    def to_letter(self) -> str:
        return (
            PIECE_TO_LETTER[self.type].lower()
            if self.team == Team.BLACK
            else PIECE_TO_LETTER[self.type].upper()
        )
