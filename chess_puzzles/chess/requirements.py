"""
Required piece counts per puzzle.

This is configuration data, not derived by the engine: a board size missing from the tables
simply has no target (so it can never be solved / optimal). See core/config.py to load other tables.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional

from chess_puzzles.core.shared_types import PieceType

# keyed by board size
CountTable = dict[PieceType, dict[int, int]]

SIZES = (4, 5, 6, 7, 8)


def _by_size(*counts: int) -> dict[int, int]:
    return dict(zip(SIZES, counts))


# maximum number of mutually non-attacking pieces
INDEPENDENT_COUNTS: CountTable = {
    PieceType.QUEEN: _by_size(4, 5, 6, 7, 8),
    PieceType.ROOK: _by_size(4, 5, 6, 7, 8),
    PieceType.BISHOP: _by_size(6, 8, 10, 12, 14),
    PieceType.KNIGHT: _by_size(8, 13, 18, 25, 32),
    PieceType.KING: _by_size(4, 9, 9, 16, 16),
    PieceType.PAWN: _by_size(8, 15, 18, 28, 32),
}

# minimum number of pieces that cover every square
DOMINATION_COUNTS: CountTable = {
    PieceType.QUEEN: _by_size(2, 3, 3, 4, 5),
    PieceType.ROOK: _by_size(4, 5, 6, 7, 8),
    PieceType.BISHOP: _by_size(4, 5, 6, 7, 8),
    PieceType.KNIGHT: _by_size(4, 5, 8, 10, 12),
    PieceType.KING: _by_size(4, 4, 4, 9, 9),
    PieceType.PAWN: _by_size(8, 12, 18, 25, 28),
}

# the pieces of one side in a standard chess set
MIXED_SET: dict[PieceType, int] = {
    PieceType.PAWN: 8,
    PieceType.BISHOP: 2,
    PieceType.KNIGHT: 2,
    PieceType.ROOK: 2,
    PieceType.QUEEN: 1,
    PieceType.KING: 1,
}


@dataclass(frozen=True)
class PuzzleRequirements:
    independent: CountTable = field(default_factory=lambda: deepcopy(INDEPENDENT_COUNTS))
    domination: CountTable = field(default_factory=lambda: deepcopy(DOMINATION_COUNTS))
    mixed_set: dict[PieceType, int] = field(default_factory=lambda: dict(MIXED_SET))

    def independent_count(self, piece_type: PieceType, size: int) -> Optional[int]:
        return self.independent.get(piece_type, {}).get(size)

    def domination_count(self, piece_type: PieceType, size: int) -> Optional[int]:
        return self.domination.get(piece_type, {}).get(size)

    def mixed_count(self, piece_type: PieceType) -> int:
        return self.mixed_set.get(piece_type, 0)


DEFAULT_REQUIREMENTS = PuzzleRequirements()
