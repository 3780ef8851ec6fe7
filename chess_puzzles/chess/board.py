"""The puzzle board: an N x N grid where every square holds at most one piece"""

from collections import Counter
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from chess_puzzles.chess.layout import encode_layout, parse_layout
from chess_puzzles.chess.pieces import Piece
from chess_puzzles.chess.square import Square
from chess_puzzles.core.exceptions import (
    EmptySquareError,
    OutOfBoundsError,
    SquareOccupiedError,
)
from chess_puzzles.core.shared_types import PieceType, Team


@dataclass
class Board:
    size: int
    # only occupied squares are stored: a missing key is an empty square
    position: dict[Square, Piece] = field(default_factory=dict)

    def __post_init__(self):
        if self.size < 1:
            raise OutOfBoundsError(f"Board size must be at least 1, got {self.size}")
        for square in self.position:
            self._assert_within_bounds(square)

    @classmethod
    def empty(cls, size: int) -> Self:
        return cls(size)

    @classmethod
    def from_layout(cls, layout: str, with_teams: bool = False) -> Self:
        """Construct a board from a layout string (see layout.py)

        ex. 8-queens solution:
        Q7/4Q3/7Q/5Q2/2Q5/6Q1/1Q6/3Q4
        """
        size, position = parse_layout(layout, with_teams)
        return cls(size, position)

    def to_layout(self) -> str:
        return encode_layout(self.size, self.position)

    def squares(self) -> Iterator[Square]:
        """All squares, row by row"""
        for row in range(self.size):
            for col in range(self.size):
                yield Square(row, col)

    def contains(self, square: Square) -> bool:
        return square.is_within_bounds(self.size)

    def piece(self, square: Square) -> Optional[Piece]:
        self._assert_within_bounds(square)
        return self.position.get(square)

    def is_occupied(self, square: Square) -> bool:
        return self.piece(square) is not None

    def occupied_squares(self) -> list[Square]:
        return list(self.position.keys())

    def locate_pieces(
        self, piece_type: PieceType, team: Optional[Team] = None
    ) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece.type == piece_type and (team is None or piece.team == team)
        ]

    def place(self, square: Square, piece: Piece) -> None:
        if self.is_occupied(square):
            raise SquareOccupiedError(f"{square} already holds {self.position[square]}")
        self.position[square] = piece

    def remove(self, square: Square) -> Piece:
        if not self.is_occupied(square):
            raise EmptySquareError(f"No piece to remove on {square}")
        return self.position.pop(square)

    def snapshot(self) -> Self:
        """Independent copy: later changes to this board do not leak into the copy"""
        return deepcopy(self)

    def count_pieces(self) -> dict[PieceType, int]:
        """Number of pieces per kind (every kind present, zero if not on the board)"""
        tally = Counter(piece.type for piece in self.position.values())
        return {piece_type: tally[piece_type] for piece_type in PieceType}

    def count_team_pieces(self) -> dict[Team, dict[PieceType, int]]:
        """Same tally as `count_pieces`, split per team"""
        tally = Counter(
            (piece.team, piece.type)
            for piece in self.position.values()
            if piece.team is not None
        )
        return {
            team: {piece_type: tally[(team, piece_type)] for piece_type in PieceType}
            for team in Team
        }

    def _assert_within_bounds(self, square: Square) -> None:
        if not square.is_within_bounds(self.size):
            raise OutOfBoundsError(
                f"{square} lies outside of the {self.size}x{self.size} board."
            )
