"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from chess_puzzles.core.exceptions import OutOfBoundsError

# The puzzles are offered on 4x4 up to 8x8 boards, but nothing below depends on that.
DEFAULT_BOARD_SIZE = 8


@dataclass(frozen=True)
class Square:
    """Zero-based (row, col). Row 0 is the top of the board, which is where pawns attack towards."""

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str, size: int = DEFAULT_BOARD_SIZE) -> Square:
        """Algebraic notation on an N x N board: 'a1' is the bottom-left square, so (N-1, 0)"""
        file_char, rank_str = sq[:1], sq[1:]
        if not file_char or file_char not in ascii_lowercase[:size] or not rank_str.isdigit():
            raise OutOfBoundsError(f"{sq!r} is not a square on a {size}x{size} board.")
        square = cls(size - int(rank_str), ascii_lowercase.index(file_char))
        if not square.is_within_bounds(size):
            raise OutOfBoundsError(f"{sq!r} is not a square on a {size}x{size} board.")
        return square

    def to_algebraic(self, size: int = DEFAULT_BOARD_SIZE) -> str:
        if size > len(ascii_lowercase) or not self.is_within_bounds(size):
            raise OutOfBoundsError(
                f"{self} has no algebraic name on a {size}x{size} board."
            )
        return f"{ascii_lowercase[self.col]}{size - self.row}"

    def is_within_bounds(self, size: int) -> bool:
        return (0 <= self.row < size) and (0 <= self.col < size)

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)
