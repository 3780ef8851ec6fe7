"""
Derived board state: which squares are covered / threatened, and how much of the board that is.

Recomputed from scratch on every call. Fine for the board sizes the puzzles are played on.
"""

from dataclasses import dataclass
from typing import Optional, Self

from chess_puzzles.chess.attacks import attacks_from
from chess_puzzles.chess.board import Board
from chess_puzzles.chess.modes import PuzzleMode
from chess_puzzles.chess.requirements import PuzzleRequirements
from chess_puzzles.chess.square import Square
from chess_puzzles.chess.validation import count_valid_pieces
from chess_puzzles.core.shared_types import PieceType, Rule

Mask = list[list[bool]]


def attacked_squares(board: Board) -> set[Square]:
    """Union of the attack sets of all pieces on the board"""
    attacked: set[Square] = set()
    for square, piece in board.position.items():
        attacked |= attacks_from(board, square, piece.type)
    return attacked


def covered_squares(board: Board) -> set[Square]:
    """
    The dominated set: every occupied square plus everything attacked from it.

    In team mode both teams feed the same set (the board only has to be covered by either side).
    """
    return set(board.occupied_squares()) | attacked_squares(board)


def threatened_squares(board: Board) -> set[Square]:
    """Attacked squares that are still empty (what independence puzzles highlight)"""
    return attacked_squares(board) - set(board.occupied_squares())


def coverage_percentage(board: Board) -> int:
    # round half up, so 12.5 -> 13 (python's round() would give 12)
    covered = len(covered_squares(board))
    return (covered * 200 + board.size**2) // (2 * board.size**2)


def is_fully_covered(board: Board) -> bool:
    """
    Domination is won at a (rounded) coverage of 100 %.

    NOTE: from 15x15 on, a single uncovered square still rounds to 100 % and counts as covered.
    """
    return coverage_percentage(board) == 100


def to_mask(size: int, squares: set[Square]) -> Mask:
    return [[Square(row, col) in squares for col in range(size)] for row in range(size)]


@dataclass(frozen=True)
class CoverageReport:
    covered: int
    total: int
    percentage: int
    solved: bool

    @classmethod
    def from_board(cls, board: Board) -> Self:
        covered = len(covered_squares(board))
        percentage = coverage_percentage(board)
        return cls(
            covered=covered,
            total=board.size**2,
            percentage=percentage,
            solved=percentage == 100,
        )


# --- SOLVED / OPTIMAL ---
def is_solved(
    board: Board,
    mode: PuzzleMode,
    requirements: PuzzleRequirements,
    valid_counts: Optional[dict[PieceType, int]] = None,
) -> bool:
    """
    * independent: exactly the required number of the kind, none of them attacked
    * independent mixed: every kind of the chess set placed, and none of the pieces in conflict
    * domination (both variants): coverage percentage of 100
    """
    if mode.is_domination:
        return is_fully_covered(board)

    counts = board.count_pieces()
    valid = valid_counts if valid_counts is not None else count_valid_pieces(board)

    if mode.rule == Rule.INDEPENDENT_MIXED:
        return all(
            counts[piece_type] == valid[piece_type] == requirements.mixed_count(piece_type)
            for piece_type in PieceType
        )

    piece_type = mode.piece_type
    required = requirements.independent_count(piece_type, board.size)
    if required is None:
        return False
    return counts[piece_type] == valid[piece_type] == required


def is_optimal(board: Board, mode: PuzzleMode, requirements: PuzzleRequirements) -> bool:
    """Only single-kind domination puzzles have an optimal count to compare against"""
    if mode.rule != Rule.DOMINATION:
        return False

    required = requirements.domination_count(mode.piece_type, board.size)
    if required is None:
        return False
    placed = board.count_pieces()[mode.piece_type]
    return is_fully_covered(board) and placed == required

