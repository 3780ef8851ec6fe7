"""
Placement rules

* independence puzzles: a new piece may not stand on an attacked square, and may not attack any piece already on the board.
  Both directions are checked because the attack relation is not symmetric (pawns only attack upwards, sliding pieces can be blocked).
* domination puzzles: any empty square will do. Coverage is scored afterwards (see coverage.py), it is not a placement constraint.

All functions here are pure with respect to the board they are given.
"""

from chess_puzzles.chess.attacks import attackers_of, attacks_from
from chess_puzzles.chess.board import Board
from chess_puzzles.chess.modes import PuzzleMode
from chess_puzzles.chess.square import Square
from chess_puzzles.core.shared_types import PieceType


def is_attacked(board: Board, square: Square) -> bool:
    """Is the square in the line of sight of any piece on the board?"""
    return len(attackers_of(board, square)) > 0


def attacks_any_piece(board: Board, square: Square, piece_type: PieceType) -> bool:
    """Would a piece of this type standing on `square` attack another piece?"""
    return any(
        board.is_occupied(target) for target in attacks_from(board, square, piece_type)
    )


def is_independent_placement(
    board: Board, square: Square, piece_type: PieceType
) -> bool:
    """Mutual non-attack between the new piece and all the pieces already on the board"""
    return not is_attacked(board, square) and not attacks_any_piece(
        board, square, piece_type
    )


def can_place(
    board: Board, square: Square, piece_type: PieceType, mode: PuzzleMode
) -> bool:
    """Raises OutOfBoundsError for a square outside of the board. An occupied square is never available."""
    if board.is_occupied(square):
        return False

    if mode.is_domination:
        return True

    return is_independent_placement(board, square, piece_type)


def is_piece_valid(board: Board, square: Square) -> bool:
    """
    Would the piece on `square` still be allowed if it were placed last?

    Lift the piece off (on a copy of the board) and run the independence check for it.
    An empty square is trivially valid.
    """
    if not board.is_occupied(square):
        return True

    lifted = board.snapshot()
    piece = lifted.remove(square)
    return is_independent_placement(lifted, square, piece.type)


def conflicting_squares(board: Board) -> list[Square]:
    """Occupied squares whose piece attacks, or is attacked by, another piece"""
    return sorted(
        (square for square in board.occupied_squares() if not is_piece_valid(board, square)),
        key=lambda square: (square.row, square.col),
    )


def count_valid_pieces(board: Board) -> dict[PieceType, int]:
    """Per kind: the number of pieces that are not in conflict with any other piece"""
    conflicts = set(conflicting_squares(board))
    valid: dict[PieceType, int] = {piece_type: 0 for piece_type in PieceType}
    for square, piece in board.position.items():
        if square not in conflicts:
            valid[piece.type] += 1
    return valid
