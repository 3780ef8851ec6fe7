"""
Geometry of the attack rules

Key idea: Use strategy pattern to define the attacked squares for each piece type.

Only raw reachability is computed here (there are no colors / captures in the puzzles):
* stepping pieces (pawn, knight, king) attack a fixed set of offsets
* sliding pieces (bishop, rook, queen) attack along rays that stop at the first occupied square

Whether a placement is allowed is decided later by validation.py
"""

from typing import Callable, Optional, Protocol

from chess_puzzles.chess.pieces import Piece
from chess_puzzles.chess.square import Square
from chess_puzzles.core.exceptions import OutOfBoundsError, UnknownPieceError
from chess_puzzles.core.shared_types import PieceType


class Board(Protocol):
    """Just the parts the attack strategies need"""

    size: int

    def piece(self, square: Square) -> Optional[Piece]: ...
    def contains(self, square: Square) -> bool: ...
    def occupied_squares(self) -> list[Square]: ...


Vector = tuple[int, int]

# (d_row, d_col)
ORTHOGONALS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (1, 2),
    (-1, 2),
    (-2, 1),
    (-2, -1),
    (-1, -2),
    (1, -2),
    (2, -1),
]
KING_DELTAS: list[Vector] = ORTHOGONALS + DIAGONALS
# pawns only attack "up" the board, towards row 0
PAWN_DELTAS: list[Vector] = [(-1, -1), (-1, 1)]


def raycasting_attack(
    square: Square, board: Board, directions: list[Vector]
) -> set[Square]:
    """
    Raycasting algorithm
    -----

    ---
    Walk along every direction one square at a time until we hit another piece or the edge of the board.
    The first occupied square found is attacked as well, but the ray does not continue past it.

    NOTE: the origin square itself is never looked at, so this also works for a piece that is only
    being considered for placement (its square is still empty).
    """
    attacked: set[Square] = set()
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while board.contains(target_square):
            attacked.add(target_square)
            if board.piece(target_square) is not None:
                break
            target_square = target_square.offset(d_row, d_col)
    return attacked


def single_step_attack(square: Square, board: Board, deltas: list[Vector]) -> set[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that only reach a fixed set of squares"""
    return {
        target_square
        for target_square in (square.offset(d_row, d_col) for d_row, d_col in deltas)
        if board.contains(target_square)
    }


def pawn_attacks(square: Square, board: Board) -> set[Square]:
    """A pawn takes diagonally forward. On row 0 it attacks nothing."""
    return single_step_attack(square, board, PAWN_DELTAS)


def knight_attacks(square: Square, board: Board) -> set[Square]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_attack(square, board, KNIGHT_DELTAS)


def bishop_attacks(square: Square, board: Board) -> set[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_attack(square, board, DIAGONALS)


def rook_attacks(square: Square, board: Board) -> set[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_attack(square, board, ORTHOGONALS)


def queen_attacks(square: Square, board: Board) -> set[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_attacks(square, board) | bishop_attacks(square, board)


def king_attacks(square: Square, board: Board) -> set[Square]:
    """The king reaches a single square in every direction."""
    return single_step_attack(square, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACK RULES ---
AttackFn = Callable[[Square, Board], set[Square]]
ATTACK_RULES: dict[PieceType, AttackFn] = {
    PieceType.PAWN: pawn_attacks,
    PieceType.KNIGHT: knight_attacks,
    PieceType.BISHOP: bishop_attacks,
    PieceType.ROOK: rook_attacks,
    PieceType.QUEEN: queen_attacks,
    PieceType.KING: king_attacks,
}


def attacks_from(board: Board, square: Square, piece_type: PieceType) -> set[Square]:
    """
    Squares a piece of the given type standing on `square` attacks, given the current occupancy.

    Always computed from scratch: the result for sliding pieces depends on every other piece on the board.
    """
    if not board.contains(square):
        raise OutOfBoundsError(
            f"{square} lies outside of the {board.size}x{board.size} board."
        )
    if piece_type not in ATTACK_RULES:
        raise UnknownPieceError(f"No attack rule for piece type {piece_type!r}")
    attack_rule: AttackFn = ATTACK_RULES[piece_type]
    return attack_rule(square, board)


def attackers_of(board: Board, square: Square) -> list[Square]:
    """Occupied squares whose piece attacks `square`"""
    attackers: list[Square] = []
    for origin in board.occupied_squares():
        if origin == square:
            continue
        piece = board.piece(origin)
        if piece is not None and square in attacks_from(board, origin, piece.type):
            attackers.append(origin)
    return attackers
