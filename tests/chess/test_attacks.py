"""Unit tests for /chess_puzzles/chess/attacks.py"""

from typing import Callable
from unittest.mock import Mock, patch

import pytest

from chess_puzzles.chess.attacks import (
    DIAGONALS,
    ORTHOGONALS,
    attackers_of,
    attacks_from,
    bishop_attacks,
    king_attacks,
    knight_attacks,
    pawn_attacks,
    queen_attacks,
    raycasting_attack,
    rook_attacks,
    single_step_attack,
)
from chess_puzzles.chess.board import Board
from chess_puzzles.chess.square import Square
from chess_puzzles.core.exceptions import OutOfBoundsError, UnknownPieceError
from chess_puzzles.core.shared_types import PieceType

BoardFactory = Callable[[int, list[tuple[PieceType, int, int]]], Board]


def squares(*coordinates: tuple[int, int]) -> set[Square]:
    return {Square(row, col) for row, col in coordinates}


# --- GENERAL PROPERTIES ---
@pytest.mark.parametrize("piece_type", list(PieceType))
@pytest.mark.parametrize("size", range(1, 9))
def test_attacks_stay_on_board_and_skip_origin(piece_type: PieceType, size: int) -> None:
    """For every square of the board: never the origin, never outside of [0, N) x [0, N)"""
    board = Board.empty(size)
    for origin in board.squares():
        attacked = attacks_from(board, origin, piece_type)
        assert origin not in attacked
        assert all(square.is_within_bounds(size) for square in attacked)


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_single_square_board(piece_type: PieceType) -> None:
    """Nothing to attack on a 1x1 board"""
    assert attacks_from(Board.empty(1), Square(0, 0), piece_type) == set()


# --- SLIDING PIECES ---
def test_raycasting_empty_board() -> None:
    """On an empty board, rays are only restricted by the board edges"""
    board = Board.empty(8)
    attacked = raycasting_attack(Square(4, 0), board, [(0, 1), (0, -1)])
    assert attacked == {Square(4, col) for col in range(1, 8)}


def test_raycasting_stops_at_first_piece(board_with_pieces: BoardFactory) -> None:
    """The blocking square is attacked, anything behind it is not"""
    board = board_with_pieces(8, [(PieceType.PAWN, 0, 3)])
    attacked = raycasting_attack(Square(0, 0), board, [(0, 1)])
    assert attacked == squares((0, 1), (0, 2), (0, 3))


def test_rook_attacks_empty_board() -> None:
    board = Board.empty(8)
    attacked = rook_attacks(Square(3, 3), board)
    assert len(attacked) == 14
    assert all(square.row == 3 or square.col == 3 for square in attacked)


def test_bishop_attacks_from_corner() -> None:
    board = Board.empty(8)
    assert bishop_attacks(Square(0, 0), board) == {Square(i, i) for i in range(1, 8)}


@pytest.mark.parametrize(
    "origin, expected_count",
    [(Square(3, 3), 27), (Square(0, 0), 21), (Square(0, 3), 21)],
)
def test_queen_attacks_empty_board(origin: Square, expected_count: int) -> None:
    board = Board.empty(8)
    attacked = queen_attacks(origin, board)
    assert len(attacked) == expected_count
    assert attacked == rook_attacks(origin, board) | bishop_attacks(origin, board)


def test_sliding_pieces_are_blocked_in_every_direction(board_with_pieces: BoardFactory) -> None:
    """A queen boxed in by the 8 neighbouring pieces only attacks those 8 squares"""
    neighbours = [(2 + dr, 2 + dc) for dr, dc in ORTHOGONALS + DIAGONALS]
    board = board_with_pieces(5, [(PieceType.KNIGHT, row, col) for row, col in neighbours])
    assert queen_attacks(Square(2, 2), board) == squares(*neighbours)
    assert rook_attacks(Square(2, 2), board) == squares(*[(2 + dr, 2 + dc) for dr, dc in ORTHOGONALS])
    assert bishop_attacks(Square(2, 2), board) == squares(*[(2 + dr, 2 + dc) for dr, dc in DIAGONALS])


def test_blocking_depends_on_any_piece_kind(board_with_pieces: BoardFactory) -> None:
    """Pieces block rays regardless of their own kind"""
    for blocker in PieceType:
        board = board_with_pieces(4, [(blocker, 2, 0)])
        assert rook_attacks(Square(0, 0), board) == squares((0, 1), (0, 2), (0, 3), (1, 0), (2, 0))


# --- STEPPING PIECES ---
@pytest.mark.parametrize(
    "origin, expected",
    [
        (Square(0, 0), squares((1, 2), (2, 1))),
        (Square(3, 3), squares((1, 2), (1, 4), (2, 1), (2, 5), (4, 1), (4, 5), (5, 2), (5, 4))),
        (Square(7, 7), squares((5, 6), (6, 5))),
    ],
)
def test_knight_attacks(origin: Square, expected: set[Square]) -> None:
    assert knight_attacks(origin, Board.empty(8)) == expected


@pytest.mark.parametrize(
    "origin, expected_count",
    [(Square(0, 0), 3), (Square(0, 4), 5), (Square(4, 4), 8)],
)
def test_king_attacks(origin: Square, expected_count: int) -> None:
    attacked = king_attacks(origin, Board.empty(8))
    assert len(attacked) == expected_count
    assert all(
        max(abs(square.row - origin.row), abs(square.col - origin.col)) == 1
        for square in attacked
    )


@pytest.mark.parametrize(
    "origin, expected",
    [
        (Square(3, 3), squares((2, 2), (2, 4))),
        (Square(3, 0), squares((2, 1))),
        (Square(3, 7), squares((2, 6))),
        (Square(7, 4), squares((6, 3), (6, 5))),
        (Square(0, 4), set()),
    ],
)
def test_pawn_attacks_towards_row_zero(origin: Square, expected: set[Square]) -> None:
    """Pawns only attack up the board, and a pawn on the top row attacks nothing"""
    assert pawn_attacks(origin, Board.empty(8)) == expected


@pytest.mark.parametrize("piece_type", [PieceType.KNIGHT, PieceType.KING, PieceType.PAWN])
def test_stepping_pieces_ignore_occupancy(piece_type: PieceType, board_with_pieces: BoardFactory) -> None:
    """Filling the board around a stepping piece does not change its attack set"""
    origin = Square(3, 3)
    empty = attacks_from(Board.empty(7), origin, piece_type)
    crowded = board_with_pieces(
        7,
        [
            (PieceType.ROOK, row, col)
            for row in range(7)
            for col in range(7)
            if Square(row, col) != origin
        ],
    )
    assert attacks_from(crowded, origin, piece_type) == empty


def test_single_step_attack_drops_off_board_targets() -> None:
    board = Board.empty(3)
    assert single_step_attack(Square(0, 0), board, [(-1, 0), (0, -1), (1, 1)]) == squares((1, 1))


# --- STRATEGY PATTERN ---
@pytest.mark.parametrize("piece_type", list(PieceType))
def test_attacks_from_dispatches_on_piece_type(piece_type: PieceType) -> None:
    """attacks_from must look the rule up in ATTACK_RULES, and call only that one"""
    mock_rules = {kind: Mock(return_value=set()) for kind in PieceType}
    board = Board.empty(4)
    with patch.dict("chess_puzzles.chess.attacks.ATTACK_RULES", mock_rules):
        attacks_from(board, Square(1, 1), piece_type)

    mock_rules[piece_type].assert_called_once_with(Square(1, 1), board)
    for other_kind, mock in mock_rules.items():
        if other_kind != piece_type:
            mock.assert_not_called()


def test_attacks_from_unknown_piece() -> None:
    with pytest.raises(UnknownPieceError):
        attacks_from(Board.empty(4), Square(0, 0), "dragon")  # type: ignore[arg-type]


def test_attacks_from_outside_the_board() -> None:
    with pytest.raises(OutOfBoundsError):
        attacks_from(Board.empty(4), Square(4, 0), PieceType.ROOK)


def test_attackers_of(board_with_pieces: BoardFactory) -> None:
    """Every occupied square whose attack set contains the target"""
    board = board_with_pieces(
        4,
        [
            (PieceType.ROOK, 0, 0),
            (PieceType.KNIGHT, 2, 1),
            (PieceType.BISHOP, 3, 3),
        ],
    )
    assert set(attackers_of(board, Square(0, 2))) == {Square(0, 0), Square(2, 1)}
    assert Square(3, 3) in attackers_of(board, Square(2, 2))
    # a piece does not attack its own square
    assert Square(0, 0) not in attackers_of(board, Square(0, 0))
