"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chess_puzzles.chess.board import Board
from chess_puzzles.chess.pieces import Piece
from chess_puzzles.chess.square import Square
from chess_puzzles.core.shared_types import PieceType
from chess_puzzles.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def board_with_pieces() -> Callable[[int, list[tuple[PieceType, int, int]]], Board]:
    """Call the inner function with the board size and a list of (piece type, row, col)"""

    def _create_board(size: int, pieces: list[tuple[PieceType, int, int]]) -> Board:
        board = Board.empty(size)
        for piece_type, row, col in pieces:
            board.place(Square(row, col), Piece(piece_type))
        return board

    return _create_board
