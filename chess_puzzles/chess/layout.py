"""
Text encoding of the pieces on a board (the "layout").

Borrowed from the board part of a FEN string, generalized to N x N boards:

* rows are listed top (row 0) to bottom, separated by slashes
* a letter is a piece: p, n, b, r, q, k
* a number is a run of empty squares. Can be more than one digit on boards wider than 9.

ex) 4 rooks on the diagonal of a 4x4 board: R3/1R2/2R1/3R

In single-kind puzzles every piece is written upper case.
In team mode upper case letters are the white team and lower case the black team.
"""

import re

from chess_puzzles.chess.pieces import LETTER_TO_PIECE, Piece
from chess_puzzles.chess.square import Square
from chess_puzzles.core.exceptions import InvalidLayoutError

ROW_SEPARATOR = "/"
_TOKEN = re.compile(r"\d+|[a-zA-Z]")


def empty_layout(size: int) -> str:
    return ROW_SEPARATOR.join([str(size)] * size)


def _row_tokens(row: str) -> list[str]:
    """split a row into letters and (possibly multi-digit) numbers"""
    tokens = _TOKEN.findall(row)
    if "".join(tokens) != row:
        raise InvalidLayoutError(f"Unexpected character in layout row {row!r}")
    return tokens


def _row_length(tokens: list[str]) -> int:
    return sum(int(token) if token.isdigit() else 1 for token in tokens)


def is_valid_layout(layout: str) -> bool:
    """
    Check if the string describes a square board.
    """
    rows = layout.split(ROW_SEPARATOR)
    size = len(rows)
    for row in rows:
        try:
            tokens = _row_tokens(row)
        except InvalidLayoutError:
            return False

        if not tokens:
            return False

        for token in tokens:
            if token.isdigit() and int(token) == 0:
                return False
            if token.isalpha() and token.lower() not in LETTER_TO_PIECE:
                return False

        if _row_length(tokens) != size:
            return False

    return True


def parse_layout(layout: str, with_teams: bool = False) -> tuple[int, dict[Square, Piece]]:
    """Returns the board size and the occupied squares"""
    if not is_valid_layout(layout):
        raise InvalidLayoutError(f"Cannot interpret supplied string as a layout: {layout!r}")

    rows = layout.split(ROW_SEPARATOR)
    position: dict[Square, Piece] = {}
    for row_idx, row in enumerate(rows):
        col = 0
        for token in _row_tokens(row):
            if token.isdigit():
                col += int(token)
                continue
            position[Square(row_idx, col)] = Piece.from_letter(token, with_teams)
            col += 1
    return len(rows), position


def encode_layout(size: int, position: dict[Square, Piece]) -> str:
    """Reverse operation of `parse_layout`"""
    return ROW_SEPARATOR.join(_encode_row(size, row, position) for row in range(size))


def _encode_row(size: int, row: int, position: dict[Square, Piece]) -> str:
    characters: list[str] = []
    empty_count = 0
    for col in range(size):
        piece = position.get(Square(row, col))
        if piece is None:
            empty_count += 1
            continue
        if empty_count > 0:
            characters.append(str(empty_count))
            empty_count = 0
        characters.append(piece.to_letter())

    # an entire empty row is still written as a number
    if empty_count > 0:
        characters.append(str(empty_count))
    return "".join(characters)
