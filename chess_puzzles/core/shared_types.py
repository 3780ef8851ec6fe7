"""
Type definitions used across layers
"""

from enum import StrEnum


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class Team(StrEnum):
    """Only used by the team domination puzzle."""

    WHITE = "white"
    BLACK = "black"


class Rule(StrEnum):
    """The four puzzle families. Values double as the names used by the API and the DB."""

    INDEPENDENT = "independent"
    INDEPENDENT_MIXED = "independent mixed"
    DOMINATION = "domination"
    DOMINATION_TEAM = "domination team"


class Status(StrEnum):
    CONFIGURED = "configured"
    ACTIVE = "active"


class ToggleAction(StrEnum):
    PLACED = "placed"
    REMOVED = "removed"
    REJECTED = "rejected"
