"""
Custom exceptions.

Everything raised on purpose by this package derives from PuzzleError, so a caller can catch
a single type at the boundary. These signal contract violations by the caller.
A rejected placement is NOT an exception: it is reported as ToggleAction.REJECTED.
"""


class PuzzleError(Exception):
    """Top-level exception of the package."""


# --- DOMAIN ---
class OutOfBoundsError(PuzzleError):
    """Coordinates outside of [0, N) x [0, N)."""


class UnknownPieceError(PuzzleError):
    """Piece kind that has no attack rule (or an unreadable piece character)."""


class PuzzleModeError(PuzzleError):
    """Puzzle mode constructed with an inconsistent rule / piece type combination."""


class ModeMismatchError(PuzzleError):
    """Action not supported by the active puzzle mode (ex. selecting a team in a single-kind puzzle)."""


class InvalidLayoutError(PuzzleError):
    """Board layout string that cannot be parsed."""


class SquareOccupiedError(PuzzleError):
    """Tried to put a piece on a square that already holds one."""


class EmptySquareError(PuzzleError):
    """Tried to remove a piece from an empty square."""


# --- BOUNDARIES ---
class InvalidRequestError(PuzzleError):
    """
    Raised from pydantic validators.

    NOTE: must not derive from ValueError, otherwise pydantic wraps it into a ValidationError.
    """


class RepositoryError(PuzzleError):
    """Record not found / could not be stored."""


class ConfigError(PuzzleError):
    """Configuration file present but unusable."""
