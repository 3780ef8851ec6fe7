"""Protocol repository (can implement later for SQL Alchemy / simple JSON files etc.)"""

from typing import Protocol
from uuid import UUID

from chess_puzzles.core.models import PuzzleModel


class PuzzleRepository(Protocol):
    """Persistence layer orchestration"""

    def get_puzzle(self, puzzle_id: UUID) -> PuzzleModel | None:
        """Get puzzle by ID, if record exists."""
        ...

    def create_puzzle(self, puzzle: PuzzleModel) -> tuple[PuzzleModel, UUID]:
        """Store new puzzle and return the stored data + newly created puzzle ID."""
        ...

    def update_puzzle(self, puzzle_id: UUID, puzzle: PuzzleModel) -> PuzzleModel | None:
        """Overwrite the state of an existing record."""
        ...

    def delete_puzzle(self, puzzle_id: UUID) -> PuzzleModel | None:
        """Remove a puzzle's record."""
        ...
