"""Implementation of (Puzzle)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from chess_puzzles.core.models import PuzzleModel
from chess_puzzles.db.schema import DBPuzzle


class SQLPuzzleRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_puzzle(self, puzzle_id: UUID) -> PuzzleModel | None:
        """Get puzzle by ID, if record exists."""
        puzzle_db = self._fetch_puzzle(puzzle_id)
        if puzzle_db:
            return self._to_model(puzzle_db)
        return None

    def create_puzzle(self, puzzle: PuzzleModel) -> tuple[PuzzleModel, UUID]:
        """Store new puzzle and return the stored data + newly created puzzle ID."""

        new_id = uuid4()
        puzzle_db = DBPuzzle(
            id=new_id,
            size=puzzle.size,
            rule=puzzle.rule,
            piece_type=puzzle.piece_type,
            layout=puzzle.layout,
            selected_piece=puzzle.selected_piece,
            selected_team=puzzle.selected_team,
            status=puzzle.status,
        )
        self.db.add(puzzle_db)
        self.db.commit()
        self.db.refresh(puzzle_db)
        return self._to_model(puzzle_db), new_id

    def update_puzzle(self, puzzle_id: UUID, puzzle: PuzzleModel) -> PuzzleModel | None:
        """Overwrite the state of an existing record."""
        puzzle_db = self._fetch_puzzle(puzzle_id)
        if not puzzle_db:
            return None
        puzzle_db.size = puzzle.size
        puzzle_db.rule = puzzle.rule
        puzzle_db.piece_type = puzzle.piece_type
        puzzle_db.layout = puzzle.layout
        puzzle_db.selected_piece = puzzle.selected_piece
        puzzle_db.selected_team = puzzle.selected_team
        puzzle_db.status = puzzle.status
        self.db.commit()
        self.db.refresh(puzzle_db)
        return self._to_model(puzzle_db)

    def delete_puzzle(self, puzzle_id: UUID) -> PuzzleModel | None:
        """Remove a puzzle's record."""
        puzzle_db = self._fetch_puzzle(puzzle_id)
        if not puzzle_db:
            return None
        puzzle_model = self._to_model(puzzle_db)
        self.db.delete(puzzle_db)
        self.db.commit()
        return puzzle_model

    def _fetch_puzzle(self, puzzle_id: UUID) -> DBPuzzle | None:
        query = select(DBPuzzle).where(DBPuzzle.id == puzzle_id)
        return self.db.scalar(query)

    def _to_model(self, puzzle_db: DBPuzzle) -> PuzzleModel:
        """Convert SQLAlchemy model to data transfer model."""
        return PuzzleModel(
            size=puzzle_db.size,
            rule=puzzle_db.rule,
            piece_type=puzzle_db.piece_type,
            layout=puzzle_db.layout,
            selected_piece=puzzle_db.selected_piece,
            selected_team=puzzle_db.selected_team,
            status=puzzle_db.status,
        )
