"""
Configuration

All settings are read from environment variables with the CHESS_PUZZLES_ prefix.

* CHESS_PUZZLES_DATABASE_URL: where puzzle sessions are stored
* CHESS_PUZZLES_REQUIREMENTS: optional JSON file that replaces the required-count tables, ex. to offer bigger boards.

{
    "independent": {"queen": {"9": 9, "10": 10}},
    "domination": {"queen": {"9": 5}},
    "mixed_set": {"pawn": 8, "bishop": 2, "knight": 2, "rook": 2, "queen": 1, "king": 1}
}

A table left out of the file keeps its default.
"""

import logging
from copy import deepcopy
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chess_puzzles.chess.requirements import (
    DEFAULT_REQUIREMENTS,
    DOMINATION_COUNTS,
    INDEPENDENT_COUNTS,
    MIXED_SET,
    PuzzleRequirements,
)
from chess_puzzles.core.exceptions import ConfigError
from chess_puzzles.core.shared_types import PieceType

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHESS_PUZZLES_")

    database_url: str = "sqlite:///chess_puzzles.db"
    requirements: Optional[Path] = None


class RequirementsConfig(BaseModel):
    independent: dict[PieceType, dict[int, int]] = Field(
        default_factory=lambda: deepcopy(INDEPENDENT_COUNTS)
    )
    domination: dict[PieceType, dict[int, int]] = Field(
        default_factory=lambda: deepcopy(DOMINATION_COUNTS)
    )
    mixed_set: dict[PieceType, int] = Field(default_factory=lambda: dict(MIXED_SET))

    @field_validator("independent", "domination")
    @classmethod
    def validate_table(
        cls, value: dict[PieceType, dict[int, int]]
    ) -> dict[PieceType, dict[int, int]]:
        for piece_type, by_size in value.items():
            for size, count in by_size.items():
                if size < 1 or count < 1:
                    raise ValueError(
                        f"{piece_type}: board size and count must be positive, got {size}: {count}"
                    )
        return value

    @field_validator("mixed_set")
    @classmethod
    def validate_mixed_set(cls, value: dict[PieceType, int]) -> dict[PieceType, int]:
        if any(count < 0 for count in value.values()):
            raise ValueError("Piece counts of the mixed set cannot be negative.")
        return value

    def to_requirements(self) -> PuzzleRequirements:
        return PuzzleRequirements(
            independent=self.independent,
            domination=self.domination,
            mixed_set=self.mixed_set,
        )


def load_requirements(path: Optional[str | Path] = None) -> PuzzleRequirements:
    """
    Load the required-count tables, from `path` or else from the file configured in the environment.

    Returns:
        the defaults when no path is configured or the file does not exist.
    Raises:
        ConfigError if the file exists but cannot be used.
    """
    if path is None:
        path = Settings().requirements
    if path is None:
        return DEFAULT_REQUIREMENTS

    config_file = Path(path)
    if not config_file.exists():
        logger.warning("Requirements file %s not found, using defaults", config_file)
        return DEFAULT_REQUIREMENTS

    try:
        config = RequirementsConfig.model_validate_json(
            config_file.read_text(encoding="utf-8")
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid requirements file {config_file}: {exc}") from exc

    logger.info("Loaded required piece counts from %s", config_file)
    return config.to_requirements()
