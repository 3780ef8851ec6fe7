"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PuzzleModel:
    """Transport-safe representation of a puzzle session used between API, Service, DB, and domain layers."""

    size: int
    rule: str
    piece_type: Optional[str]
    layout: str
    selected_piece: str
    selected_team: Optional[str]
    status: str
