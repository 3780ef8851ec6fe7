"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBPuzzle(Base):
    __tablename__ = "puzzles"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    size: Mapped[int]
    rule: Mapped[str]
    piece_type: Mapped[Optional[str]]
    layout: Mapped[str]
    selected_piece: Mapped[str]
    selected_team: Mapped[Optional[str]]
    status: Mapped[str]
    # pass the function itself, so the timestamp is taken per row and not once at import
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
