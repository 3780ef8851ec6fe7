"""Generate database session"""

import logging
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chess_puzzles.core.config import Settings
from chess_puzzles.db.schema import Base

logger = logging.getLogger(__name__)

# create_engine does not connect yet: importing this module is safe without a database
settings = Settings()
engine = create_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready on %s", bind.url)


def get_db(session_factory: sessionmaker[Session] = SessionLocal) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
