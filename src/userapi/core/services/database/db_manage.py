"""Schema management for the application database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel

from src.userapi.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        if engine is None:
            engine = DbSessionService().engine
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.userapi.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")
