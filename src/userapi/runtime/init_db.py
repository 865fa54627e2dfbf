"""Database initialization script."""

from sqlalchemy import Engine

from src.userapi.core.services.database.db_manage import DbManageService


def init_db(engine: Engine | None = None) -> None:
    """Create all database tables."""
    DbManageService(engine).create_all()


if __name__ == "__main__":
    init_db()
