"""Database management CLI commands."""

import typer

from src.userapi.runtime.init_db import init_db

from .utils import console, get_database_service

db_app = typer.Typer(help="Manage the application database")


@db_app.command("init")
def init() -> None:
    """Create all database tables."""
    database_service = get_database_service()
    init_db(database_service.engine)
    console.print("[green]✅ Database tables created[/green]")
