"""Shared helpers for CLI commands."""

from rich.console import Console

from src.userapi.core.security import PasswordHasher
from src.userapi.core.services import DbSessionService

# Initialize Rich console for colored output
console = Console()


def get_database_service() -> DbSessionService:
    """Build a database service from the active configuration."""
    return DbSessionService()


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher.from_config()


def print_field_errors(errors: dict[str, list[str]]) -> None:
    for field, messages in errors.items():
        for message in messages:
            console.print(f"[red]  {field}: {message}[/red]")
