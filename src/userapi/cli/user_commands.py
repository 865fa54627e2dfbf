"""User management CLI commands."""

import typer
from pydantic import ValidationError
from rich.prompt import Confirm
from rich.table import Table

from src.userapi.core.exceptions import UserNotFoundError, UserValidationError
from src.userapi.core.services import UserService
from src.userapi.core.services.user.user_service import validation_errors_from
from src.userapi.entities.user import UserCreate
from src.userapi.runtime.context import get_config

from .utils import console, get_database_service, get_password_hasher, print_field_errors

users_app = typer.Typer(help="Manage stored users")


@users_app.command("list")
def list_users() -> None:
    """List all users in id order."""
    database_service = get_database_service()

    with database_service.session_scope() as session:
        users = UserService(session, get_password_hasher()).list_users()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    table.add_column("First Name", style="magenta")
    table.add_column("Last Name", style="magenta")
    table.add_column("Phone", style="yellow")

    for user in users:
        table.add_row(
            str(user.id),
            user.username,
            user.email,
            user.first_name,
            user.last_name,
            user.phone_no or "",
        )

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("create")
def create_user(
    username: str = typer.Argument(..., help="Username for the new user"),
    email: str = typer.Argument(..., help="Email address"),
    first_name: str = typer.Option(..., "--first-name", "-f", help="First name"),
    last_name: str = typer.Option(..., "--last-name", "-l", help="Last name"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
    phone_no: str | None = typer.Option(None, "--phone-no", help="Phone number"),
) -> None:
    """Create a user with the same rules as the HTTP API."""
    try:
        payload = UserCreate(
            first_name=first_name,
            last_name=last_name,
            username=username,
            email=email,
            password=password,
            phone_no=phone_no,
        )
    except ValidationError as e:
        console.print("[red]❌ The given data was invalid:[/red]")
        print_field_errors(validation_errors_from(e))
        raise typer.Exit(code=1) from e

    database_service = get_database_service()
    try:
        with database_service.session_scope() as session:
            service = UserService(session, get_password_hasher(), get_config().users)
            user = service.create_user(payload)
    except UserValidationError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        print_field_errors(e.errors or {})
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user '{user.username}' with id {user.id}[/green]")


@users_app.command("delete")
def delete_user(
    user_id: int = typer.Argument(..., help="ID of the user to delete"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete a user by id."""
    database_service = get_database_service()

    try:
        with database_service.session_scope() as session:
            service = UserService(session, get_password_hasher())
            user = service.get_user(user_id)

            if not force and not Confirm.ask(
                f"Are you sure you want to delete user '{user.username}' ({user_id})?"
            ):
                console.print("[yellow]Deletion cancelled[/yellow]")
                return

            service.delete_user(user_id)
    except UserNotFoundError as e:
        console.print(f"[red]❌ User {user_id} not found[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Deleted user {user_id}[/green]")
