"""Tests for the userapi command line interface."""

import pytest
from sqlalchemy import inspect
from typer.testing import CliRunner

from src.userapi.cli import app
from src.userapi.cli import db_commands, user_commands
from src.userapi.core.services import DbSessionService
from src.userapi.entities.user import UserRepository
from src.userapi.runtime.config.config_data import DatabaseConfig

runner = CliRunner()

CREATE_ARGS = [
    "users",
    "create",
    "jdoe",
    "jane@example.com",
    "--first-name",
    "Jane",
    "--last-name",
    "Doe",
    "--password",
    "secret1",
]


@pytest.fixture
def cli_database(monkeypatch, database_service, password_hasher) -> DbSessionService:
    monkeypatch.setattr(user_commands, "get_database_service", lambda: database_service)
    monkeypatch.setattr(user_commands, "get_password_hasher", lambda: password_hasher)
    monkeypatch.setattr(db_commands, "get_database_service", lambda: database_service)
    return database_service


class TestUserCommands:
    def test_create_and_list(self, cli_database, session):
        result = runner.invoke(app, CREATE_ARGS)

        assert result.exit_code == 0, result.output
        assert "Created user 'jdoe'" in result.output

        users = UserRepository(session).list_all()
        assert [user.username for user in users] == ["jdoe"]
        assert users[0].password != "secret1"

        listed = runner.invoke(app, ["users", "list"])
        assert listed.exit_code == 0
        assert "jdoe" in listed.output

    def test_list_empty(self, cli_database):
        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output

    def test_create_invalid_data(self, cli_database, session):
        args = list(CREATE_ARGS)
        args[3] = "not-an-email"

        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "email" in result.output
        assert UserRepository(session).list_all() == []

    def test_create_duplicate(self, cli_database):
        runner.invoke(app, CREATE_ARGS)

        result = runner.invoke(app, CREATE_ARGS)

        assert result.exit_code == 1
        assert "already been taken" in result.output

    def test_delete_with_force(self, cli_database, session):
        runner.invoke(app, CREATE_ARGS)
        user_id = UserRepository(session).list_all()[0].id

        result = runner.invoke(app, ["users", "delete", str(user_id), "--force"])

        assert result.exit_code == 0, result.output
        assert UserRepository(session).list_all() == []

    def test_delete_missing(self, cli_database):
        result = runner.invoke(app, ["users", "delete", "999", "--force"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestDbCommands:
    def test_init_creates_tables(self, monkeypatch):
        database_service = DbSessionService(DatabaseConfig(url="sqlite://"))
        monkeypatch.setattr(db_commands, "get_database_service", lambda: database_service)

        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0, result.output
        assert "users" in inspect(database_service.engine).get_table_names()
        database_service.dispose()
