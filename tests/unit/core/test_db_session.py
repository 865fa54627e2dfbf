"""Tests for the database session and schema services."""

import pytest
from loguru import logger
from sqlalchemy import inspect, text
from sqlalchemy.pool import StaticPool

from src.userapi.core.exceptions import UserValidationError
from src.userapi.core.services import DbManageService, DbSessionService
from src.userapi.runtime.config.config_data import DatabaseConfig


class TestDbSessionService:
    def test_memory_sqlite_uses_static_pool(self):
        service = DbSessionService(DatabaseConfig(url="sqlite://"))

        assert isinstance(service.engine.pool, StaticPool)
        service.dispose()

    def test_file_sqlite_gets_pool_settings(self, tmp_path):
        kwargs = DbSessionService._engine_kwargs(
            DatabaseConfig(url=f"sqlite:///{tmp_path / 'app.db'}", pool_size=3)
        )

        assert kwargs["pool_size"] == 3
        assert kwargs["connect_args"]["check_same_thread"] is False

    def test_postgres_connect_args(self):
        connect_args = DbSessionService._get_connect_args(
            DatabaseConfig(url="postgresql+psycopg2://u:p@localhost/db")
        )

        assert connect_args["application_name"] == "userapi"
        assert "check_same_thread" not in connect_args

    def test_health_check(self, database_service):
        assert database_service.health_check() is True

    def test_pool_status_keys(self, database_service):
        assert set(database_service.get_pool_status()) == {
            "size",
            "checked_in",
            "checked_out",
            "overflow",
        }

    def test_session_scope_commits(self, database_service):
        with database_service.session_scope() as session:
            session.execute(
                text(
                    "INSERT INTO users (first_name, last_name, username, email, "
                    "password, created_at, updated_at) VALUES ('a', 'b', 'c', "
                    "'d@example.com', 'h', '2024-01-01', '2024-01-01')"
                )
            )

        with database_service.session_scope() as session:
            count = session.execute(text("SELECT COUNT(*) FROM users")).scalar_one()
        assert count == 1

    def test_session_scope_rolls_back_on_error(self, database_service):
        with pytest.raises(RuntimeError):
            with database_service.session_scope() as session:
                session.execute(
                    text(
                        "INSERT INTO users (first_name, last_name, username, email, "
                        "password, created_at, updated_at) VALUES ('a', 'b', 'c', "
                        "'d@example.com', 'h', '2024-01-01', '2024-01-01')"
                    )
                )
                raise RuntimeError("boom")

        with database_service.session_scope() as session:
            count = session.execute(text("SELECT COUNT(*) FROM users")).scalar_one()
        assert count == 0

    def test_session_scope_logs_unexpected_errors(self, database_service):
        messages = []
        handler_id = logger.add(messages.append, level="ERROR")
        try:
            with pytest.raises(RuntimeError):
                with database_service.session_scope():
                    raise RuntimeError("boom")
        finally:
            logger.remove(handler_id)

        assert len(messages) == 1
        assert "Database transaction failed: RuntimeError: boom" in messages[0]

    def test_session_scope_domain_errors_not_logged(self, database_service):
        messages = []
        handler_id = logger.add(messages.append, level="ERROR")
        try:
            with pytest.raises(UserValidationError):
                with database_service.session_scope() as session:
                    session.execute(
                        text(
                            "INSERT INTO users (first_name, last_name, username, "
                            "email, password, created_at, updated_at) VALUES ('a', "
                            "'b', 'c', 'd@example.com', 'h', '2024-01-01', "
                            "'2024-01-01')"
                        )
                    )
                    raise UserValidationError({"username": ["taken"]})
        finally:
            logger.remove(handler_id)

        assert messages == []
        with database_service.session_scope() as session:
            count = session.execute(text("SELECT COUNT(*) FROM users")).scalar_one()
        assert count == 0


class TestDbManageService:
    def test_create_all_creates_users_table(self):
        service = DbSessionService(DatabaseConfig(url="sqlite://"))

        DbManageService(service.engine).create_all()

        assert "users" in inspect(service.engine).get_table_names()
        service.dispose()
