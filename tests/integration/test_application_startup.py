"""Integration tests for application lifecycle and startup behavior."""

import pytest
from sqlalchemy import inspect

from src.userapi.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    SecurityConfig,
)


class TestApplicationStartup:
    """Test application startup and shutdown hooks."""

    @pytest.mark.asyncio
    async def test_startup_wires_dependencies_and_creates_tables(self):
        import src.userapi.api.http.app as application
        from src.userapi.runtime.context import with_context

        test_config = ConfigData(
            app=AppConfig(environment="test"),
            database=DatabaseConfig(url="sqlite://"),
            security=SecurityConfig(password_hasher="bcrypt"),
        )
        previous = getattr(application.app.state, "app_dependencies", None)

        try:
            with with_context(config_override=test_config):
                await application.startup()

                deps = application.app.state.app_dependencies
                assert deps.password_hasher.algorithm == "bcrypt"
                assert deps.database_service.health_check() is True
                assert "users" in inspect(deps.database_service.engine).get_table_names()

                await application.shutdown()
        finally:
            application.app.state.app_dependencies = previous

    @pytest.mark.asyncio
    async def test_production_startup_skips_table_creation(self):
        import src.userapi.api.http.app as application
        from src.userapi.runtime.context import with_context

        test_config = ConfigData(
            app=AppConfig(environment="production"),
            database=DatabaseConfig(url="sqlite://"),
        )
        previous = getattr(application.app.state, "app_dependencies", None)

        try:
            with with_context(config_override=test_config):
                await application.startup()

                engine = application.app.state.app_dependencies.database_service.engine
                assert "users" not in inspect(engine).get_table_names()

                await application.shutdown()
        finally:
            application.app.state.app_dependencies = previous
