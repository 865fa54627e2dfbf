"""Tests for the application context and configuration overrides."""

import pytest

from src.userapi.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    UsersConfig,
)
from src.userapi.runtime.context import get_config, with_context


class TestWithContext:
    def test_override_applies_inside_block_only(self):
        before = get_config().users.strict_update_validation

        with with_context(ConfigData(users=UsersConfig(strict_update_validation=True))):
            assert get_config().users.strict_update_validation is True

        assert get_config().users.strict_update_validation is before

    def test_unset_fields_are_inherited(self):
        original_url = get_config().database.url
        original_hasher = get_config().security.password_hasher

        with with_context(ConfigData(database=DatabaseConfig(pool_size=3))):
            config = get_config()
            assert config.database.pool_size == 3
            assert config.database.url == original_url
            assert config.security.password_hasher == original_hasher

    def test_nested_overrides(self):
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            with with_context(ConfigData(users=UsersConfig(strict_update_validation=True))):
                assert get_config().database.url == "sqlite://"
                assert get_config().users.strict_update_validation is True
            assert get_config().database.url == "sqlite://"

    def test_none_override_is_noop(self):
        config = get_config()

        with with_context(None):
            assert get_config() is config

    def test_rejects_non_config(self):
        with pytest.raises(ValueError, match="ConfigData"):
            with with_context({"users": {}}):
                pass


class TestDatabaseConfig:
    @pytest.mark.parametrize(
        ("url", "backend"),
        [
            ("sqlite:///./database.db", "sqlite"),
            ("sqlite://", "sqlite"),
            ("postgresql+psycopg2://u:p@host/db", "postgresql"),
            ("mysql://u:p@host/db", "mysql"),
        ],
    )
    def test_backend(self, url, backend):
        assert DatabaseConfig(url=url).backend == backend
