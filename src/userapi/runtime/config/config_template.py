"""Configuration template substitution utilities."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.userapi.runtime.config.config_data import ConfigData
from src.userapi.runtime.config.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    env = os.environ if environ is None else environ

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        # ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return env.get(var_name, default)

        # ${VAR:?message}
        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = env.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = env.get(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def environment_overrides(env_mode: str, environ: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of `environ` with `<ENV_MODE>_NAME` variables promoted to `NAME`."""
    prefix = f"{env_mode.upper()}_"
    merged = dict(environ)
    for var_name, var_value in environ.items():
        if var_name.startswith(prefix) and len(var_name) > len(prefix):
            merged[var_name[len(prefix):]] = var_value
            logger.debug("Set {} from {}", var_name[len(prefix):], var_name)
    return merged


def load_templated_yaml(
    file_path: Path, env_vars: EnvironmentVariables | None = None
) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_vars: Process settings; read from the environment when omitted

    Returns:
        Parsed and validated configuration

    Raises:
        ValueError: If required environment variables are missing or the
            file does not describe a valid configuration
    """
    env_vars = env_vars or EnvironmentVariables()
    env_mode = env_vars.environment

    if not file_path.exists():
        logger.warning("{} not found; using default configuration", file_path)
        config = ConfigData()
        config.app.environment = env_mode
        return config

    content = file_path.read_text(encoding="utf-8")
    logger.info("Loading configuration for environment: {}", env_mode)

    environ = environment_overrides(env_mode, os.environ)
    substituted_content = substitute_env_vars(content, environ)

    try:
        loaded = yaml.safe_load(substituted_content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    if not isinstance(loaded, dict):
        raise ValueError(f"{file_path} must contain a mapping at the top level")

    try:
        return ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
