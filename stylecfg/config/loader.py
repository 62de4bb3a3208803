"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any

from stylecfg.observability.logging import get_logger

logger = get_logger(__name__)


def get_config_dir() -> Path | None:
    """Get the configuration directory path.

    The config directory can be overridden with STYLECFG_CONFIG_DIR env var.
    Otherwise 'config/' is looked up in the current directory and its
    parents. Returns None when no directory is found.
    """
    config_dir_env = os.environ.get("STYLECFG_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):  # Look up to 5 levels
        config_path = current / "config"
        if config_path.is_dir():
            return config_path
        current = current.parent

    return None


def get_environment() -> str:
    """Get the current environment from STYLECFG_ENV.

    Defaults to 'development' if not set.
    """
    return os.environ.get("STYLECFG_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Args:
        file_path: Path to the TOML file

    Returns:
        Dictionary containing the TOML data

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    For nested dictionaries, values are merged recursively.
    For other values, override replaces base. Neither input is modified.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config() -> dict[str, Any]:
    """Load the tool's own settings from TOML files.

    Loading order:
    1. config/default.toml (optional)
    2. config/{STYLECFG_ENV}.toml (optional)

    Returns:
        Merged configuration dictionary, empty when no config directory exists
    """
    config_dir = get_config_dir()
    if config_dir is None:
        logger.debug("config_dir_not_found")
        return {}

    config: dict[str, Any] = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = load_toml(default_path)

    env = get_environment()
    env_path = config_dir / f"{env}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))

    logger.debug(
        "settings_files_loaded",
        config_dir=str(config_dir),
        environment=env,
        sections=sorted(config),
    )
    return config
