"""Configuration file support for memo-factorial."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Any, Optional

import tomli

from core.exceptions import ConfigurationError, NumericTypeError
from core.numeric import resolve_integer_type

CONFIG_FILENAME = ".memo-factorial.toml"


def find_config_file(config_dir: str) -> Optional[Path]:
    """
    Find the configuration file in a directory.

    Args:
        config_dir: Directory to look in.

    Returns:
        Path to config file if found, None otherwise.
    """
    config_path = Path(config_dir) / CONFIG_FILENAME

    if config_path.exists() and config_path.is_file():
        return config_path

    return None


def load_config(config_dir: str, profile: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file.

    Args:
        config_dir: Directory holding the config file.
        profile: Optional profile name; its table overrides the base sections.

    Returns:
        Configuration dictionary (empty when there is no file).

    Raises:
        ConfigurationError: If the file is not valid TOML or fails validation.
    """
    config_path = find_config_file(config_dir)
    if not config_path:
        return {}

    try:
        with open(config_path, "rb") as f:
            config_data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    if profile:
        profiles = config_data.get("profiles", {})
        if profile not in profiles:
            raise ConfigurationError(f"Profile '{profile}' not found in {config_path}")
        base_config = {k: v for k, v in config_data.items() if k != "profiles"}
        config_data = _merge(base_config, profiles[profile])

    is_valid, errors = validate_config(config_data)
    if not is_valid:
        raise ConfigurationError(f"Invalid config file {config_path}: " + "; ".join(errors))

    return config_data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config_value(config: Dict[str, Any], key: str, default: Any = None) -> Any:
    """
    Get a configuration value, supporting nested keys.

    Args:
        config: Configuration dictionary.
        key: Key path (e.g., "engine.output_type").
        default: Default value if not found.

    Returns:
        Configuration value or default.
    """
    keys = key.split(".")
    value = config

    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def validate_config(config: Dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate configuration file.

    Args:
        config: Configuration dictionary.

    Returns:
        Tuple of (is_valid, errors).
    """
    errors = []

    if "engine" in config:
        engine_config = config["engine"]
        if not isinstance(engine_config, dict):
            errors.append("engine must be a table")
        else:
            for key in ("output_type", "input_type"):
                if key not in engine_config:
                    continue
                if not isinstance(engine_config[key], str):
                    errors.append(f"engine.{key} must be a string")
                    continue
                try:
                    resolve_integer_type(engine_config[key])
                except NumericTypeError as e:
                    errors.append(f"engine.{key}: {e}")

    if "cli" in config:
        cli_config = config["cli"]
        if not isinstance(cli_config, dict):
            errors.append("cli must be a table")
        elif "show_cache" in cli_config and not isinstance(cli_config["show_cache"], bool):
            errors.append("cli.show_cache must be a boolean")

    return len(errors) == 0, errors


def create_default_config(config_dir: str) -> Path:
    """
    Write a default configuration file.

    Args:
        config_dir: Directory to create the file in.

    Returns:
        Path to the created file.

    Raises:
        ConfigurationError: If a config file already exists there.
    """
    config_path = Path(config_dir) / CONFIG_FILENAME
    if config_path.exists():
        raise ConfigurationError(f"Config file already exists: {config_path}")

    default_config = """# memo-factorial configuration

[engine]
output_type = "uint64"
input_type = "int32"

[cli]
show_cache = false

# Profiles override the sections above when MEMO_FACTORIAL_PROFILE is set.
[profiles.small.engine]
output_type = "uint32"
"""
    config_path.write_text(default_config, encoding="utf-8")
    return config_path
