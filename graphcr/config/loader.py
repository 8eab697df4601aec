"""Configuration loader with environment interpolation."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from graphcr.config.settings import GraphCRConfig
from graphcr.errors import ConfigLoadError

logger = logging.getLogger(__name__)

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-?([^}]*))?\}")

DEFAULT_CONFIG_FILES = ("graphcr.yaml", "graphcr.yml", ".graphcr.yaml", "config/graphcr.yaml")

# File-relative paths are resolved against the config file's directory.
PATH_FIELDS = ("schema_file", "fixtures_file")


def _truthy(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


ENV_MAPPINGS: dict[str, tuple[str, Any]] = {
    "GRAPHCR_SCHEMA_FILE": ("schema_file", str),
    "GRAPHCR_FIXTURES_FILE": ("fixtures_file", str),
    "GRAPHCR_METADATA_TYPE": ("metadata_type", str),
    "GRAPHCR_IDENTIFIER_PROPERTY": ("identifier_property", str),
    "GRAPHCR_NAMESPACE_PREFIX": ("namespace_prefix", str),
    "GRAPHCR_NAMESPACE_URI": ("namespace_uri", str),
    "GRAPHCR_NAME_PROPERTY_POLICY": ("name_property_policy", str),
    "GRAPHCR_PARALLEL_CHILD_QUERIES": ("parallel_child_queries", _truthy),
    "GRAPHCR_MAX_WORKERS": ("max_workers", int),
    "GRAPHCR_VERBOSE": ("verbose", _truthy),
}


def load_config(config_path: str | Path | None = None) -> GraphCRConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults

    Args:
        config_path: Path to a YAML configuration file. When omitted the
            first existing file of DEFAULT_CONFIG_FILES is used, if any.

    Returns:
        The validated configuration.

    Raises:
        ConfigLoadError: If an explicit file is missing or is not valid YAML.
        ConfigValidationError: If a value fails validation.
    """
    if config_path is None:
        for candidate in DEFAULT_CONFIG_FILES:
            if Path(candidate).exists():
                config_path = candidate
                break

    config_data: dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        config_data = _interpolate_env_vars(_load_from_file(path))
        config_data = _resolve_relative_paths(config_data, path.parent)
        logger.info(f"Loaded configuration from {path}")

    config_data.update(_get_env_overrides())

    return GraphCRConfig(**config_data)


def _load_from_file(path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    if not path.exists():
        raise ConfigLoadError(
            f"Configuration file not found: {path}",
            {
                "path": str(path),
                "suggestions": [
                    "Create a graphcr.yaml file in your project root",
                    "Specify a different config path with --config",
                ],
            },
        )

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            f"Failed to parse YAML configuration: {e}",
            {"path": str(path), "yaml_error": str(e)},
            cause=e,
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigLoadError(
            f"Configuration must be a YAML object, got {type(config).__name__}",
            {"path": str(path)},
        )
    return config


def _interpolate_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively interpolate ${VAR} and ${VAR:-default} in config values."""
    result: dict[str, Any] = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _interpolate_env_vars(value)
        elif isinstance(value, list):
            result[key] = [resolve_env_vars(item) if isinstance(item, str) else item for item in value]
        elif isinstance(value, str):
            result[key] = resolve_env_vars(value)
        else:
            result[key] = value
    return result


def resolve_env_vars(value: str) -> str:
    """Resolve environment variables in a string value."""

    def replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2) or ""
        return os.environ.get(var_name, default)

    return ENV_VAR_PATTERN.sub(replace, value)


def _resolve_relative_paths(config: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    for field in PATH_FIELDS:
        value = config.get(field)
        if isinstance(value, str) and value and not Path(value).is_absolute():
            config[field] = str(base_dir / value)
    return config


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    for env_key, (config_key, converter) in ENV_MAPPINGS.items():
        value = os.environ.get(env_key)
        if value is not None:
            try:
                overrides[config_key] = converter(value)
            except (ValueError, TypeError) as e:
                raise ConfigLoadError(
                    f"Invalid value for {env_key}: {value}",
                    {"env_var": env_key, "value": value, "error": str(e)},
                    cause=e,
                ) from e

    return overrides
