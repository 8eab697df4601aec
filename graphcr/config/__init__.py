"""Configuration management for graphcr."""

from graphcr.config.loader import DEFAULT_CONFIG_FILES, load_config, resolve_env_vars
from graphcr.config.settings import GraphCRConfig

__all__ = [
    "GraphCRConfig",
    "load_config",
    "resolve_env_vars",
    "DEFAULT_CONFIG_FILES",
]
