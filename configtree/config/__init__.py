"""Configuration containers: flat key/value and dotted hierarchical storage."""

from configtree.config.config_container import ConfigContainer
from configtree.config.container import Container
from configtree.config.environment import apply_env_overrides, parse_env_value, read_env
from configtree.config.errors import ConfigError, InvalidArgumentError, NotFoundError, ScalarOptionError
from configtree.config.loader import load_config_file
from configtree.config.runtime import RuntimeSettings, ScalarOptionSink, runtime_settings

__all__ = [
    "ConfigContainer",
    "ConfigError",
    "Container",
    "InvalidArgumentError",
    "NotFoundError",
    "RuntimeSettings",
    "ScalarOptionError",
    "ScalarOptionSink",
    "apply_env_overrides",
    "load_config_file",
    "parse_env_value",
    "read_env",
    "runtime_settings",
]
