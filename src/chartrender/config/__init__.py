"""Configuration for the rendering engine and its logging."""

from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import Config, EngineConfig, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "Config",
    "EngineConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "parse_env_vars",
    "read_toml_file",
]
