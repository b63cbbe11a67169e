# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the Pydantic models for the ``[engine]`` and
``[logging]`` configuration sections and the root Config container.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chartrender.exceptions import ConfigError

from ._loader import deep_merge, parse_env_vars, read_toml_file

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class EngineConfig(BaseModel):
    """Rendering engine configuration section.

    Attributes:
        strict: Fail when a template references a value that does not exist.
        lint_mode: Downgrade ``required`` and ``fail`` to logged messages and
            remove ``lookup``.
        enable_dns: Allow ``getHostByName`` to resolve hostnames. DNS lookups
            from untrusted templates can exfiltrate data, so this is opt-in.
        recursion_max: Maximum ``include`` nesting depth per template name.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    strict: bool = False
    lint_mode: bool = False
    enable_dns: bool = False
    recursion_max: int = Field(default=1000, ge=1)


class Config(BaseModel):
    """Root configuration.

    Attributes:
        engine: Rendering engine settings.
        logging: Logging settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a Config from a (possibly partial) dictionary.

        Args:
            data: Configuration values keyed by section.

        Returns:
            Validated configuration.

        Raises:
            ConfigError: If a value fails validation.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigError(msg) from e

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        include_env: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> Config:
        """Load configuration from defaults, a TOML file and the environment.

        Sources are merged in order (later sources override earlier):
        1. Model defaults
        2. The TOML file at ``path``, if given
        3. ``CHARTRENDER_`` environment variables, if ``include_env``

        Args:
            path: Optional TOML file with ``[engine]``/``[logging]`` tables.
            include_env: Whether to apply environment overrides.
            environ: Environment mapping (defaults to ``os.environ``).

        Returns:
            Validated configuration.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
            ConfigLoadError: If the TOML file cannot be parsed.
            ConfigError: If a merged value fails validation.
        """
        merged: dict[str, Any] = {}
        if path is not None:
            merged = deep_merge(merged, read_toml_file(path))
        if include_env:
            merged = deep_merge(merged, parse_env_vars(environ))
        return cls.from_dict(merged)
