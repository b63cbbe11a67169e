from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from chartrender.config import Config, EngineConfig, LogFormat, LoggingConfig, LogLevel
from chartrender.exceptions import ConfigError, ConfigLoadError

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestDefaults:
    def test_engine_defaults(self) -> None:
        config = EngineConfig()

        assert config.strict is False
        assert config.lint_mode is False
        assert config.enable_dns is False
        assert config.recursion_max == 1000

    def test_logging_defaults(self) -> None:
        config = LoggingConfig()

        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.TEXT
        assert config.file == ""

    def test_models_are_frozen(self) -> None:
        config = EngineConfig()

        with pytest.raises(ValidationError):
            config.strict = True  # pyright: ignore[reportAttributeAccessIssue]

    def test_recursion_max_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _ = EngineConfig(recursion_max=0)


class TestConfigFromDict:
    def test_builds_sections(self) -> None:
        config = Config.from_dict(
            {"engine": {"strict": True}, "logging": {"format": "json"}}
        )

        assert config.engine.strict is True
        assert config.logging.format == LogFormat.JSON

    def test_ignores_unknown_sections(self) -> None:
        config = Config.from_dict({"server": {"port": 1}})

        assert config == Config()

    def test_invalid_value_raises_config_error(self) -> None:
        with pytest.raises(ConfigError, match="Invalid configuration"):
            _ = Config.from_dict({"logging": {"level": "loud"}})


class TestConfigLoad:
    def test_defaults_without_sources(self) -> None:
        assert Config.load(environ={}) == Config()

    def test_reads_toml_file(self, fs: FakeFilesystem) -> None:
        path = Path("/etc/chartrender.toml")
        fs.create_file(path, contents="[engine]\nlint_mode = true\n")

        config = Config.load(path, environ={})

        assert config.engine.lint_mode is True

    def test_environment_overrides_file(self, fs: FakeFilesystem) -> None:
        path = Path("/etc/chartrender.toml")
        fs.create_file(path, contents="[engine]\nrecursion_max = 10\n")

        config = Config.load(
            path, environ={"CHARTRENDER_ENGINE__RECURSION_MAX": "20"}
        )

        assert config.engine.recursion_max == 20

    def test_environment_can_be_skipped(self) -> None:
        config = Config.load(
            include_env=False, environ={"CHARTRENDER_ENGINE__STRICT": "true"}
        )

        assert config.engine.strict is False

    def test_invalid_toml_raises_config_load_error(self, fs: FakeFilesystem) -> None:
        path = Path("/etc/chartrender.toml")
        fs.create_file(path, contents="[engine\n")

        with pytest.raises(ConfigLoadError):
            _ = Config.load(path, environ={})
