"""Unit tests for logging utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from chartrender.config import LogFormat, LoggingConfig, LogLevel
from chartrender.utils import create_logger, create_logger_from_config
from chartrender.utils._logging import _log_level_from_string

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestLogLevelFromString:
    def test_maps_level_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CHARTRENDER_DEBUG", raising=False)

        assert _log_level_from_string("warning") == logging.WARNING
        assert _log_level_from_string("ERROR") == logging.ERROR

    def test_unknown_level_defaults_to_info(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("CHARTRENDER_DEBUG", raising=False)

        assert _log_level_from_string("chatty") == logging.INFO

    def test_debug_env_var_forces_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHARTRENDER_DEBUG", "1")

        assert _log_level_from_string("error") == logging.DEBUG
        assert _log_level_from_string("error", respect_env=False) == logging.ERROR


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/logs/render.log")
        assert not log_path.parent.exists()

        _ = create_logger(log_file=str(log_path))

        assert log_path.parent.exists()

    def test_json_format(self, fs: FakeFilesystem) -> None:
        logger = create_logger(log_format="json", log_file="/logs/render.log")

        logger.info("rendered template", template="web/templates/cm.yaml")

        record = json.loads(Path("/logs/render.log").read_text().splitlines()[0])
        assert record["event"] == "rendered template"
        assert record["template"] == "web/templates/cm.yaml"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = create_logger(log_format="text", log_file="/logs/render.log")

        logger.info("parsed templates", count=3)

        log_content = Path("/logs/render.log").read_text()
        assert "parsed templates" in log_content
        assert "count=3" in log_content

    def test_filters_below_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("CHARTRENDER_DEBUG", raising=False)
        logger = create_logger(level="warning", log_file="/logs/render.log")

        logger.info("hidden")
        logger.warning("shown")

        log_content = Path("/logs/render.log").read_text()
        assert "hidden" not in log_content
        assert "shown" in log_content


    def test_loggers_append_to_shared_file(self, fs: FakeFilesystem) -> None:
        first = create_logger(log_file="/logs/render.log")
        first.info("first event")
        second = create_logger(log_file="/logs/render.log")
        second.info("second event")
        first.info("third event")

        lines = Path("/logs/render.log").read_text().splitlines()
        assert len(lines) == 3
        assert "first event" in lines[0]
        assert "second event" in lines[1]
        assert "third event" in lines[2]


class TestCreateLoggerFromConfig:
    def test_uses_config_settings(self, fs: FakeFilesystem) -> None:
        config = LoggingConfig(
            level=LogLevel.DEBUG, format=LogFormat.JSON, file="/logs/cfg.log"
        )

        logger = create_logger_from_config(config)
        logger.debug("from config")

        log_content = Path("/logs/cfg.log").read_text()
        assert '"event": "from config"' in log_content
