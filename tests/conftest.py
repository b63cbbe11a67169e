"""Shared test fixtures for chartrender tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from chartrender.chart import Chart, ChartFile, ChartMetadata
from chartrender.config import EngineConfig
from chartrender.engine import Engine

MakeChart = Callable[..., Chart]


@pytest.fixture
def logger() -> MagicMock:
    """Create a mock structlog logger."""
    return MagicMock()


@pytest.fixture
def make_chart() -> MakeChart:
    """Return a factory for charts built from ``{filename: source}`` templates."""

    def _make(
        name: str,
        templates: dict[str, str] | None = None,
        *,
        dependencies: list[Chart] | None = None,
        **metadata: Any,  # pyright: ignore[reportExplicitAny]
    ) -> Chart:
        return Chart(
            metadata=ChartMetadata(name=name, **metadata),
            templates=[
                ChartFile(name=f"templates/{filename}", data=source.encode())
                for filename, source in (templates or {}).items()
            ],
            dependencies=list(dependencies or []),
        )

    return _make


@pytest.fixture
def make_engine(logger: MagicMock) -> Callable[..., Engine]:
    """Return a factory for engines that log to the mock logger."""

    def _make(**config: Any) -> Engine:  # pyright: ignore[reportExplicitAny]
        return Engine(config=EngineConfig(**config), logger=logger)

    return _make
