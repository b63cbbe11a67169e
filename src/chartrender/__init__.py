"""Render a tree of chart templates into manifests.

Basic usage:
    from chartrender import Chart, render

    chart = Chart.from_dict(
        {
            "metadata": {"name": "web", "version": "1.0.0"},
            "templates": [{"name": "templates/cm.yaml", "data": "n: {{ Values.n }}"}],
        }
    )
    result = render(chart, {"Values": {"n": 3}})
    result.manifests["web/templates/cm.yaml"]  # 'n: 3'
"""

from chartrender.chart import Chart, ChartFile, ChartMetadata
from chartrender.config import Config, EngineConfig
from chartrender.engine import Engine, HostFunctions, RenderResult, render
from chartrender.values import Values, read_values

__all__ = [
    "Chart",
    "ChartFile",
    "ChartMetadata",
    "Config",
    "Engine",
    "EngineConfig",
    "HostFunctions",
    "RenderResult",
    "Values",
    "read_values",
    "render",
]
