"""Chart trees: metadata, template sources, files and dependencies."""

from ._files import Files
from ._metadata import ChartMetadata, Maintainer
from ._models import Chart, ChartFile

__all__ = [
    "Chart",
    "ChartFile",
    "ChartMetadata",
    "Files",
    "Maintainer",
]
