"""Template naming rules and parse order."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chartrender.chart import Chart

# Templates whose file name starts with this prefix are partials: they can
# be included by other templates but produce no output of their own.
PARTIAL_PREFIX = "_"


def is_partial(name: str) -> bool:
    """Whether a template path names a partial."""
    return posixpath.basename(name).startswith(PARTIAL_PREFIX)


def is_template_valid(chart: Chart, name: str) -> bool:
    """Whether a template belongs in a chart of this type.

    Library charts only contribute partials; other charts accept anything.
    """
    if chart.is_library:
        return is_partial(name)
    return True


def _path_depth(name: str) -> int:
    return name.count("/")


def sort_templates(names: Iterable[str]) -> list[str]:
    """Order template paths for parsing.

    Deeper paths (sub-chart templates) come first, and paths at the same
    depth are in lexicographic order. Later parses win when two templates
    define the same name, so parent charts override their sub-charts.

    Args:
        names: Chart-path-qualified template names.

    Returns:
        The names in parse order.
    """
    return sorted(names, key=lambda name: (-_path_depth(name), name))
