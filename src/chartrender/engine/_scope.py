"""Scope derivation for a chart tree.

Values are scoped to their charts. If the root chart depends on ``foo``,
which depends on ``bar``, the root's values are examined for a table named
``foo``; that table becomes ``foo``'s values, and a ``bar`` table inside it
becomes ``bar``'s values. A sub-chart never sees its parent's other values.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chartrender.chart import Files
from chartrender.exceptions import NoTableError
from chartrender.values import Values

from ._ordering import is_template_valid

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chartrender.chart import Chart


@dataclass(frozen=True, slots=True)
class Renderable:
    """A template paired with the scope it renders against.

    Attributes:
        template: Template source.
        values: The chart scope (``Chart``, ``Values``, ``Release``...).
        base_path: Chart-path-qualified ``templates`` directory.
    """

    template: str
    values: Values
    base_path: str


def all_templates(chart: Chart, values: Mapping[str, object]) -> dict[str, Renderable]:
    """Collect every template in a chart tree with its scope.

    Args:
        chart: Root of the chart tree.
        values: Render values: ``Values`` plus ``Release``, ``Capabilities``.

    Returns:
        Renderables keyed by chart-path-qualified template name.
    """
    templates: dict[str, Renderable] = {}
    top = values if isinstance(values, Values) else Values(values)
    _ = _collect(chart, templates, top)
    return templates


def _chart_values(chart: Chart, parent: Values) -> Values:
    if chart.is_root:
        root_values = parent.get("Values")
        return root_values if root_values is not None else Values()
    try:
        return parent.table(f"Values.{chart.name}")
    except NoTableError:
        # No section for this sub-chart means no overrides
        return Values()


def _collect(chart: Chart, templates: dict[str, Renderable], parent: Values) -> Values:
    """Derive a chart's scope, recurse into its dependencies, register templates.

    Returns:
        The chart's own scope.
    """
    subcharts = Values()
    scope = Values(
        Chart=chart.metadata.to_template_data(is_root=chart.is_root),
        Files=Files(chart.files),
        Release=parent.get("Release"),
        Capabilities=parent.get("Capabilities"),
        Values=_chart_values(chart, parent),
        Subcharts=subcharts,
    )

    for child in chart.dependencies:
        subcharts[child.name] = _collect(child, templates, scope)

    full_path = chart.full_path
    base_path = posixpath.join(full_path, "templates")
    for template in chart.templates:
        if template is None:
            continue
        if not is_template_valid(chart, template.name):
            continue
        templates[posixpath.join(full_path, template.name)] = Renderable(
            template=template.text,
            values=scope,
            base_path=base_path,
        )

    return scope
