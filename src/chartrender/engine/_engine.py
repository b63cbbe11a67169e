"""The rendering engine.

An Engine owns one template namespace. It derives a scope for every
template in a chart tree, parses all of them into the namespace, then
executes each non-partial template against its scope:

    engine = Engine()
    result = engine.render_all_chart_templates(chart, {"Values": values})
    result.raise_for_errors()
    for name, manifest in result.manifests.items():
        ...

An Engine is good for one render pass. Use ``render()``, or a new Engine,
for each independent chart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jinja2 import TemplateError, TemplateSyntaxError

from chartrender.config import EngineConfig
from chartrender.exceptions import (
    ChartRenderError,
    EngineReuseError,
    RenderError,
    TemplateExecutionError,
)
from chartrender.utils import create_logger, create_logger_from_config
from chartrender.values import Values

from ._diagnostics import cleanup_exec_error, cleanup_parse_error
from ._environment import EnvironmentConfig, strip_placeholder
from ._functions import IncludeGuard, create_function_table, recursion_limit
from ._host import NullHostFunctions
from ._namespace import TemplateNamespace
from ._ordering import is_partial, sort_templates
from ._scope import all_templates

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger

    from chartrender.chart import Chart
    from chartrender.config import Config

    from ._host import HostFunctions
    from ._scope import Renderable


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Outcome of a render pass.

    Attributes:
        manifests: Rendered text keyed by template name, for every template
            that rendered successfully.
        errors: One error per template that failed, in render order.
    """

    manifests: dict[str, str] = field(default_factory=dict)
    errors: tuple[TemplateExecutionError, ...] = ()

    @property
    def ok(self) -> bool:
        """Whether every template rendered."""
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the aggregated failure, if any template failed.

        Raises:
            RenderError: If ``errors`` is not empty.
        """
        if self.errors:
            raise RenderError(self.errors)


class Engine:
    """Render chart templates through one shared namespace.

    Templates can ``include`` each other across the whole chart tree, so
    all of them are parsed before any is executed. A parse failure aborts
    the pass; execution failures are collected per template.
    """

    def __init__(
        self,
        host_functions: HostFunctions | None = None,
        *,
        config: EngineConfig | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize an engine with an empty namespace.

        Args:
            host_functions: Collaborator for ``lookup`` and ``getHostByName``.
                Defaults to NullHostFunctions.
            config: Engine configuration. Defaults to non-strict, non-lint.
            logger: Logger for progress and lint messages.
        """
        self._config: EngineConfig = config or EngineConfig()
        self._logger: FilteringBoundLogger = logger or create_logger()
        self._host: HostFunctions = host_functions or NullHostFunctions(
            logger=self._logger
        )
        self._namespace: TemplateNamespace = TemplateNamespace(
            EnvironmentConfig(strict=self._config.strict),
            functions=create_function_table(self._config, self._host, self._logger),
            guard=IncludeGuard(max_depth=self._config.recursion_max),
        )
        self._rendered: set[str] = set()

    @classmethod
    def from_config(
        cls, config: Config, host_functions: HostFunctions | None = None
    ) -> Engine:
        """Create an engine and its logger from a root configuration.

        Each call creates a new logger. When logging to a file, create the
        logger once and pass it to each Engine instead.
        """
        return cls(
            host_functions,
            config=config.engine,
            logger=create_logger_from_config(config.logging),
        )

    @property
    def config(self) -> EngineConfig:
        """The engine configuration."""
        return self._config

    @property
    def namespace(self) -> TemplateNamespace:
        """The shared template namespace."""
        return self._namespace

    def render_all_chart_templates(
        self, chart: Chart, values: Mapping[str, object]
    ) -> RenderResult:
        """Render every template in a chart tree.

        Args:
            chart: Root of the chart tree.
            values: Render values: ``Values``, and optionally ``Release``
                and ``Capabilities``.

        Returns:
            The rendered manifests and any execution errors.

        Raises:
            TemplateParseError: If any template fails to parse.
            EngineReuseError: If this engine already rendered one of the
                chart's template names.
        """
        return self.render_templates(all_templates(chart, values))

    def render_templates(self, templates: Mapping[str, Renderable]) -> RenderResult:
        """Parse and render a set of scoped templates.

        Args:
            templates: Renderables keyed by template name.

        Returns:
            The rendered manifests and any execution errors.

        Raises:
            TemplateParseError: If any template fails to parse.
            EngineReuseError: If this engine already rendered one of the names.
        """
        reused = self._rendered.intersection(templates)
        if reused:
            names = ", ".join(sorted(reused))
            msg = (
                f"templates already rendered by this engine: {names}; "
                "use a new engine for each render"
            )
            raise EngineReuseError(msg)
        self._rendered.update(templates)

        order = sort_templates(templates)
        self._parse(order, templates)

        manifests: dict[str, str] = {}
        errors: list[TemplateExecutionError] = []
        for name in order:
            if is_partial(name):
                continue
            try:
                manifests[name] = self._render_template(name, templates[name])
            except TemplateExecutionError as e:
                self._logger.warning(
                    "template render failed", template=name, error=str(e)
                )
                errors.append(e)

        self._logger.debug(
            "render finished", rendered=len(manifests), failed=len(errors)
        )
        return RenderResult(manifests=manifests, errors=tuple(errors))

    def _parse(self, order: list[str], templates: Mapping[str, Renderable]) -> None:
        for name in order:
            try:
                self._namespace.parse(name, templates[name].template)
            except TemplateSyntaxError as e:
                error = cleanup_parse_error(name, e)
                self._logger.warning(
                    "template parse failed", template=name, error=str(error)
                )
                raise error from e
        self._logger.debug("parsed templates", count=len(order))

    def _render_template(self, name: str, renderable: Renderable) -> str:
        scope = Values(renderable.values)
        scope["Template"] = Values(Name=name, BasePath=renderable.base_path)

        try:
            with recursion_limit(self._namespace.guard.frame_limit):
                rendered = self._namespace.execute(name, scope)
        except (ChartRenderError, TemplateError) as e:
            raise cleanup_exec_error(name, e, self._namespace.filenames) from e
        except Exception as e:
            # Anything else escaping the evaluator fails this template only
            msg = f"rendering template failed: {e}"
            raise TemplateExecutionError(name, msg) from e

        self._logger.debug("rendered template", template=name)
        return strip_placeholder(rendered)


def render(
    chart: Chart,
    values: Mapping[str, object],
    *,
    host_functions: HostFunctions | None = None,
    config: EngineConfig | None = None,
    logger: FilteringBoundLogger | None = None,
) -> RenderResult:
    """Render a chart tree with a fresh engine.

    Args:
        chart: Root of the chart tree.
        values: Render values: ``Values``, and optionally ``Release`` and
            ``Capabilities``.
        host_functions: Collaborator for ``lookup`` and ``getHostByName``.
        config: Engine configuration.
        logger: Logger for progress and lint messages.

    Returns:
        The rendered manifests and any execution errors.

    Raises:
        TemplateParseError: If any template fails to parse.
    """
    engine = Engine(host_functions, config=config, logger=logger)
    return engine.render_all_chart_templates(chart, values)
