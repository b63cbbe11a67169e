"""Template functions that close over engine state.

Each function is a frozen dataclass with a ``__call__`` method, so the
state it closes over (namespace, include depths, lint mode, host) is
explicit and the function can be tested on its own.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jinja2 import TemplateError, TemplateSyntaxError, Undefined

from chartrender.exceptions import (
    ChartRenderError,
    HostLookupError,
    IncludeRecursionError,
    RequiredValueError,
    TemplateFailError,
    TplError,
)
from chartrender.values import Values

from ._diagnostics import warn_wrap
from ._environment import strip_placeholder

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from structlog.typing import FilteringBoundLogger

    from chartrender.config import EngineConfig

    from ._host import HostFunctions
    from ._namespace import TemplateNamespace

RECURSION_MAX_NUMS = 1000

# Interpreter frames one include level can use, counting the evaluator's
# frames for the blocks and loops around the call
FRAMES_PER_INCLUDE = 20

# Name under which tpl text is registered in its private namespace
TPL_TEMPLATE_NAME = "tpl"


@contextmanager
def recursion_limit(limit: int) -> Iterator[None]:
    """Raise the interpreter recursion limit to at least ``limit`` for a block.

    The previous limit is restored on exit. Nested uses only change the
    limit in the outermost block that needs a higher one.
    """
    previous = sys.getrecursionlimit()
    if previous >= limit:
        yield
        return

    sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


@dataclass(slots=True)
class IncludeGuard:
    """Per-name ``include`` nesting depths, shared by a namespace and its clones.

    Attributes:
        max_depth: Depth beyond which a further include of the same name fails.
        depths: Current nesting depth keyed by template name.
    """

    max_depth: int = RECURSION_MAX_NUMS
    depths: dict[str, int] = field(default_factory=dict)

    @property
    def frame_limit(self) -> int:
        """Interpreter recursion limit that lets includes nest to ``max_depth``."""
        return self.max_depth * FRAMES_PER_INCLUDE


@dataclass(frozen=True, slots=True)
class IncludeFunction:
    """Execute a registered template and return its output.

    Template usage: {{ include("mychart.labels", this) | nindent(4) }}
    """

    namespace: TemplateNamespace
    guard: IncludeGuard

    def __call__(self, name: str, data: object = None) -> str:
        """Render template ``name`` against ``data``.

        Args:
            name: Registered template name.
            data: Value the template renders against.

        Returns:
            The rendered text.

        Raises:
            IncludeRecursionError: If nesting for ``name`` exceeds the bound.
        """
        depths = self.guard.depths
        depth = depths.get(name, 0)
        if depth > self.guard.max_depth:
            raise IncludeRecursionError(name)

        depths[name] = depth + 1
        try:
            with recursion_limit(self.guard.frame_limit):
                return self.namespace.execute(name, data)
        except RecursionError as e:
            # The interpreter stack ran out before the depth bound did
            raise IncludeRecursionError(name) from e
        finally:
            depths[name] -= 1


@dataclass(frozen=True, slots=True)
class TplFunction:
    """Render a string as a template.

    The text is parsed in a private copy of the namespace, so it can use
    every known template and define its own without touching the shared
    namespace.

    Template usage: {{ tpl(Values.greeting, this) }}
    """

    namespace: TemplateNamespace

    def __call__(self, text: str, data: object = None) -> str:
        """Parse and render ``text`` against ``data``.

        Args:
            text: Template source.
            data: Value the template renders against.

        Returns:
            The rendered text, with placeholders stripped.

        Raises:
            TplError: If the text cannot be parsed or fails to execute.
        """
        namespace = self.namespace.clone()
        try:
            namespace.parse(TPL_TEMPLATE_NAME, text)
        except TemplateSyntaxError as e:
            msg = f"cannot parse template {text!r}: {e.message or e}"
            raise TplError(msg) from e

        try:
            with recursion_limit(namespace.guard.frame_limit):
                rendered = namespace.execute(TPL_TEMPLATE_NAME, data)
        except (ChartRenderError, TemplateError) as e:
            msg = f"error during tpl function execution for {text!r}: {e}"
            raise TplError(msg) from e

        return strip_placeholder(rendered)


def _is_missing(value: object) -> bool:
    return value is None or isinstance(value, Undefined) or value == ""


@dataclass(frozen=True, slots=True)
class RequiredFunction:
    """Return a value, or fail with a message when it is missing.

    Template usage: {{ required("image.tag is required", Values.image.tag) }}
    """

    logger: FilteringBoundLogger
    lint_mode: bool = False

    def __call__(self, message: str, value: object = None) -> object:
        """Check that ``value`` is present.

        Args:
            message: Message to report when the value is missing.
            value: The value to check. None, undefined values and empty
                strings are missing.

        Returns:
            ``value`` when present. In lint mode, "" when missing.

        Raises:
            RequiredValueError: If the value is missing outside lint mode.
        """
        if not _is_missing(value):
            return value
        if self.lint_mode:
            self.logger.info("missing required value", message=message)
            return ""
        raise RequiredValueError(warn_wrap(message))


@dataclass(frozen=True, slots=True)
class FailFunction:
    """Fail the render with a message.

    Template usage: {{ fail("unsupported storage class") }}
    """

    logger: FilteringBoundLogger
    lint_mode: bool = False

    def __call__(self, message: str) -> str:
        if self.lint_mode:
            self.logger.info("fail", message=message)
            return ""
        raise TemplateFailError(warn_wrap(message))


@dataclass(frozen=True, slots=True)
class LookupFunction:
    """Look up a cluster resource through the host.

    Template usage: {{ lookup("v1", "Secret", Release.Namespace, "db") }}
    """

    host: HostFunctions

    def __call__(
        self, api_version: str, kind: str, namespace: str, name: str
    ) -> Values:
        try:
            resource = self.host.lookup_kubernetes_resource(
                api_version, kind, namespace, name
            )
        except ChartRenderError:
            raise
        except Exception as e:
            msg = f"lookup of {kind} {namespace}/{name} ({api_version}) failed: {e}"
            raise HostLookupError(msg) from e
        return Values(resource)


@dataclass(frozen=True, slots=True)
class GetHostByNameFunction:
    """Resolve a hostname through the host, when DNS is enabled.

    Template usage: {{ getHostByName("db.example.com") }}
    """

    host: HostFunctions
    enabled: bool = False

    def __call__(self, hostname: str) -> str:
        if not self.enabled:
            return ""
        return self.host.resolve_hostname(hostname)


def create_function_table(
    config: EngineConfig,
    host: HostFunctions,
    logger: FilteringBoundLogger,
) -> dict[str, Callable[..., object]]:
    """Create the template functions that depend on engine configuration.

    ``include`` and ``tpl`` are bound by each TemplateNamespace to itself and
    are not part of this table. ``lookup`` is left out in lint mode, so lint
    runs never reach a live cluster.

    Args:
        config: Engine configuration.
        host: Host collaborator for lookups and hostname resolution.
        logger: Logger for lint-mode messages.

    Returns:
        Functions keyed by their template name.
    """
    functions: dict[str, Callable[..., object]] = {
        "required": RequiredFunction(logger=logger, lint_mode=config.lint_mode),
        "fail": FailFunction(logger=logger, lint_mode=config.lint_mode),
        "getHostByName": GetHostByNameFunction(host=host, enabled=config.enable_dns),
    }
    if not config.lint_mode:
        functions["lookup"] = LookupFunction(host=host)
    return functions
