# pyright: reportExplicitAny=false, reportAny=false
"""Jinja2 Environment factory and the missing-value policy."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from jinja2 import ChainableUndefined, Environment, StrictUndefined, nodes
from jinja2.ext import Extension

from ._filters import FILTERS

if TYPE_CHECKING:
    from jinja2.parser import Parser

# Text the evaluator emits for values it cannot render (None, or undefined
# values nested inside containers). Stripped from every rendered output.
NO_VALUE = "<no value>"


def strip_placeholder(text: str) -> str:
    """Remove every occurrence of the "no value" placeholder from output."""
    return text.replace(NO_VALUE, "")


class ZeroUndefined(ChainableUndefined):
    """Undefined value for non-strict rendering.

    Renders as the empty string and tolerates attribute chains such as
    ``Values.missing.deeper``. Its repr, which leaks into output when an
    undefined value sits inside a list or mapping, is the placeholder.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return NO_VALUE


def _finalize(value: object) -> object:
    return NO_VALUE if value is None else value


class ChartEnvironment(Environment):
    """Environment that resolves ``a.b`` on mappings by key before attribute.

    Value tables are dicts, so a key such as ``items`` or ``keys`` would
    otherwise resolve to the dict method of the same name.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            try:
                return obj[attribute]  # pyright: ignore[reportUnknownVariableType]
            except (KeyError, TypeError):
                return super().getattr(obj, attribute)
        return super().getattr(obj, attribute)


class DefineExtension(Extension):
    """Register named templates with ``{% define "name" %}...{% enddefine %}``.

    The block body is compiled on its own and registered in the namespace
    that owns the environment, under the given name, at parse time. The
    block itself renders nothing where it appears.
    """

    tags: ClassVar[set[str]] = {"define"}  # pyright: ignore[reportIncompatibleVariableOverride]

    def parse(self, parser: Parser) -> list[nodes.Node]:
        lineno = next(parser.stream).lineno
        name = str(parser.stream.expect("string").value)
        body = parser.parse_statements(("name:enddefine",), drop_needle=True)

        tree = nodes.Template(body, lineno=lineno)
        _ = tree.set_environment(self.environment)
        code = self.environment.compile(tree, name=name, filename=parser.filename)

        namespace = getattr(self.environment, "template_namespace", None)
        if namespace is not None:
            namespace.define(name, code, filename=parser.filename)
        return []


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for the Jinja2 Environment.

    Attributes:
        strict: Fail on references to values that do not exist instead of
            rendering them as empty.
        autoescape: Enable autoescaping (default: False for manifest templates).
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    strict: bool = False
    autoescape: bool = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True


def create_environment(config: EnvironmentConfig | None = None) -> ChartEnvironment:
    """Create a Jinja2 Environment for rendering chart templates.

    The environment has no loader: templates are compiled and registered
    by a TemplateNamespace. The missing-value policy is applied here, so
    every environment created from the same config behaves the same way.

    Args:
        config: Optional environment configuration. If None, uses defaults.

    Returns:
        Configured Jinja2 Environment.
    """
    if config is None:
        config = EnvironmentConfig()

    # Note: autoescape is intentionally disabled for YAML manifest templates
    env = ChartEnvironment(
        autoescape=config.autoescape,  # noqa: S701
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
        undefined=StrictUndefined if config.strict else ZeroUndefined,
        finalize=_finalize,
        extensions=[DefineExtension],
    )
    env.filters.update(FILTERS)
    return env
