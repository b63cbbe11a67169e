"""The shared template namespace."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from chartrender.exceptions import TemplateNotDefinedError

from ._environment import EnvironmentConfig, create_environment
from ._functions import IncludeFunction, IncludeGuard, TplFunction

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import CodeType

    from jinja2 import Template


def _template_context(data: object) -> dict[str, object]:
    """Build template variables from the data a template renders against.

    A mapping's keys become variables; the data itself is always ``this``.
    """
    context: dict[str, object] = dict(data) if isinstance(data, Mapping) else {}  # pyright: ignore[reportUnknownArgumentType]
    context["this"] = data
    return context


class TemplateNamespace:
    """Named templates that can reference each other.

    Parsing a source registers it, and every ``define`` block inside it,
    under its name; parsing a name again rebinds it. Compiled code is kept
    per name, so a clone copies the registry without reparsing anything.

    The namespace binds ``include`` and ``tpl`` to itself: templates
    executed through a clone resolve names in the clone.

    A namespace accumulates state. Use a fresh one for each independent
    render pass.
    """

    def __init__(
        self,
        config: EnvironmentConfig | None = None,
        *,
        functions: Mapping[str, Callable[..., object]] | None = None,
        guard: IncludeGuard | None = None,
        code: Mapping[str, CodeType] | None = None,
        filenames: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize a namespace.

        Args:
            config: Environment configuration, including the missing-value
                policy. Defaults to non-strict.
            functions: Extra template functions (``required``, ``lookup``...).
            guard: Include depth tracking. Share it between a namespace and
                its clones so recursion through ``tpl`` is still bounded.
            code: Compiled templates to start from.
            filenames: Filenames of the templates in ``code``.
        """
        self._config: EnvironmentConfig = config or EnvironmentConfig()
        self._functions: dict[str, Callable[..., object]] = dict(functions or {})
        self._guard: IncludeGuard = guard or IncludeGuard()
        self._code: dict[str, CodeType] = dict(code or {})
        self._filenames: set[str] = set(filenames)
        self._templates: dict[str, Template] = {}

        self._environment = create_environment(self._config)
        self._environment.extend(template_namespace=self)
        self._environment.globals.update(self._functions)
        self._environment.globals["include"] = IncludeFunction(self, self._guard)
        self._environment.globals["tpl"] = TplFunction(self)

    @property
    def config(self) -> EnvironmentConfig:
        """The environment configuration."""
        return self._config

    @property
    def guard(self) -> IncludeGuard:
        """Include depth tracking shared with clones."""
        return self._guard

    @property
    def filenames(self) -> frozenset[str]:
        """Filenames of every template compiled into this namespace."""
        return frozenset(self._filenames)

    def __contains__(self, name: object) -> bool:
        return name in self._code

    def names(self) -> list[str]:
        """Registered template names, sorted."""
        return sorted(self._code)

    def parse(self, name: str, source: str) -> None:
        """Compile a template source and register it under ``name``.

        Args:
            name: Registered name, also used as the filename in diagnostics.
            source: Template source.

        Raises:
            jinja2.TemplateSyntaxError: If the source is malformed.
        """
        code = self._environment.compile(source, name=name, filename=name)
        self.define(name, code, filename=name)

    def define(self, name: str, code: CodeType, *, filename: str | None = None) -> None:
        """Register compiled template code under ``name``."""
        self._code[name] = code
        _ = self._templates.pop(name, None)
        if filename is not None:
            self._filenames.add(filename)

    def execute(self, name: str, data: object = None) -> str:
        """Render a registered template.

        Args:
            name: Registered template name.
            data: Value the template renders against.

        Returns:
            The rendered text. Placeholders are not stripped.

        Raises:
            TemplateNotDefinedError: If no template is registered as ``name``.
        """
        return self._template(name).render(_template_context(data))

    def clone(self) -> TemplateNamespace:
        """Create a private copy of this namespace.

        The copy gets a fresh environment with the same missing-value
        policy and functions; templates registered in it are not visible
        here. Include depths stay shared.
        """
        return TemplateNamespace(
            self._config,
            functions=self._functions,
            guard=self._guard,
            code=self._code,
            filenames=frozenset(self._filenames),
        )

    def _template(self, name: str) -> Template:
        template = self._templates.get(name)
        if template is not None:
            return template

        code = self._code.get(name)
        if code is None:
            raise TemplateNotDefinedError(name)

        env = self._environment
        template = env.template_class.from_code(env, code, env.make_globals(None))
        self._templates[name] = template
        return template
