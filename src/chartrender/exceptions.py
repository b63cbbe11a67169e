"""chartrender exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ChartRenderError(Exception):
    """Base exception for chartrender errors."""


# =============================================================================
# Values Exceptions
# =============================================================================


class ValuesError(ChartRenderError):
    """Base exception for value table errors."""


class NoTableError(ValuesError, LookupError):
    """Raised when a dotted path segment does not resolve to a table."""

    def __init__(self, key: str) -> None:
        """Initialize with the offending path segment."""
        super().__init__(f'"{key}" is not a table')
        self.key: str = key


class NoValueError(ValuesError, LookupError):
    """Raised when a dotted path does not resolve to a non-table value."""

    def __init__(self, key: str) -> None:
        """Initialize with the offending leaf segment."""
        super().__init__(f'"{key}" is not a value')
        self.key: str = key


class InvalidPathError(ValuesError, ValueError):
    """Raised when a value path is malformed (for example, empty)."""


class ValuesParseError(ValuesError):
    """Raised when a serialized values document cannot be parsed."""


# =============================================================================
# Chart Exceptions
# =============================================================================


class ChartError(ChartRenderError):
    """Raised when a chart tree cannot be built from its input data."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateParseError(ChartRenderError):
    """Raised when a template body cannot be parsed.

    Attributes:
        template: Registered name of the template that failed.
        location: ``file:line`` location, if the parser reported one.
        reason: The parser's final message.
    """

    def __init__(
        self, template: str, reason: str, *, location: str | None = None
    ) -> None:
        """Initialize with the template name, message and optional location."""
        self.template: str = template
        self.location: str | None = location
        self.reason: str = reason
        if location is not None:
            message = f"parse error at ({location}): {reason}"
        else:
            message = f"parse error in ({template}): {reason}"
        super().__init__(message)


class TemplateExecutionError(ChartRenderError):
    """Raised when a template fails during execution.

    Attributes:
        template: Registered name of the template being rendered.
        location: ``file:line`` of the outermost template frame, if known.
        reason: The user-facing message, without evaluator decoration.
    """

    def __init__(
        self, template: str, reason: str, *, location: str | None = None
    ) -> None:
        """Initialize with the template name, message and optional location."""
        self.template: str = template
        self.location: str | None = location
        self.reason: str = reason
        if location is not None:
            message = f"execution error at ({location}): {reason}"
        else:
            message = f"execution error in ({template}): {reason}"
        super().__init__(message)


class TemplateFunctionError(ChartRenderError):
    """Base exception for failures raised by template functions."""


class IncludeRecursionError(TemplateFunctionError):
    """Raised when ``include`` nesting for a template name exceeds the bound."""

    def __init__(self, name: str) -> None:
        """Initialize with the template name that recursed."""
        super().__init__(
            f"rendering template has a nested reference name: {name}: "
            "unable to execute template"
        )
        self.name: str = name


class RequiredValueError(TemplateFunctionError):
    """Raised by ``required`` when a value is missing."""


class TemplateFailError(TemplateFunctionError):
    """Raised by ``fail``."""


class TplError(TemplateFunctionError):
    """Raised when ``tpl`` cannot parse or execute its template text."""


class HostLookupError(TemplateFunctionError):
    """Raised when the resource lookup collaborator fails."""


class TemplateNotDefinedError(TemplateFunctionError, LookupError):
    """Raised when executing a name that is not registered in the namespace."""

    def __init__(self, name: str) -> None:
        """Initialize with the missing template name."""
        super().__init__(f'no template "{name}" is defined')
        self.name: str = name


class RenderError(ChartRenderError):
    """Aggregate of every execution failure from one render pass.

    Attributes:
        errors: The individual execution failures, in render order.
    """

    def __init__(self, errors: Sequence[TemplateExecutionError]) -> None:
        """Initialize with the collected execution failures."""
        super().__init__("\n".join(str(error) for error in errors))
        self.errors: tuple[TemplateExecutionError, ...] = tuple(errors)


# =============================================================================
# Engine and Configuration Exceptions
# =============================================================================


class EngineReuseError(ChartRenderError):
    """Raised when an engine is asked to re-render names it already rendered."""


class ConfigError(ChartRenderError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column
