"""Normalization of template parse and execution errors.

Template functions such as ``required`` and ``fail`` wrap their message in
a delimiter pair. However deep the failing call is nested, and whatever
the evaluator or ``tpl`` adds around it, only the delimited message reaches
the user.
"""

from __future__ import annotations

import re
import traceback
from typing import TYPE_CHECKING

from chartrender.exceptions import TemplateExecutionError, TemplateParseError

if TYPE_CHECKING:
    from collections.abc import Collection

    from jinja2 import TemplateSyntaxError

_WARN_START = "CHARTRENDER_ERR_START"
_WARN_END = "CHARTRENDER_ERR_END"
_WARN_PATTERN = re.compile(f"{_WARN_START}(.*){_WARN_END}", re.DOTALL)


def warn_wrap(message: str) -> str:
    """Wrap a user message so it survives error decoration."""
    return f"{_WARN_START}{message}{_WARN_END}"


def unwrap_warning(text: str) -> str | None:
    """Extract a wrapped user message from error text, if present."""
    match = _WARN_PATTERN.search(text)
    return match.group(1) if match else None


def template_location(exc: BaseException, filenames: Collection[str]) -> str | None:
    """Find the outermost template frame in an exception's traceback.

    Args:
        exc: The exception raised during template execution.
        filenames: Filenames of compiled templates.

    Returns:
        ``file:line`` of the outermost template frame, or None.
    """
    for frame in traceback.extract_tb(exc.__traceback__):
        if frame.filename in filenames:
            return f"{frame.filename}:{frame.lineno}"
    return None


def cleanup_parse_error(name: str, exc: TemplateSyntaxError) -> TemplateParseError:
    """Rewrite a syntax error as ``parse error at (<file:line>): <message>``.

    Args:
        name: Registered name of the template being parsed.
        exc: The evaluator's syntax error.

    Returns:
        The normalized parse error.
    """
    filename = exc.filename or exc.name or name
    location = f"{filename}:{exc.lineno}" if exc.lineno else None
    return TemplateParseError(name, exc.message or str(exc), location=location)


def cleanup_exec_error(
    name: str, exc: BaseException, filenames: Collection[str]
) -> TemplateExecutionError:
    """Rewrite an execution failure as ``execution error at (<file:line>): <msg>``.

    Args:
        name: Registered name of the template being rendered.
        exc: The failure raised from template execution.
        filenames: Filenames of compiled templates, used to locate the failure.

    Returns:
        The normalized execution error.
    """
    text = str(exc)
    reason = unwrap_warning(text)
    if reason is None:
        reason = text
    return TemplateExecutionError(
        name, reason, location=template_location(exc, filenames)
    )
