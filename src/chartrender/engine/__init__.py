"""Template scoping and rendering.

Basic usage:
    from chartrender.engine import render

    result = render(chart, {"Values": {"replicas": 3}})
    result.raise_for_errors()
    result.manifests["mychart/templates/deployment.yaml"]
"""

from ._diagnostics import (
    cleanup_exec_error,
    cleanup_parse_error,
    unwrap_warning,
    warn_wrap,
)
from ._engine import Engine, RenderResult, render
from ._environment import (
    NO_VALUE,
    ChartEnvironment,
    EnvironmentConfig,
    ZeroUndefined,
    create_environment,
    strip_placeholder,
)
from ._functions import (
    FRAMES_PER_INCLUDE,
    RECURSION_MAX_NUMS,
    FailFunction,
    GetHostByNameFunction,
    IncludeFunction,
    IncludeGuard,
    LookupFunction,
    RequiredFunction,
    TplFunction,
    create_function_table,
    recursion_limit,
)
from ._host import HostFunctions, NullHostFunctions, SystemHostFunctions
from ._namespace import TemplateNamespace
from ._ordering import PARTIAL_PREFIX, is_partial, is_template_valid, sort_templates
from ._scope import Renderable, all_templates

__all__ = [
    "FRAMES_PER_INCLUDE",
    "NO_VALUE",
    "PARTIAL_PREFIX",
    "RECURSION_MAX_NUMS",
    "ChartEnvironment",
    "Engine",
    "EnvironmentConfig",
    "FailFunction",
    "GetHostByNameFunction",
    "HostFunctions",
    "IncludeFunction",
    "IncludeGuard",
    "LookupFunction",
    "NullHostFunctions",
    "RenderResult",
    "Renderable",
    "RequiredFunction",
    "SystemHostFunctions",
    "TemplateNamespace",
    "TplFunction",
    "ZeroUndefined",
    "all_templates",
    "cleanup_exec_error",
    "cleanup_parse_error",
    "create_environment",
    "create_function_table",
    "is_partial",
    "is_template_valid",
    "recursion_limit",
    "render",
    "sort_templates",
    "strip_placeholder",
    "unwrap_warning",
    "warn_wrap",
]
