"""Host collaborators for cluster lookups and hostname resolution."""

from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from chartrender.exceptions import HostLookupError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger


@runtime_checkable
class HostFunctions(Protocol):
    """Functions the host provides to templates.

    Both are called synchronously from template execution. The renderer
    does not cache or retry; implementations own their own policies.
    """

    def lookup_kubernetes_resource(
        self, api_version: str, kind: str, namespace: str, name: str
    ) -> Mapping[str, object]:
        """Fetch a cluster resource as a generic structured value.

        An empty namespace means a cluster-scoped lookup; an empty name
        means "list all". Failures are raised and surface as template
        execution errors.
        """
        ...

    def resolve_hostname(self, hostname: str) -> str:
        """Resolve a hostname to an address, or return "" if it cannot be."""
        ...


@dataclass(frozen=True, slots=True)
class NullHostFunctions:
    """Host functions with no cluster and no resolver.

    Lookups are logged and return an empty resource; hostnames resolve to "".
    """

    logger: FilteringBoundLogger | None = None

    def lookup_kubernetes_resource(
        self, api_version: str, kind: str, namespace: str, name: str
    ) -> Mapping[str, object]:
        if self.logger is not None:
            self.logger.info(
                "received unimplemented lookup",
                api_version=api_version,
                kind=kind,
                namespace=namespace,
                name=name,
            )
        return {}

    def resolve_hostname(self, hostname: str) -> str:
        del hostname
        return ""


@dataclass(frozen=True, slots=True)
class SystemHostFunctions:
    """Host functions backed by the local system resolver.

    There is no cluster connection, so lookups fail.
    """

    def lookup_kubernetes_resource(
        self, api_version: str, kind: str, namespace: str, name: str
    ) -> Mapping[str, object]:
        msg = (
            f"no cluster connection for lookup of {kind} "
            f"{namespace}/{name} ({api_version})"
        )
        raise HostLookupError(msg)

    def resolve_hostname(self, hostname: str) -> str:
        try:
            return socket.gethostbyname(hostname)
        except (OSError, UnicodeError):
            return ""
