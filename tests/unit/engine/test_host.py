import socket
from unittest.mock import MagicMock

import pytest

from chartrender.engine import HostFunctions, NullHostFunctions, SystemHostFunctions
from chartrender.exceptions import HostLookupError


class TestNullHostFunctions:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(NullHostFunctions(), HostFunctions)

    def test_lookup_logs_and_returns_empty(self, logger: MagicMock) -> None:
        host = NullHostFunctions(logger=logger)

        assert host.lookup_kubernetes_resource("v1", "Pod", "default", "web") == {}
        logger.info.assert_called_once_with(
            "received unimplemented lookup",
            api_version="v1",
            kind="Pod",
            namespace="default",
            name="web",
        )

    def test_resolve_returns_empty(self) -> None:
        assert NullHostFunctions().resolve_hostname("example.com") == ""


class TestSystemHostFunctions:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(SystemHostFunctions(), HostFunctions)

    def test_lookup_raises(self) -> None:
        with pytest.raises(HostLookupError, match="no cluster connection"):
            _ = SystemHostFunctions().lookup_kubernetes_resource(
                "v1", "Pod", "default", "web"
            )

    def test_resolve_uses_system_resolver(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(socket, "gethostbyname", lambda _: "10.1.2.3")

        assert SystemHostFunctions().resolve_hostname("db.local") == "10.1.2.3"

    def test_resolve_failure_returns_empty(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail(_: str) -> str:
            raise socket.gaierror("not found")

        monkeypatch.setattr(socket, "gethostbyname", fail)

        assert SystemHostFunctions().resolve_hostname("nope.invalid") == ""
