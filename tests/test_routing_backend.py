"""Testy dla backendów sieciowych podmieniających połączenia TCP na gniazda Unix."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpcore
import pytest

from tests.helpers.url_fixtures import iter_causes
from unixroute.routing import (
    AsyncUnixNetworkBackend,
    Directory,
    PathNotFoundError,
    ResolverConnectError,
    UnixNetworkBackend,
)

SOCKET_PATH = "/run/service.sock"


@pytest.fixture
def directory():
    return Directory({"service": SOCKET_PATH})


class TestUnixNetworkBackend:
    """Testy backendu sync."""

    def test_connect_tcp_dials_resolved_socket(self, directory):
        """Test że connect_tcp łączy się z gniazdem, pomijając port."""
        inner = MagicMock(spec=httpcore.NetworkBackend)
        backend = UnixNetworkBackend(directory, inner)

        stream = backend.connect_tcp(
            "service", 8080, timeout=1.5, local_address="127.0.0.1"
        )

        assert stream is inner.connect_unix_socket.return_value
        inner.connect_unix_socket.assert_called_once_with(
            SOCKET_PATH, timeout=1.5, socket_options=None
        )
        inner.connect_tcp.assert_not_called()

    def test_same_host_any_port_same_socket(self, directory):
        inner = MagicMock(spec=httpcore.NetworkBackend)
        backend = UnixNetworkBackend(directory, inner)

        backend.connect_tcp("service", 80)
        backend.connect_tcp("service", 443)

        paths = [call.args[0] for call in inner.connect_unix_socket.call_args_list]
        assert paths == [SOCKET_PATH, SOCKET_PATH]

    def test_connect_tcp_unknown_host(self, directory):
        """Test że brak mapowania kończy się ConnectError z przyczyną PathNotFoundError."""
        inner = MagicMock(spec=httpcore.NetworkBackend)
        backend = UnixNetworkBackend(directory, inner)

        with pytest.raises(httpcore.ConnectError) as exc_info:
            backend.connect_tcp("missing", 80)

        assert isinstance(exc_info.value.__cause__, PathNotFoundError)
        assert isinstance(exc_info.value, ResolverConnectError)
        assert isinstance(exc_info.value.resolver_error, PathNotFoundError)
        inner.connect_unix_socket.assert_not_called()

    def test_custom_resolver_error_propagates_as_cause(self):
        """Test resolvera innego niż Directory."""

        class FailingResolver:
            def lookup_path(self, hostname):
                raise KeyError(hostname)

        inner = MagicMock(spec=httpcore.NetworkBackend)
        backend = UnixNetworkBackend(FailingResolver(), inner)

        with pytest.raises(httpcore.ConnectError) as exc_info:
            backend.connect_tcp("service", 80)

        assert any(isinstance(exc, KeyError) for exc in iter_causes(exc_info.value))

    def test_socket_options_passed_through(self, directory):
        inner = MagicMock(spec=httpcore.NetworkBackend)
        backend = UnixNetworkBackend(directory, inner)
        options = [(1, 2, 3)]

        backend.connect_tcp("service", 80, socket_options=options)

        inner.connect_unix_socket.assert_called_once_with(
            SOCKET_PATH, timeout=None, socket_options=options
        )

    def test_connect_unix_socket_and_sleep_delegate(self, directory):
        inner = MagicMock(spec=httpcore.NetworkBackend)
        backend = UnixNetworkBackend(directory, inner)

        backend.connect_unix_socket("/tmp/other.sock", timeout=2.0)
        backend.sleep(0.1)

        inner.connect_unix_socket.assert_called_once_with(
            "/tmp/other.sock", timeout=2.0, socket_options=None
        )
        inner.sleep.assert_called_once_with(0.1)


class TestAsyncUnixNetworkBackend:
    """Testy backendu async."""

    @pytest.mark.asyncio
    async def test_connect_tcp_dials_resolved_socket(self, directory):
        inner = MagicMock(spec=httpcore.AsyncNetworkBackend)
        inner.connect_unix_socket = AsyncMock(return_value="stream")
        backend = AsyncUnixNetworkBackend(directory, inner)

        stream = await backend.connect_tcp("service", 443, timeout=3.0)

        assert stream == "stream"
        inner.connect_unix_socket.assert_awaited_once_with(
            SOCKET_PATH, timeout=3.0, socket_options=None
        )

    @pytest.mark.asyncio
    async def test_connect_tcp_unknown_host(self, directory):
        inner = MagicMock(spec=httpcore.AsyncNetworkBackend)
        inner.connect_unix_socket = AsyncMock()
        backend = AsyncUnixNetworkBackend(directory, inner)

        with pytest.raises(httpcore.ConnectError) as exc_info:
            await backend.connect_tcp("missing", 80)

        assert isinstance(exc_info.value.__cause__, PathNotFoundError)
        assert isinstance(exc_info.value.resolver_error, PathNotFoundError)
        inner.connect_unix_socket.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dial_honors_cancellation(self, directory):
        """Test że anulowanie przerywa nawiązywanie połączenia."""
        never = asyncio.Event()

        async def hanging_connect(path, timeout=None, socket_options=None):
            await never.wait()

        inner = MagicMock(spec=httpcore.AsyncNetworkBackend)
        inner.connect_unix_socket = hanging_connect
        backend = AsyncUnixNetworkBackend(directory, inner)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(backend.connect_tcp("service", 80), timeout=0.05)

    @pytest.mark.asyncio
    async def test_sleep_delegates(self, directory):
        inner = MagicMock(spec=httpcore.AsyncNetworkBackend)
        inner.sleep = AsyncMock()
        backend = AsyncUnixNetworkBackend(directory, inner)

        await backend.sleep(0.2)

        inner.sleep.assert_awaited_once_with(0.2)
