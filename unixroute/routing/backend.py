"""Network backend httpcore podmieniający połączenia TCP na gniazda Unix."""

from __future__ import annotations

import typing
from typing import Optional

import httpcore

from unixroute.utils.logger import get_logger

from .directory import Resolver

logger = get_logger(__name__)


class ResolverConnectError(httpcore.ConnectError):
    """
    Błąd połączenia z powodu nieudanego rozwiązania hostname.

    Pula połączeń httpcore zgłasza błąd ponownie z `from None`, więc błąd
    resolvera jest przechowywany w atrybucie, a nie tylko w __cause__.
    """

    def __init__(self, message: str, resolver_error: BaseException):
        super().__init__(message)
        self.resolver_error = resolver_error


def resolve_socket_path(resolver: Resolver, host: str, port: int) -> str:
    """
    Rozwiązuje ścieżkę gniazda Unix dla celu połączenia TCP.

    Port jest pomijany - o gnieździe decyduje wyłącznie hostname.

    Raises:
        ResolverConnectError: Jeśli resolver nie zna hostname (błąd resolvera
            w atrybucie resolver_error)
    """
    try:
        path = resolver.lookup_path(host)
    except Exception as exc:
        logger.debug(f"Brak gniazda Unix dla {host}:{port}: {exc}")
        raise ResolverConnectError(str(exc), exc) from exc

    logger.debug(f"Połączenie {host}:{port} kierowane do gniazda {path}")
    return path


class UnixNetworkBackend(httpcore.NetworkBackend):
    """
    Backend sieciowy (sync) kierujący connect_tcp do gniazd Unix.

    Zarówno połączenia HTTP, jak i HTTPS przechodzą przez connect_tcp -
    httpcore wykonuje start_tls na zwróconym strumieniu.
    """

    def __init__(self, resolver: Resolver, backend: httpcore.NetworkBackend):
        self.resolver = resolver
        self.backend = backend

    def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        local_address: Optional[str] = None,
        socket_options: Optional[typing.Iterable[httpcore.SOCKET_OPTION]] = None,
    ) -> httpcore.NetworkStream:
        path = resolve_socket_path(self.resolver, host, port)
        return self.backend.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )

    def connect_unix_socket(
        self,
        path: str,
        timeout: Optional[float] = None,
        socket_options: Optional[typing.Iterable[httpcore.SOCKET_OPTION]] = None,
    ) -> httpcore.NetworkStream:
        return self.backend.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )

    def sleep(self, seconds: float) -> None:
        self.backend.sleep(seconds)


class AsyncUnixNetworkBackend(httpcore.AsyncNetworkBackend):
    """Backend sieciowy (async) kierujący connect_tcp do gniazd Unix."""

    def __init__(self, resolver: Resolver, backend: httpcore.AsyncNetworkBackend):
        self.resolver = resolver
        self.backend = backend

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: Optional[float] = None,
        local_address: Optional[str] = None,
        socket_options: Optional[typing.Iterable[httpcore.SOCKET_OPTION]] = None,
    ) -> httpcore.AsyncNetworkStream:
        path = resolve_socket_path(self.resolver, host, port)
        return await self.backend.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )

    async def connect_unix_socket(
        self,
        path: str,
        timeout: Optional[float] = None,
        socket_options: Optional[typing.Iterable[httpcore.SOCKET_OPTION]] = None,
    ) -> httpcore.AsyncNetworkStream:
        return await self.backend.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )

    async def sleep(self, seconds: float) -> None:
        await self.backend.sleep(seconds)
