"""Transport HTTP kierujący requesty o wyróżnionych schematach do gniazd Unix."""

from __future__ import annotations

import copy
import re
from typing import Dict, Optional, Tuple, Union

import httpcore
import httpx

from unixroute.config import SETTINGS
from unixroute.utils.logger import get_logger

from .backend import AsyncUnixNetworkBackend, UnixNetworkBackend
from .directory import Resolver
from .errors import (
    ResolverEmptyError,
    SchemeEmptyError,
    SchemeInvalidError,
    TransportEmptyError,
    TransportInvalidError,
)
from .registration import mount_transport, scheme_pattern

logger = get_logger(__name__)

HTTP_SCHEME = "http"
HTTPS_SCHEME = "https"

_SCHEME_RE = re.compile(r"[a-z][a-z0-9+.\-]*")


def validate_scheme(scheme: str) -> str:
    """
    Waliduje schemat URL zastępujący http/https.

    Returns:
        Schemat w postaci kanonicznej (małe litery)

    Raises:
        SchemeEmptyError: Jeśli schemat jest pusty
        SchemeInvalidError: Jeśli schemat koliduje z http/https lub ma
            niepoprawną składnię
    """
    if not scheme:
        raise SchemeEmptyError("scheme is not specified")

    normalized = scheme.lower()
    if normalized in (HTTP_SCHEME, HTTPS_SCHEME) or not _SCHEME_RE.fullmatch(
        normalized
    ):
        raise SchemeInvalidError(f"scheme is not valid: {scheme}")
    return normalized


def _resolve_schemes(
    scheme_http: Optional[str], scheme_https: Optional[str]
) -> Tuple[str, str]:
    http_scheme = validate_scheme(
        SETTINGS.SCHEME_HTTP if scheme_http is None else scheme_http
    )
    https_scheme = validate_scheme(
        SETTINGS.SCHEME_HTTPS if scheme_https is None else scheme_https
    )
    if http_scheme == https_scheme:
        raise SchemeInvalidError(
            f"scheme is not valid: {https_scheme} is used for both HTTP and HTTPS"
        )
    return http_scheme, https_scheme


def _clone_pool_options(
    pool: Union[httpcore.ConnectionPool, httpcore.AsyncConnectionPool],
) -> Dict[str, object]:
    """Odczytuje ustawienia puli połączeń upstream potrzebne do jej klonu."""
    return {
        "ssl_context": pool._ssl_context,
        "max_connections": pool._max_connections,
        "max_keepalive_connections": pool._max_keepalive_connections,
        "keepalive_expiry": pool._keepalive_expiry,
        "http1": pool._http1,
        "http2": pool._http2,
        "retries": pool._retries,
        "socket_options": pool._socket_options,
    }


def clone_transport(
    upstream: httpx.HTTPTransport, resolver: Resolver
) -> httpx.HTTPTransport:
    """
    Tworzy klon transportu upstream z połączeniami kierowanymi do gniazd Unix.

    Klon dziedziczy ustawienia TLS, limity, keep-alive, HTTP/1 i HTTP/2 oraz
    retries. Proxy i local_address nie są przenoszone.
    """
    pool = upstream._pool
    cloned = copy.copy(upstream)
    cloned._pool = httpcore.ConnectionPool(
        network_backend=UnixNetworkBackend(resolver, pool._network_backend),
        **_clone_pool_options(pool),
    )
    return cloned


def async_clone_transport(
    upstream: httpx.AsyncHTTPTransport, resolver: Resolver
) -> httpx.AsyncHTTPTransport:
    """Async odpowiednik clone_transport."""
    pool = upstream._pool
    cloned = copy.copy(upstream)
    cloned._pool = httpcore.AsyncConnectionPool(
        network_backend=AsyncUnixNetworkBackend(resolver, pool._network_backend),
        **_clone_pool_options(pool),
    )
    return cloned


class _RoutingConfig:
    """Wspólna konfiguracja i logika przepisywania schematów (sync/async)."""

    upstream_type: type = object

    def _configure(
        self,
        resolver: Optional[Resolver],
        upstream: object,
        scheme_http: Optional[str],
        scheme_https: Optional[str],
    ) -> None:
        if resolver is None:
            raise ResolverEmptyError("resolver is not specified")
        if upstream is None:
            raise TransportEmptyError("http transport is not specified")
        if not isinstance(upstream, self.upstream_type):
            raise TransportInvalidError(
                f"http transport is not valid: expected "
                f"{self.upstream_type.__name__}, got {type(upstream).__name__}"
            )

        self.resolver = resolver
        self.upstream = upstream
        self.scheme_http, self.scheme_https = _resolve_schemes(
            scheme_http, scheme_https
        )

    @property
    def schemes(self) -> Tuple[str, str]:
        """Schematy URL (HTTP, HTTPS) kierowane do gniazd Unix."""
        return self.scheme_http, self.scheme_https

    def _target_scheme(self, scheme: str) -> Optional[str]:
        if scheme == self.scheme_http:
            return HTTP_SCHEME
        if scheme == self.scheme_https:
            return HTTPS_SCHEME
        return None

    def _rewrite(self, request: httpx.Request, scheme: str) -> httpx.Request:
        # Klon requestu - obiekt wywołującego pozostaje bez zmian
        return httpx.Request(
            request.method,
            request.url.copy_with(scheme=scheme),
            headers=request.headers,
            stream=request.stream,
            extensions=request.extensions,
        )

    def mounts(self) -> Dict[str, object]:
        """
        Zwraca mapowanie dla parametru `mounts` klienta httpx.

        Przykład:
            client = httpx.Client(mounts=transport.mounts())
        """
        return {scheme_pattern(scheme): self for scheme in self.schemes}

    def register(self, client) -> None:
        """
        Rejestruje transport jako handler obu schematów w kliencie httpx.

        Raises:
            SchemeNotRegisteredError: Jeśli rejestracja się nie powiodła
        """
        mount_transport(client, self, self.schemes)


class UnixTransport(_RoutingConfig, httpx.BaseTransport):
    """
    Transport (sync) kierujący requesty do gniazd Unix.

    Requesty o schematach scheme_http/scheme_https są klonowane, ich schemat
    jest zamieniany na http/https, a połączenie nawiązywane jest z gniazdem
    Unix zwróconym przez resolver dla hosta z URL. Pozostałe requesty trafiają
    bez zmian do transportu upstream.

    Przykład:
        directory = Directory({"service": "/run/service.sock"})
        transport = UnixTransport(directory, httpx.HTTPTransport())
        with httpx.Client(transport=transport) as client:
            client.get("http+unix://service/status")
    """

    upstream_type = httpx.HTTPTransport

    def __init__(
        self,
        resolver: Resolver,
        upstream: httpx.HTTPTransport,
        *,
        scheme_http: Optional[str] = None,
        scheme_https: Optional[str] = None,
    ):
        """
        Inicjalizacja transportu.

        Args:
            resolver: Resolver ścieżek gniazd po hostname (np. Directory)
            upstream: Transport obsługujący pozostałe schematy; jego klon
                obsługuje ruch przez gniazda Unix
            scheme_http: Schemat dla HTTP przez gniazdo (default: SETTINGS.SCHEME_HTTP)
            scheme_https: Schemat dla HTTPS przez gniazdo (default: SETTINGS.SCHEME_HTTPS)

        Raises:
            ResolverEmptyError, TransportEmptyError, TransportInvalidError,
            SchemeEmptyError, SchemeInvalidError
        """
        self._configure(resolver, upstream, scheme_http, scheme_https)
        self._base = clone_transport(self.upstream, self.resolver)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        scheme = self._target_scheme(request.url.scheme)
        if scheme is None:
            return self.upstream.handle_request(request)

        logger.debug(f"{request.method} {request.url} przez gniazdo Unix ({scheme})")
        return self._base.handle_request(self._rewrite(request, scheme))

    def close(self) -> None:
        """Zamyka połączenia klonu i transportu upstream."""
        self._base.close()
        self.upstream.close()


class AsyncUnixTransport(_RoutingConfig, httpx.AsyncBaseTransport):
    """Transport (async) kierujący requesty do gniazd Unix - odpowiednik UnixTransport."""

    upstream_type = httpx.AsyncHTTPTransport

    def __init__(
        self,
        resolver: Resolver,
        upstream: httpx.AsyncHTTPTransport,
        *,
        scheme_http: Optional[str] = None,
        scheme_https: Optional[str] = None,
    ):
        self._configure(resolver, upstream, scheme_http, scheme_https)
        self._base = async_clone_transport(self.upstream, self.resolver)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        scheme = self._target_scheme(request.url.scheme)
        if scheme is None:
            return await self.upstream.handle_async_request(request)

        logger.debug(f"{request.method} {request.url} przez gniazdo Unix ({scheme})")
        return await self._base.handle_async_request(self._rewrite(request, scheme))

    async def aclose(self) -> None:
        """Zamyka połączenia klonu i transportu upstream."""
        await self._base.aclose()
        await self.upstream.aclose()
