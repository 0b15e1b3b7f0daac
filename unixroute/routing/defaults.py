"""Domyślny Directory procesu i funkcje API wstrzykujące go jako resolver."""

from __future__ import annotations

import threading
from typing import Optional, Union

import httpx

from unixroute.config import SETTINGS

from .directory import Directory, PathLike, Resolver
from .errors import TransportEmptyError
from .transport import AsyncUnixTransport, UnixTransport

# Singleton instance
_default_directory: Optional[Directory] = None
_directory_lock = threading.Lock()


def get_default_directory() -> Directory:
    """Zwraca singleton instance Directory (thread-safe), wypełniony z SETTINGS.SOCKET_PATHS."""
    global _default_directory
    if _default_directory is None:
        with _directory_lock:
            if _default_directory is None:
                _default_directory = Directory(SETTINGS.SOCKET_PATHS)
    return _default_directory


def add_path(hostname: str, path: PathLike) -> None:
    """Dodaje mapowanie hostname -> ścieżka gniazda do domyślnego Directory."""
    get_default_directory().add_path(hostname, path)


def lookup_path(hostname: str) -> str:
    """Rozwiązuje ścieżkę gniazda w domyślnym Directory."""
    return get_default_directory().lookup_path(hostname)


def create_transport(
    upstream: Optional[httpx.HTTPTransport] = None,
    *,
    resolver: Optional[Resolver] = None,
    scheme_http: Optional[str] = None,
    scheme_https: Optional[str] = None,
) -> UnixTransport:
    """
    Tworzy UnixTransport z domyślnymi wartościami.

    Args:
        upstream: Transport upstream (default: nowy httpx.HTTPTransport)
        resolver: Resolver ścieżek (default: domyślny Directory procesu)
        scheme_http: Schemat dla HTTP przez gniazdo Unix
        scheme_https: Schemat dla HTTPS przez gniazdo Unix
    """
    return UnixTransport(
        resolver if resolver is not None else get_default_directory(),
        upstream if upstream is not None else httpx.HTTPTransport(),
        scheme_http=scheme_http,
        scheme_https=scheme_https,
    )


def register(
    client: Union[httpx.Client, httpx.AsyncClient],
    *,
    resolver: Optional[Resolver] = None,
    scheme_http: Optional[str] = None,
    scheme_https: Optional[str] = None,
) -> Union[UnixTransport, AsyncUnixTransport]:
    """
    Tworzy transport wokół transportu klienta i rejestruje go dla obu schematów.

    Po rejestracji klient kieruje requesty `http+unix://` i `https+unix://`
    (lub skonfigurowane schematy) do gniazd Unix, a pozostałe bez zmian.

    Przykład:
        client = httpx.Client()
        register(client)
        add_path("service", "/run/service.sock")
        client.get("http+unix://service/request/path")

    Raises:
        TransportEmptyError: Jeśli klient nie ma transportu
        TransportInvalidError: Jeśli transport klienta nie jest
            httpx.HTTPTransport / httpx.AsyncHTTPTransport
        SchemeNotRegisteredError: Jeśli schemat jest już zajęty w kliencie
    """
    upstream = getattr(client, "_transport", None)
    if upstream is None:
        raise TransportEmptyError("http transport is not specified")

    resolver = resolver if resolver is not None else get_default_directory()
    transport_class = (
        AsyncUnixTransport if isinstance(client, httpx.AsyncClient) else UnixTransport
    )
    transport = transport_class(
        resolver,
        upstream,
        scheme_http=scheme_http,
        scheme_https=scheme_https,
    )
    transport.register(client)
    return transport
