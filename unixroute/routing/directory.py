"""Directory - thread-safe mapowanie hostname -> ścieżka gniazda Unix."""

from __future__ import annotations

import os
import threading
from typing import Dict, Mapping, Optional, Protocol, Union

import httpx

from .errors import HostnameAlreadyExistsError, HostnameInvalidError, PathNotFoundError

PathLike = Union[str, "os.PathLike[str]"]


class Resolver(Protocol):
    def lookup_path(self, hostname: str) -> str: ...


class Collector(Protocol):
    def add_path(self, hostname: str, path: PathLike) -> None: ...


class Keeper(Collector, Resolver, Protocol):
    pass


def validate_hostname(hostname: str) -> None:
    """
    Sprawdza, czy hostname jest poprawnym komponentem host w URL.

    Hostname musi być w postaci kanonicznej, którą httpx nadaje hostom w URL
    requestów (małe litery, IDNA, bez portu, userinfo i ścieżki). Tylko taka
    postać trafia do resolvera podczas nawiązywania połączenia.

    Args:
        hostname: Nazwa hosta do sprawdzenia

    Raises:
        HostnameInvalidError: Jeśli hostname jest niepoprawny
    """
    if not isinstance(hostname, str) or not hostname:
        raise HostnameInvalidError(f"host is invalid: {hostname!r}")

    try:
        url = httpx.URL(f"http://{hostname}")
        canonical = url.raw_host.decode("ascii")
    except (httpx.InvalidURL, UnicodeError, ValueError) as exc:
        raise HostnameInvalidError(f"host is invalid: {hostname!r}: {exc}") from exc

    if canonical != hostname:
        raise HostnameInvalidError(
            f"host is invalid: {hostname!r} (canonical form: {canonical!r})"
        )


class Directory:
    """
    Przechowuje i rozwiązuje mapowania hostname -> ścieżka gniazda Unix.

    Zasady:
    - hostname mapuje się na dokładnie jedną ścieżkę
    - ponowne dodanie tej samej pary jest no-op
    - dodanie innej ścieżki dla istniejącego hostname jest odrzucane
    - wpisów nie można usuwać

    Zapis jest atomowym check-and-set pod lockiem, odczyt to pojedynczy
    odczyt z dict (wpis jest widoczny dopiero w całości).
    """

    def __init__(self, paths: Optional[Mapping[str, PathLike]] = None):
        self._table: Dict[str, str] = {}
        self._lock = threading.Lock()

        for hostname, path in (paths or {}).items():
            self.add_path(hostname, path)

    def add_path(self, hostname: str, path: PathLike) -> None:
        """
        Dodaje mapowanie hostname -> ścieżka gniazda Unix.

        Args:
            hostname: Logiczna nazwa serwisu (host w URL)
            path: Ścieżka do gniazda Unix

        Raises:
            HostnameInvalidError: Jeśli hostname jest niepoprawny
            HostnameAlreadyExistsError: Jeśli hostname ma już inną ścieżkę
        """
        validate_hostname(hostname)
        path = os.fspath(path)

        with self._lock:
            previous = self._table.setdefault(hostname, path)

        if previous != path:
            raise HostnameAlreadyExistsError(
                f"host is already exists: {hostname!r} -> {previous!r}"
            )

    def lookup_path(self, hostname: str) -> str:
        """
        Zwraca ścieżkę gniazda Unix dla hostname.

        Raises:
            PathNotFoundError: Jeśli hostname nie został dodany
        """
        path = self._table.get(hostname)
        if path is None:
            raise PathNotFoundError(f"path not found: {hostname!r}")
        return path

    def __contains__(self, hostname: object) -> bool:
        return hostname in self._table

    def __len__(self) -> int:
        return len(self._table)
