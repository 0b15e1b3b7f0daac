"""Rejestracja transportu jako handlera schematów URL w tabeli mounts klienta httpx."""

from __future__ import annotations

from typing import Iterable, List, Union

import httpx
from httpx._utils import URLPattern

from unixroute.utils.logger import get_logger

from .errors import SchemeNotRegisteredError

logger = get_logger(__name__)

AnyClient = Union[httpx.Client, httpx.AsyncClient]
AnyTransport = Union[httpx.BaseTransport, httpx.AsyncBaseTransport]


def scheme_pattern(scheme: str) -> str:
    """Zwraca klucz mounts httpx pasujący do wszystkich URL danego schematu."""
    return f"{scheme}://"


def _check_client(client: AnyClient, transport: AnyTransport) -> None:
    if isinstance(transport, httpx.AsyncBaseTransport):
        expected: type = httpx.AsyncClient
    else:
        expected = httpx.Client

    if not isinstance(client, expected):
        raise SchemeNotRegisteredError(
            f"scheme not registered: {type(transport).__name__} "
            f"requires {expected.__name__}, got {type(client).__name__}"
        )


def _claim_scheme(client: AnyClient, transport: AnyTransport, scheme: str) -> None:
    try:
        pattern = URLPattern(scheme_pattern(scheme))
        mounts = client._mounts
        if pattern in mounts:
            raise SchemeNotRegisteredError(
                f"scheme not registered: {scheme} is already claimed"
            )
        mounts[pattern] = transport
        client._mounts = dict(sorted(mounts.items()))
    except SchemeNotRegisteredError:
        raise
    except Exception as exc:
        raise SchemeNotRegisteredError(
            f"scheme not registered: {scheme}: {exc}"
        ) from exc


def mount_transport(
    client: AnyClient, transport: AnyTransport, schemes: Iterable[str]
) -> None:
    """
    Instaluje transport jako handler podanych schematów URL w kliencie httpx.

    Rejestracja jest atomowa: jeśli któryś schemat nie może zostać
    zarejestrowany, schematy zarejestrowane wcześniej w tym wywołaniu są
    wycofywane.

    Args:
        client: httpx.Client (dla transportu sync) lub httpx.AsyncClient
        transport: Transport obsługujący schematy
        schemes: Schematy URL (np. 'http+unix', 'https+unix')

    Raises:
        SchemeNotRegisteredError: Jeśli schemat jest już zajęty lub tabela
            mounts klienta odrzuciła rejestrację
    """
    _check_client(client, transport)

    claimed: List[str] = []
    try:
        for scheme in schemes:
            _claim_scheme(client, transport, scheme)
            claimed.append(scheme)
    except SchemeNotRegisteredError:
        if claimed:
            logger.warning(
                f"Rejestracja nieudana, wycofuję schematy: {', '.join(claimed)}"
            )
            _release_schemes(client, transport, claimed)
        raise

    logger.info(
        f"Zarejestrowano {type(transport).__name__} dla schematów: {', '.join(claimed)}"
    )


def _release_schemes(
    client: AnyClient, transport: AnyTransport, schemes: Iterable[str]
) -> None:
    for scheme in schemes:
        pattern = URLPattern(scheme_pattern(scheme))
        if client._mounts.get(pattern) is transport:
            del client._mounts[pattern]


def unmount_transport(client: AnyClient, transport: AnyTransport) -> List[str]:
    """
    Usuwa z klienta wszystkie wpisy mounts należące do transportu.

    Returns:
        Lista schematów, które zostały wyrejestrowane
    """
    released = [
        pattern.scheme
        for pattern, mounted in client._mounts.items()
        if mounted is transport
    ]
    _release_schemes(client, transport, released)
    return released
