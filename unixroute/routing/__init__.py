"""Moduł: routing - HTTP przez gniazda Unix adresowane logiczną nazwą hosta.

Ten moduł zapewnia:
1. Directory - thread-safe mapowanie hostname -> ścieżka gniazda Unix
2. UnixTransport / AsyncUnixTransport - transporty httpx kierujące requesty
   o wyróżnionych schematach (http+unix, https+unix) do gniazd Unix
3. Rejestrację transportu w tabeli mounts klienta httpx
4. Domyślny Directory procesu i funkcje add_path / lookup_path / register
"""

from .backend import AsyncUnixNetworkBackend, ResolverConnectError, UnixNetworkBackend
from .defaults import (
    add_path,
    create_transport,
    get_default_directory,
    lookup_path,
    register,
)
from .directory import Collector, Directory, Keeper, Resolver, validate_hostname
from .errors import (
    HostnameAlreadyExistsError,
    HostnameInvalidError,
    PathNotFoundError,
    ResolverEmptyError,
    SchemeEmptyError,
    SchemeInvalidError,
    SchemeNotRegisteredError,
    TransportEmptyError,
    TransportInvalidError,
    UnixRouteError,
)
from .registration import mount_transport, unmount_transport
from .transport import AsyncUnixTransport, UnixTransport, validate_scheme

__all__ = [
    # Core components
    "Directory",
    "UnixTransport",
    "AsyncUnixTransport",
    "UnixNetworkBackend",
    "AsyncUnixNetworkBackend",
    "ResolverConnectError",
    # Protocols
    "Resolver",
    "Collector",
    "Keeper",
    # Validation
    "validate_hostname",
    "validate_scheme",
    # Registration
    "mount_transport",
    "unmount_transport",
    # Defaults
    "get_default_directory",
    "add_path",
    "lookup_path",
    "create_transport",
    "register",
    # Errors
    "UnixRouteError",
    "HostnameInvalidError",
    "HostnameAlreadyExistsError",
    "PathNotFoundError",
    "ResolverEmptyError",
    "TransportEmptyError",
    "TransportInvalidError",
    "SchemeEmptyError",
    "SchemeInvalidError",
    "SchemeNotRegisteredError",
]
