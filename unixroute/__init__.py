"""
unixroute - HTTP przez gniazda Unix dla klientów httpx.

Serwisy nasłuchujące na gniazdach Unix są adresowane logiczną nazwą hosta
(`http+unix://service/path`) zamiast ścieżki w systemie plików.
"""

from unixroute.config import (
    ADDRESS_FAMILY,
    DEFAULT_SCHEME_HTTP,
    DEFAULT_SCHEME_HTTPS,
    NETWORK_NAME,
)
from unixroute.routing import (
    AsyncUnixNetworkBackend,
    AsyncUnixTransport,
    Collector,
    Directory,
    HostnameAlreadyExistsError,
    HostnameInvalidError,
    Keeper,
    PathNotFoundError,
    Resolver,
    ResolverConnectError,
    ResolverEmptyError,
    SchemeEmptyError,
    SchemeInvalidError,
    SchemeNotRegisteredError,
    TransportEmptyError,
    TransportInvalidError,
    UnixNetworkBackend,
    UnixRouteError,
    UnixTransport,
    add_path,
    create_transport,
    get_default_directory,
    lookup_path,
    mount_transport,
    register,
    unmount_transport,
    validate_hostname,
    validate_scheme,
)
from unixroute.utils.logger import setup_logging

__all__ = [
    # Constants
    "ADDRESS_FAMILY",
    "DEFAULT_SCHEME_HTTP",
    "DEFAULT_SCHEME_HTTPS",
    "NETWORK_NAME",
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
    # Logging
    "setup_logging",
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
