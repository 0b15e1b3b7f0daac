"""Wyjątki modułu routing - błędy Directory, konfiguracji i rejestracji transportu."""


class UnixRouteError(Exception):
    """Bazowy błąd routingu HTTP przez gniazda Unix."""

    pass


class HostnameInvalidError(UnixRouteError):
    """Hostname nie jest poprawnym komponentem host w URL."""

    pass


class HostnameAlreadyExistsError(UnixRouteError):
    """Hostname jest już zmapowany na inną ścieżkę gniazda."""

    pass


class PathNotFoundError(UnixRouteError, LookupError):
    """Brak ścieżki gniazda dla hostname."""

    pass


class ResolverEmptyError(UnixRouteError):
    """Resolver nie został podany."""

    pass


class TransportEmptyError(UnixRouteError):
    """Transport upstream nie został podany."""

    pass


class TransportInvalidError(UnixRouteError):
    """Transport upstream ma nieobsługiwany typ."""

    pass


class SchemeEmptyError(UnixRouteError):
    """Schemat URL nie został podany."""

    pass


class SchemeInvalidError(UnixRouteError):
    """Schemat URL jest niepoprawny (np. koliduje z http/https)."""

    pass


class SchemeNotRegisteredError(UnixRouteError):
    """Nie udało się zarejestrować transportu dla schematu URL."""

    pass
