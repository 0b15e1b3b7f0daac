import socket
from typing import Dict

from pydantic_settings import BaseSettings, SettingsConfigDict

# Schematy URL zastępujące http/https dla ruchu przez gniazda Unix
DEFAULT_SCHEME_HTTP = "http+unix"
DEFAULT_SCHEME_HTTPS = "https+unix"

# Identyfikator rodziny adresów gniazd lokalnych (także dla listenerów po stronie serwisu)
NETWORK_NAME = "unix"
ADDRESS_FAMILY = socket.AF_UNIX


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="UNIXROUTE_", extra="ignore"
    )

    # Konfiguracja schematów URL (routing przez Unix domain socket)
    SCHEME_HTTP: str = DEFAULT_SCHEME_HTTP
    SCHEME_HTTPS: str = DEFAULT_SCHEME_HTTPS

    # Mapowanie hostname -> ścieżka gniazda, ładowane do domyślnego Directory
    # Przykład: UNIXROUTE_SOCKET_PATHS='{"service": "/run/service.sock"}'
    SOCKET_PATHS: Dict[str, str] = {}

    # Konfiguracja logowania
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Pusty = brak logowania do pliku


SETTINGS = Settings()
