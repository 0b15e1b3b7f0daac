import sys
from typing import List

from loguru import logger

from unixroute.config import SETTINGS

# Biblioteka nie konfiguruje sinków aplikacji - logi unixroute są wyłączone,
# dopóki aplikacja nie wywoła setup_logging() lub logger.enable("unixroute")
logger.disable("unixroute")

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging() -> List[int]:
    """
    Włącza logi unixroute i dodaje sinki według SETTINGS.

    Dodaje sink stderr na poziomie SETTINGS.LOG_LEVEL oraz, jeśli ustawiono
    SETTINGS.LOG_FILE, rotowany plik logów. Istniejące sinki aplikacji
    pozostają bez zmian.

    Returns:
        Identyfikatory dodanych sinków (do użycia z logger.remove)
    """
    logger.enable("unixroute")
    sink_ids = [logger.add(sys.stderr, level=SETTINGS.LOG_LEVEL, format=LOG_FORMAT)]
    if SETTINGS.LOG_FILE:
        sink_ids.append(
            logger.add(SETTINGS.LOG_FILE, level=SETTINGS.LOG_LEVEL, rotation="10 MB")
        )
    return sink_ids


def get_logger(name: str):
    """Zwraca logger z podaną nazwą."""
    return logger.bind(name=name)
