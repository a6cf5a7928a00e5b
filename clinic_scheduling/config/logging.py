"""
Logging setup.

Configures the standard library root logger from Settings.
"""

import logging

from clinic_scheduling.config.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings.

    Args:
        settings: Optional settings. Uses the cached settings if not provided.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(level=level, format=settings.LOG_FORMAT)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger(__name__).debug(f"Logging configured at {logging.getLevelName(level)}")
