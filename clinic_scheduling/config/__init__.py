"""
Configuration Module

Client configuration settings and logging setup.
"""

from clinic_scheduling.config.logging import configure_logging
from clinic_scheduling.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
]
