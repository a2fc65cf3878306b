"""Public API for shared Warden configuration."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    HttpSettings,
    LoggingSettings,
    PlatformSettings,
    WardenSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "HttpSettings",
    "LoggingSettings",
    "PlatformSettings",
    "WardenSettings",
    "load_settings",
]
