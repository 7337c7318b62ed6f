"""
Settings package for mcdata.

Type-safe configuration management using Qt's QSettings for
cross-platform storage.

Usage:
    from mcdata.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .paths import PathSettings
from .data import DataSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "DataSettings",
    "LoggingSettings",
]
