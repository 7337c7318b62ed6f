"""
Data resolution settings for mcdata.
"""

import logging
from typing import TYPE_CHECKING

from ..versioning.models import PLATFORM_PC, normalize_platform
from .types import ConfigError

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class DataSettings:
    """Manages how requested versions are resolved to datasets."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def default_platform(self) -> str:
        """Platform tried first for unprefixed versions.

        Raises:
            ConfigError: If the stored value names no known platform
        """
        value = self.settings.value("data/default_platform", PLATFORM_PC)
        platform = normalize_platform(str(value)) if value is not None else PLATFORM_PC
        if platform is None:
            raise ConfigError(f"Invalid default platform in settings: {value}")
        return platform

    @default_platform.setter
    def default_platform(self, value: str) -> None:
        platform = normalize_platform(value)
        if platform is None:
            raise ConfigError(f"Unknown platform: {value}")
        self.settings.setValue("data/default_platform", platform)
        self.settings.sync()

    @property
    def cross_major_fallback(self) -> bool:
        """Whether fallback may cross into an earlier major version."""
        return self._get_bool("data/cross_major_fallback", True)

    @cross_major_fallback.setter
    def cross_major_fallback(self, value: bool) -> None:
        self.settings.setValue("data/cross_major_fallback", value)
        self.settings.sync()
        logger.debug(f"Cross-major fallback set to {value}")
