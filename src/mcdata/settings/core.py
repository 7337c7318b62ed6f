"""
Core settings management for mcdata.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigVersion, ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .data import DataSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to settings with cross-platform storage
    (native store by default, an INI file when ``settings_file`` is given).
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Optional INI file to use instead of the native store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("mcdata", "mcdata")
        self.profile = profile

        # Profile group: mcdata/mcdata/<profile>/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._data = DataSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        if self.settings.value("app/version") is None:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.sync()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def data(self) -> DataSettings:
        """Access data resolution settings subsystem."""
        return self._data

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def data_path(self) -> Optional[Path]:
        """Get the data directory override."""
        return self._paths.data_path

    @data_path.setter
    def data_path(self, value: Optional[Path]) -> None:
        self._paths.data_path = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
