"""
Settings validation system for mcdata.
"""

import logging
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ConfigError, ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Data directory override
        data_path = self.settings.paths.data_path
        if data_path:
            if not data_path.exists():
                errors.append(f"Data path does not exist: {data_path}")
            elif not self.settings.paths.data_paths_file.exists():
                errors.append(f"Data path has no dataPaths.json: {data_path}")

        try:
            self.settings.data.default_platform
        except ConfigError as e:
            errors.append(str(e))

        level = self.settings.logging.console_log_level
        if level.upper() not in VALID_LEVELS:
            warnings.append(f"Unknown console log level: {level}")

        if errors:
            logger.debug(f"Settings validation found {len(errors)} errors")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
