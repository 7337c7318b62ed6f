"""
Path-related settings for mcdata.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

DATA_PATHS_FILE = "dataPaths.json"


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    @property
    def data_path(self) -> Optional[Path]:
        """Get the minecraft-data ``data/`` directory override (None = bundled data)."""
        path_str = self._get_str("paths/data", "")
        return Path(path_str) if path_str else None

    @data_path.setter
    def data_path(self, value: Optional[Path]) -> None:
        """Set the data directory override; None restores the bundled data."""
        self.settings.setValue("paths/data", str(value) if value else "")
        self.settings.sync()

    @property
    def data_paths_file(self) -> Optional[Path]:
        """Get the dataPaths.json manifest path (derived from data_path)."""
        if self.data_path:
            return self.data_path / DATA_PATHS_FILE
        return None
