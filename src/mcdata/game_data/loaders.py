"""
Raw data providers for game data tables.

Handles locating and parsing the JSON tables of a dataset. The default
provider reads a minecraft-data style ``data/`` directory whose
``dataPaths.json`` maps every platform/version to the folder holding each
family file; orjson is used for parsing.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, cast

import orjson

from ..errors import InvalidDataError, MissingDataError
from ..versioning.models import PLATFORM_ALIASES, PLATFORMS, normalize_platform
from .models import RawRecord, RawTable

DATA_PATHS_FILE = "dataPaths.json"
PROTOCOL_VERSIONS_FILE = "protocolVersions.json"
COMMON_DIR = "common"
SCHEMAS_DIR = "schemas"


class RawDataProvider(Protocol):
    """Source of raw family tables for shipped datasets."""

    def families(self, platform: str, version_key: str) -> Tuple[str, ...]:
        """Return the family names shipped for a dataset."""
        ...

    def load_family(self, family: str, platform: str, version_key: str) -> RawTable:
        """Return the raw table, raising MissingDataError if it cannot be supplied."""
        ...

    def protocol_versions(self, platform: str) -> Sequence[RawRecord]:
        """Return the raw protocolVersions table of a platform (newest first)."""
        ...

    def supported_versions(self) -> Mapping[str, Sequence[str]]:
        """Return platform -> dataset keys."""
        ...

    def schema_file(self, family: str) -> Optional[Path]:
        """Return the JSON schema file of a family, if shipped."""
        ...


class GameDataFileLoader:
    """Reads and parses game data JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug("GameDataFileLoader initialized")

    @staticmethod
    def read_json_file(json_file: Path) -> Any:
        """Read and parse a JSON file.

        Args:
            json_file: Path to the JSON file to read

        Returns:
            Parsed JSON value

        Raises:
            OSError: If the file cannot be read
            orjson.JSONDecodeError: If the file is not valid JSON
        """
        with json_file.open("rb") as f:  # orjson works with bytes
            return orjson.loads(f.read())


class JsonDataProvider:
    """Provider reading a minecraft-data style data directory.

    Layout::

        data/
          dataPaths.json                 {"pc": {"1.8": {"blocks": "pc/1.8", ...}}}
          pc/common/protocolVersions.json
          pc/1.8/blocks.json
          schemas/blocks_schema.json
    """

    def __init__(self, data_dir: str | Path):
        """Initialize the provider and read the dataPaths manifest.

        Args:
            data_dir: Path to the ``data/`` directory

        Raises:
            FileNotFoundError: If the directory has no dataPaths.json
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.data_dir = Path(data_dir)
        self.loader = GameDataFileLoader()

        manifest_file = self.data_dir / DATA_PATHS_FILE
        if not manifest_file.exists():
            raise FileNotFoundError(f"Data paths manifest not found: {manifest_file}")

        raw_manifest = self.loader.read_json_file(manifest_file)
        if not isinstance(raw_manifest, dict):
            raise InvalidDataError(f"{manifest_file} must contain an object")
        self._paths = self._normalize_manifest(cast(Dict[str, Any], raw_manifest))

        self.logger.info(
            f"Data directory {self.data_dir}: "
            + ", ".join(f"{p}={len(self._paths[p])} datasets" for p in PLATFORMS)
        )

    def _normalize_manifest(
        self, raw_manifest: Dict[str, Any]
    ) -> Dict[str, Dict[str, Dict[str, str]]]:
        """Map platform aliases (``bedrock``) onto canonical platform names."""
        paths: Dict[str, Dict[str, Dict[str, str]]] = {p: {} for p in PLATFORMS}
        for platform_name, versions in raw_manifest.items():
            platform = normalize_platform(platform_name)
            if platform is None:
                self.logger.warning(f"Ignoring unknown platform in manifest: {platform_name}")
                continue
            if not isinstance(versions, dict):
                raise InvalidDataError(f"Manifest entry for {platform_name} must be an object")
            for version_key, families in cast(Dict[str, Any], versions).items():
                paths[platform][version_key] = {
                    str(family): str(rel) for family, rel in cast(Dict[str, Any], families).items()
                }
        return paths

    def families(self, platform: str, version_key: str) -> Tuple[str, ...]:
        return tuple(self._paths.get(platform, {}).get(version_key, {}).keys())

    def load_family(self, family: str, platform: str, version_key: str) -> RawTable:
        """Load one family table of a dataset.

        Raises:
            MissingDataError: If the family is not listed for the dataset or
                its file is missing or unreadable
        """
        rel = self._paths.get(platform, {}).get(version_key, {}).get(family)
        if rel is None:
            raise MissingDataError(family, platform, version_key, "not listed in dataPaths")

        json_file = self.data_dir / rel / f"{family}.json"
        if not json_file.exists():
            raise MissingDataError(family, platform, version_key, f"{json_file} not found")

        try:
            data = self.loader.read_json_file(json_file)
        except (OSError, orjson.JSONDecodeError) as e:
            self.logger.error(f"Error reading JSON file {json_file}: {e}")
            raise MissingDataError(family, platform, version_key, str(e)) from e

        self.logger.debug(f"Loaded {family} for {platform}_{version_key} from {json_file}")
        return data

    def protocol_versions(self, platform: str) -> List[RawRecord]:
        """Read ``<platform>/common/protocolVersions.json`` (any platform alias)."""
        for alias, canonical in PLATFORM_ALIASES.items():
            if canonical != platform:
                continue
            versions_file = self.data_dir / alias / COMMON_DIR / PROTOCOL_VERSIONS_FILE
            if not versions_file.exists():
                continue
            data = self.loader.read_json_file(versions_file)
            if not isinstance(data, list):
                raise InvalidDataError(f"{versions_file} must contain a list of versions")
            return cast(List[RawRecord], data)

        self.logger.warning(f"No protocol versions found for platform '{platform}'")
        return []

    def supported_versions(self) -> Dict[str, List[str]]:
        return {platform: list(self._paths[platform].keys()) for platform in PLATFORMS}

    def schema_file(self, family: str) -> Optional[Path]:
        """Return the JSON schema file of a family, if shipped."""
        path = self.data_dir / SCHEMAS_DIR / f"{family}_schema.json"
        return path if path.exists() else None


class InMemoryDataProvider:
    """Provider serving tables that are already in memory.

    Useful for embedding data produced elsewhere and for tests.
    """

    def __init__(
        self,
        datasets: Mapping[Tuple[str, str], Mapping[str, RawTable]],
        protocol_versions: Optional[Mapping[str, Sequence[RawRecord]]] = None,
    ):
        """Initialize the provider.

        Args:
            datasets: (platform, version key) -> family -> raw table
            protocol_versions: Platform -> raw protocolVersions table (newest first)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._datasets = {key: dict(tables) for key, tables in datasets.items()}
        self._protocol_versions = dict(protocol_versions or {})

    def families(self, platform: str, version_key: str) -> Tuple[str, ...]:
        return tuple(self._datasets.get((platform, version_key), {}).keys())

    def load_family(self, family: str, platform: str, version_key: str) -> RawTable:
        tables = self._datasets.get((platform, version_key))
        if tables is None or family not in tables:
            raise MissingDataError(family, platform, version_key)
        return tables[family]

    def protocol_versions(self, platform: str) -> List[RawRecord]:
        return list(self._protocol_versions.get(platform, []))

    def supported_versions(self) -> Dict[str, List[str]]:
        supported: Dict[str, List[str]] = {platform: [] for platform in PLATFORMS}
        for platform, version_key in self._datasets:
            supported.setdefault(platform, []).append(version_key)
        return supported

    def schema_file(self, family: str) -> Optional[Path]:
        return None
