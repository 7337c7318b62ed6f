"""
Main service for working with Minecraft game data.

Provides the high-level API: resolve a requested version, build (once) the
indexed store of the matching dataset, and expose the static version
tables and schemas.
"""

import logging
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Hashable, Iterator, List, Mapping, Optional, Tuple

from ..errors import MinecraftDataError
from ..versioning.catalog import VersionCatalog
from ..versioning.models import PLATFORM_PC, ResolvedVersion, Version
from ..versioning.resolver import RequestedVersion, VersionResolver
from .cache import StoreCache
from .indexer import IndexBuilder, freeze
from .loaders import GameDataFileLoader, JsonDataProvider, RawDataProvider
from .models import ALL_FAMILIES
from .store import IndexedDataStore

if TYPE_CHECKING:
    from ..settings import AppSettings


def default_data_path() -> Path:
    """Return the data directory bundled with the package."""
    return Path(str(files("mcdata") / "data"))


class SchemaMapping(Mapping[str, Any]):
    """Family -> JSON schema document, read on first access.

    Schemas are opaque: they are parsed and frozen but never interpreted.
    """

    def __init__(self, provider: RawDataProvider):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.provider = provider
        self._loaded: Dict[str, Any] = {}

    def _available(self) -> List[str]:
        return [f for f in ALL_FAMILIES if self.provider.schema_file(f) is not None]

    def __getitem__(self, family: str) -> Any:
        if family in self._loaded:
            return self._loaded[family]
        path = self.provider.schema_file(family)
        if path is None:
            raise KeyError(family)
        schema = freeze(GameDataFileLoader.read_json_file(path))
        self.logger.debug(f"Loaded schema for '{family}' from {path}")
        self._loaded[family] = schema
        return schema

    def __iter__(self) -> Iterator[str]:
        return iter(self._available())

    def __len__(self) -> int:
        return len(self._available())


class MinecraftDataService:
    """Service answering ``request(version)`` calls.

    Heavy stores are built once per shipped dataset. Each distinct requested
    release gets a light store sharing those indices, so repeated requests
    for the same release return the identical object while still reporting
    which release was asked for.
    """

    def __init__(
        self,
        data_path: Optional[str | Path] = None,
        settings: Optional["AppSettings"] = None,
        provider: Optional[RawDataProvider] = None,
    ):
        """Initialize the service.

        Args:
            data_path: minecraft-data ``data/`` directory; defaults to the
                configured path, then to the bundled data
            settings: App settings for resolution options and paths
            provider: Custom raw data provider; overrides ``data_path``

        Raises:
            FileNotFoundError: If the data directory has no dataPaths.json
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings

        if provider is None:
            if data_path is None and settings is not None:
                data_path = settings.paths.data_path
            self.data_path: Optional[Path] = Path(data_path) if data_path else default_data_path()
            self.logger.info(f"Initializing MinecraftDataService with path: {self.data_path}")
            provider = JsonDataProvider(self.data_path)
        else:
            self.data_path = None
            self.logger.info("Initializing MinecraftDataService with custom provider")

        self.provider = provider
        self.catalog = VersionCatalog.from_provider(provider)

        default_platform = PLATFORM_PC
        cross_major_fallback = True
        if settings is not None:
            default_platform = settings.data.default_platform
            cross_major_fallback = settings.data.cross_major_fallback

        self.resolver = VersionResolver(
            self.catalog,
            default_platform=default_platform,
            cross_major_fallback=cross_major_fallback,
        )
        self.builder = IndexBuilder(provider, self.catalog)

        self._datasets: StoreCache[Tuple[str, str], IndexedDataStore] = StoreCache()
        self._requests: StoreCache[Hashable, IndexedDataStore] = StoreCache()
        self._schemas = SchemaMapping(provider)

    # === REQUESTS ===

    def resolve(self, version: RequestedVersion) -> ResolvedVersion:
        """Resolve a requested identifier without building anything."""
        return self.resolver.resolve(version)

    def request(self, version: RequestedVersion) -> IndexedDataStore:
        """Return the indexed data of the dataset serving ``version``.

        Args:
            version: Release string, protocol number or ResolvedVersion

        Returns:
            IndexedDataStore; identical object for repeated equal requests

        Raises:
            UnknownVersionError: If the identifier is not recognized
            UnsupportedVersionError: If no compatible dataset is shipped
            MissingDataError: If a listed family cannot be loaded
            InvalidDataError: If a table has an unexpected structure
        """
        try:
            resolution = self.resolver.resolve(version)
            return self._requests.get_or_build(
                self._request_key(resolution),
                lambda: self._store_for(resolution),
            )
        except MinecraftDataError as e:
            self.logger.error(f"Request for {version!r} failed: {e}")
            raise

    @staticmethod
    def _request_key(resolution: ResolvedVersion) -> Hashable:
        requested = resolution.requested_version
        release = requested.minecraft_version if requested is not None else None
        return (resolution.platform, release or resolution.data_key, resolution.data_key)

    def _store_for(self, resolution: ResolvedVersion) -> IndexedDataStore:
        base = self._datasets.get_or_build(
            (resolution.platform, resolution.data_key),
            lambda: self.builder.build(resolution),
        )
        if resolution.fallback:
            self.logger.info(
                f"Serving {resolution.requested!r} with data of {resolution.qualified_key}"
            )
        return base.for_request(resolution, resolution.requested_version)

    def clear_cache(self) -> None:
        """Forget every built store."""
        self._requests.clear()
        self._datasets.clear()

    # === STATIC EXPORTS ===

    @property
    def versions(self) -> List[Version]:
        return self.catalog.versions()

    @property
    def versions_by_minecraft_version(self) -> Dict[str, Dict[str, Version]]:
        return self.catalog.versions_by_minecraft_version()

    @property
    def pre_netty_versions_by_protocol_version(self) -> Dict[str, Dict[int, Version]]:
        return self.catalog.pre_netty_versions_by_protocol_version()

    @property
    def post_netty_versions_by_protocol_version(self) -> Dict[str, Dict[int, Version]]:
        return self.catalog.post_netty_versions_by_protocol_version()

    @property
    def supported_versions(self) -> Dict[str, List[str]]:
        return self.catalog.supported_versions()

    @property
    def schemas(self) -> Mapping[str, Any]:
        """Family -> JSON schema document (loaded lazily)."""
        return self._schemas
