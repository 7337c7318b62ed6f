"""
Catalog of known game versions.

Holds, per platform, the chronologically ordered list of releases together
with the subset that has a shipped dataset, and builds the static version
lookup tables exported by the package.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from .models import PLATFORMS, Version


class CatalogSource(Protocol):
    """Anything able to supply raw version tables (see game_data.loaders)."""

    def protocol_versions(self, platform: str) -> Sequence[Dict[str, Any]]: ...

    def supported_versions(self) -> Mapping[str, Sequence[str]]: ...


class VersionCatalog:
    """Ordered set of known versions per platform.

    Versions are stored oldest first. The catalog is static once built;
    all lookups are dictionary based.
    """

    def __init__(
        self,
        versions: Mapping[str, Iterable[Version]],
        supported: Mapping[str, Iterable[str]],
    ):
        """Initialize the catalog.

        Args:
            versions: Platform -> versions in chronological order (oldest first)
            supported: Platform -> dataset keys that have shipped data
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._versions: Dict[str, Tuple[Version, ...]] = {}
        self._positions: Dict[str, Dict[str, int]] = {}
        self._supported: Dict[str, Tuple[str, ...]] = {}

        for platform in PLATFORMS:
            entries = tuple(versions.get(platform, ()))
            self._versions[platform] = entries
            positions: Dict[str, int] = {}
            for index, entry in enumerate(entries):
                if entry.minecraft_version:
                    # Later duplicates win so positions stay chronological
                    positions[entry.minecraft_version] = index
            self._positions[platform] = positions
            self._supported[platform] = self._order_supported(
                platform, supported.get(platform, ())
            )

        self.logger.debug(
            "Catalog built: "
            + ", ".join(
                f"{p}={len(self._versions[p])} versions/{len(self._supported[p])} datasets"
                for p in PLATFORMS
            )
        )

    @classmethod
    def from_provider(cls, provider: "CatalogSource") -> "VersionCatalog":
        """Build the catalog from a data provider.

        The provider supplies each platform's raw protocolVersions table
        (newest first, as minecraft-data ships it) and the dataset keys.

        Args:
            provider: Object implementing ``protocol_versions(platform)`` and
                ``supported_versions()``

        Returns:
            Loaded VersionCatalog
        """
        logger = logging.getLogger(f"{__name__}.{cls.__name__}")
        versions: Dict[str, List[Version]] = {}

        for platform in PLATFORMS:
            raw = provider.protocol_versions(platform)
            entries = [Version.from_dict(item, platform) for item in raw]
            entries.reverse()
            versions[platform] = entries
            logger.debug(f"Loaded {len(entries)} {platform} versions")

        return cls(versions, provider.supported_versions())

    def _order_supported(self, platform: str, keys: Iterable[str]) -> Tuple[str, ...]:
        """Sort dataset keys chronologically, unknown keys last in given order."""
        positions = self._positions[platform]
        keys = list(keys)
        known = [k for k in keys if k in positions]
        unknown = [k for k in keys if k not in positions]
        known.sort(key=lambda k: positions[k])
        return tuple(known + unknown)

    # === QUERIES ===

    def all_versions(self, platform: str) -> Tuple[Version, ...]:
        """Return all versions of a platform, oldest first."""
        return self._versions.get(platform, ())

    def supported_keys(self, platform: str) -> Tuple[str, ...]:
        """Return dataset keys of a platform in chronological order."""
        return self._supported.get(platform, ())

    def is_supported(self, platform: str, version_key: str) -> bool:
        """Check whether a dataset is shipped for the version key."""
        return version_key in self._supported.get(platform, ())

    def is_known(self, platform: str, version_key: str) -> bool:
        """Check whether the version key is a catalog entry or a dataset key."""
        return version_key in self._positions.get(platform, {}) or self.is_supported(
            platform, version_key
        )

    def metadata_for(self, platform: str, version_key: str) -> Optional[Version]:
        """Return the Version for a minecraft version string, or None."""
        position = self._positions.get(platform, {}).get(version_key)
        if position is None:
            return None
        return self._versions[platform][position]

    def position_of(self, platform: str, version_key: str) -> Optional[int]:
        """Return the chronological index of a version, or None."""
        return self._positions.get(platform, {}).get(version_key)

    def versions_for_protocol(self, platform: str, protocol: int) -> List[Version]:
        """Return every version of a platform using ``protocol``, oldest first."""
        return [v for v in self._versions.get(platform, ()) if v.version == protocol]

    def compare(self, platform: str, a: str, b: str) -> int:
        """Compare two versions chronologically.

        Returns:
            Negative if ``a`` is older than ``b``, zero if equal, positive if newer

        Raises:
            KeyError: If either version is not in the catalog
        """
        positions = self._positions.get(platform, {})
        if a not in positions:
            raise KeyError(f"Unknown {platform} version: {a}")
        if b not in positions:
            raise KeyError(f"Unknown {platform} version: {b}")
        return positions[a] - positions[b]

    # === STATIC EXPORTS ===

    def versions(self) -> List[Version]:
        """Flat list of every known version across platforms."""
        result: List[Version] = []
        for platform in PLATFORMS:
            result.extend(self._versions[platform])
        return result

    def versions_by_minecraft_version(self) -> Dict[str, Dict[str, Version]]:
        """Platform -> minecraft version string -> Version."""
        return {
            platform: {
                v.minecraft_version: v
                for v in self._versions[platform]
                if v.minecraft_version
            }
            for platform in PLATFORMS
        }

    def pre_netty_versions_by_protocol_version(self) -> Dict[str, Dict[int, Version]]:
        """Platform -> protocol -> Version, legacy protocol era only."""
        return self._by_protocol(uses_netty=False)

    def post_netty_versions_by_protocol_version(self) -> Dict[str, Dict[int, Version]]:
        """Platform -> protocol -> Version, modern protocol era only."""
        return self._by_protocol(uses_netty=True)

    def _by_protocol(self, uses_netty: bool) -> Dict[str, Dict[int, Version]]:
        # Chronological iteration: the latest release sharing a protocol wins
        result: Dict[str, Dict[int, Version]] = {}
        for platform in PLATFORMS:
            table: Dict[int, Version] = {}
            for v in self._versions[platform]:
                if v.version is not None and v.uses_netty == uses_netty:
                    table[v.version] = v
            result[platform] = table
        return result

    def supported_versions(self) -> Dict[str, List[str]]:
        """Platform -> dataset keys with shipped data."""
        return {platform: list(self._supported[platform]) for platform in PLATFORMS}
