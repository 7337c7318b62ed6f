"""
Data models for game versions.

Contains the Version record, platform constants and the result of a
version resolution. Models are lightweight: no file-system or lookup logic.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Platforms known to the catalog
PLATFORM_PC = "pc"
PLATFORM_PE = "pe"
PLATFORMS = (PLATFORM_PC, PLATFORM_PE)

# Alternative names accepted as platform hints and in dataPaths.json
PLATFORM_ALIASES: Dict[str, str] = {
    "pc": PLATFORM_PC,
    "java": PLATFORM_PC,
    "pe": PLATFORM_PE,
    "bedrock": PLATFORM_PE,
}


def normalize_platform(name: str) -> Optional[str]:
    """Return the canonical platform name for ``name`` or None if unknown."""
    return PLATFORM_ALIASES.get(name.strip().lower())


@dataclass(frozen=True)
class Version:
    """Metadata of a single game release.

    Not every field is populated for every platform; bedrock entries for
    instance carry no data version.
    """
    platform: str
    minecraft_version: Optional[str] = None
    version: Optional[int] = None  # protocol number
    major_version: Optional[str] = None
    data_version: Optional[int] = None
    uses_netty: bool = True
    release_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], platform: str) -> "Version":
        """Create Version from a protocolVersions.json / version.json entry.

        Args:
            data: Raw JSON dict (camelCase keys)
            platform: Canonical platform name

        Returns:
            Version instance
        """
        protocol = data.get("version")
        data_version = data.get("dataVersion")
        return cls(
            platform=platform,
            minecraft_version=data.get("minecraftVersion"),
            version=int(protocol) if protocol is not None else None,
            major_version=data.get("majorVersion"),
            data_version=int(data_version) if data_version is not None else None,
            uses_netty=bool(data.get("usesNetty", True)),
            release_type=data.get("releaseType"),
        )

    def merged_with(self, other: "Version") -> "Version":
        """Return a copy where fields missing here are taken from ``other``."""
        return Version(
            platform=self.platform,
            minecraft_version=self.minecraft_version or other.minecraft_version,
            version=self.version if self.version is not None else other.version,
            major_version=self.major_version or other.major_version,
            data_version=(
                self.data_version if self.data_version is not None else other.data_version
            ),
            uses_netty=self.uses_netty,
            release_type=self.release_type or other.release_type,
        )


@dataclass(frozen=True)
class ResolvedVersion:
    """Outcome of resolving a requested identifier to a shipped dataset.

    Equality only considers the dataset (platform + data key), so resolving
    the same dataset through different identifiers compares equal.
    """
    platform: str
    data_key: str
    requested: Any = field(compare=False)
    requested_version: Optional[Version] = field(default=None, compare=False)
    fallback: bool = field(default=False, compare=False)

    @property
    def qualified_key(self) -> str:
        """Platform-prefixed dataset key, e.g. ``pc_1.8``."""
        return f"{self.platform}_{self.data_key}"
