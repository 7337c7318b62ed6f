"""
Version resolution.

Maps a requested version identifier (release string, protocol number,
optionally platform-prefixed) to the key of a dataset that is actually
shipped, falling back to the nearest earlier compatible dataset.
"""

import logging
from typing import List, Optional, Tuple, Union

from ..errors import UnknownVersionError, UnsupportedVersionError
from .catalog import VersionCatalog
from .models import PLATFORM_PC, PLATFORMS, ResolvedVersion, Version, normalize_platform

RequestedVersion = Union[str, int, ResolvedVersion]


class VersionResolver:
    """Resolve requested versions against a VersionCatalog.

    Resolution order:
    1. exact match on a supported version,
    2. nearest earlier supported version within the same major version,
    3. nearest earlier supported version of any major version (optional).
    """

    def __init__(
        self,
        catalog: VersionCatalog,
        default_platform: str = PLATFORM_PC,
        cross_major_fallback: bool = True,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.catalog = catalog
        self.default_platform = normalize_platform(default_platform) or PLATFORM_PC
        self.cross_major_fallback = cross_major_fallback

    def resolve(self, requested: RequestedVersion) -> ResolvedVersion:
        """Resolve ``requested`` to a shipped dataset.

        Args:
            requested: Release string (``"1.8.8"``, ``"pe_0.14.3"``), protocol
                number (``47``) or a previous ResolvedVersion

        Returns:
            ResolvedVersion naming the platform and dataset key

        Raises:
            UnknownVersionError: If no platform recognizes the identifier
            UnsupportedVersionError: If no compatible dataset exists
        """
        if isinstance(requested, ResolvedVersion):
            return self.resolve(requested.qualified_key)

        hint, identifier, protocol = self._parse(requested)

        if protocol is not None:
            platform, key = self._match_protocol(requested, protocol, hint)
        else:
            platform, key = self._match_string(requested, identifier, hint)

        requested_version = self.catalog.metadata_for(platform, key)

        if self.catalog.is_supported(platform, key):
            self.logger.debug(f"Resolved {requested!r} to {platform}_{key}")
            return ResolvedVersion(
                platform=platform,
                data_key=key,
                requested=requested,
                requested_version=requested_version,
            )

        fallback = self._find_fallback(platform, key)
        if fallback is None:
            raise UnsupportedVersionError(requested, platform)

        self.logger.info(
            f"No dataset for {platform} {key}, falling back to {fallback.minecraft_version}"
        )
        return ResolvedVersion(
            platform=platform,
            data_key=str(fallback.minecraft_version),
            requested=requested,
            requested_version=requested_version,
            fallback=True,
        )

    # === PARSING AND MATCHING ===

    @staticmethod
    def _parse(requested: Union[str, int]) -> Tuple[Optional[str], str, Optional[int]]:
        """Split a request into (platform hint, identifier, protocol number)."""
        # bool is an int subclass but never a protocol number
        if isinstance(requested, bool) or not isinstance(requested, (str, int)):
            raise UnknownVersionError(requested)
        if isinstance(requested, int):
            return None, str(requested), requested

        identifier = requested.strip()
        hint: Optional[str] = None
        if "_" in identifier:
            prefix, rest = identifier.split("_", 1)
            platform = normalize_platform(prefix)
            if platform is not None:
                hint, identifier = platform, rest

        if not identifier:
            raise UnknownVersionError(requested)
        if identifier.isdigit():
            return hint, identifier, int(identifier)
        return hint, identifier, None

    def _candidate_platforms(self, hint: Optional[str]) -> List[str]:
        if hint:
            return [hint]
        return [self.default_platform] + [p for p in PLATFORMS if p != self.default_platform]

    def _match_protocol(
        self, requested: object, protocol: int, hint: Optional[str]
    ) -> Tuple[str, str]:
        """Pick the catalog entry for a protocol number.

        Several releases can share a protocol (including across the netty
        split); the chronologically latest one of the first platform that
        has any match wins.
        """
        for platform in self._candidate_platforms(hint):
            matches = [
                v for v in self.catalog.versions_for_protocol(platform, protocol)
                if v.minecraft_version
            ]
            if matches:
                chosen = matches[-1]
                if len(matches) > 1:
                    self.logger.debug(
                        f"Protocol {protocol} shared by {len(matches)} {platform} versions, "
                        f"using {chosen.minecraft_version}"
                    )
                return platform, str(chosen.minecraft_version)
        raise UnknownVersionError(requested)

    def _match_string(
        self, requested: object, identifier: str, hint: Optional[str]
    ) -> Tuple[str, str]:
        for platform in self._candidate_platforms(hint):
            if self.catalog.is_known(platform, identifier):
                return platform, identifier
        raise UnknownVersionError(requested)

    def _find_fallback(self, platform: str, key: str) -> Optional[Version]:
        """Search backward for the nearest earlier supported version."""
        position = self.catalog.position_of(platform, key)
        if position is None:
            return None

        entries = self.catalog.all_versions(platform)
        major = entries[position].major_version
        earlier = list(reversed(entries[:position]))

        for candidate in earlier:
            if candidate.major_version == major and self._supported(platform, candidate):
                return candidate

        if not self.cross_major_fallback:
            return None

        for candidate in earlier:
            if self._supported(platform, candidate):
                return candidate
        return None

    def _supported(self, platform: str, version: Version) -> bool:
        return bool(version.minecraft_version) and self.catalog.is_supported(
            platform, str(version.minecraft_version)
        )
