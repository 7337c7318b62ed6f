"""
mcdata: versioned, indexed access to Minecraft game data.

Usage:
    import mcdata

    data = mcdata.request("1.8.8")
    stone = data.blocks_by_name["stone"]
    mcdata.supported_versions["pc"]
"""

from functools import lru_cache
from typing import Any

from .errors import (
    MinecraftDataError,
    UnknownVersionError,
    UnsupportedVersionError,
    MissingDataError,
    InvalidDataError,
    NotFoundError,
)
from .game_data import IndexedDataStore, MinecraftDataService
from .versioning import ResolvedVersion, Version
from .versioning.resolver import RequestedVersion

__version__ = "1.0.0"

# Module attributes served by the default service (see __getattr__)
STATIC_EXPORTS = (
    "versions",
    "versions_by_minecraft_version",
    "pre_netty_versions_by_protocol_version",
    "post_netty_versions_by_protocol_version",
    "supported_versions",
    "schemas",
)


@lru_cache(maxsize=1)
def default_service() -> MinecraftDataService:
    """Return the process-wide service over the bundled data."""
    return MinecraftDataService()


def request(version: RequestedVersion) -> IndexedDataStore:
    """Return the indexed data for ``version`` using the bundled data.

    See MinecraftDataService.request for accepted identifiers and errors.
    """
    return default_service().request(version)


def __getattr__(name: str) -> Any:
    if name in STATIC_EXPORTS:
        return getattr(default_service(), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "request",
    "default_service",
    "MinecraftDataService",
    "IndexedDataStore",
    "ResolvedVersion",
    "Version",
    # Errors
    "MinecraftDataError",
    "UnknownVersionError",
    "UnsupportedVersionError",
    "MissingDataError",
    "InvalidDataError",
    "NotFoundError",
    # Static exports
    *STATIC_EXPORTS,
]
