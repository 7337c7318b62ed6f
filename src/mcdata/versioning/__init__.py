"""
Version catalog and resolution.

Knows which releases exist per platform, which of them ship a dataset, and
how to map a requested version to the nearest shipped dataset.
"""

from .models import (
    Version,
    ResolvedVersion,
    PLATFORM_PC,
    PLATFORM_PE,
    PLATFORMS,
    normalize_platform,
)
from .catalog import VersionCatalog
from .resolver import VersionResolver

__all__ = [
    "Version",
    "ResolvedVersion",
    "PLATFORM_PC",
    "PLATFORM_PE",
    "PLATFORMS",
    "normalize_platform",
    "VersionCatalog",
    "VersionResolver",
]
