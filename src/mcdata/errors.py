"""
Exception types raised by mcdata.

Resolution and build errors abort a ``request()`` call; lookup misses on the
ordinary accessors never raise (they return None).
"""


class MinecraftDataError(Exception):
    """Base class for all mcdata errors."""
    pass


class UnknownVersionError(MinecraftDataError):
    """Raised when a requested version matches no catalog entry on any platform."""

    def __init__(self, requested: object):
        super().__init__(f"Unknown version: {requested!r}")
        self.requested = requested


class UnsupportedVersionError(MinecraftDataError):
    """Raised when a version is known but no compatible dataset is shipped."""

    def __init__(self, requested: object, platform: str):
        super().__init__(
            f"Version {requested!r} is known on '{platform}' but no compatible dataset exists"
        )
        self.requested = requested
        self.platform = platform


class MissingDataError(MinecraftDataError):
    """Raised when a family table cannot be supplied for a resolved dataset."""

    def __init__(self, family: str, platform: str, version_key: str, reason: str = ""):
        message = f"Missing '{family}' data for {platform}_{version_key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.family = family
        self.platform = platform
        self.version_key = version_key


class InvalidDataError(MinecraftDataError):
    """Raised when a raw table does not have the expected structure."""
    pass


class NotFoundError(MinecraftDataError, KeyError):
    """Raised by the combined item-or-block lookups when neither family matches."""

    def __init__(self, key: object):
        super().__init__(f"No item or block found for {key!r}")
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])
