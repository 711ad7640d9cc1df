"""Error types raised by the settings and upload services."""


class StorefrontError(Exception):
    """Base class for service-level errors."""


class ValidationError(StorefrontError):
    """Request payload is empty or malformed."""


class StoreUnavailable(StorefrontError):
    """The settings store could not be read or written."""


class AssetCleanupFailure(StorefrontError):
    """An uploaded file could not be removed for a reason other than it being gone."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not delete {path}: {reason}")
        self.path = path
        self.reason = reason
