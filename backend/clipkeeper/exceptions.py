"""
Custom exceptions for the ClipKeeper backend.

Terminal ingestion failures (unsupported platform, quota, duplicate) are
surfaced to the caller by the routers. Metadata and classification
failures are recovered inside their services and never reach a handler.
"""


class ClipKeeperError(Exception):
    """Base exception for all ClipKeeper errors."""

    pass


class UserNotFoundError(ClipKeeperError):
    """Raised when a user id does not resolve to a user."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


# =============================================================================
# Ingestion rejections
# =============================================================================


class IngestionRejected(ClipKeeperError):
    """Base class for terminal ingestion rejections."""

    pass


class UnsupportedPlatformError(IngestionRejected):
    """Raised when a URL does not map to a platform the active profile allows."""

    def __init__(self, url: str, supported: list[str] | None = None):
        self.url = url
        self.supported = supported or []
        msg = "Unsupported link."
        if self.supported:
            msg += f" Supported platforms: {', '.join(self.supported)}"
        super().__init__(msg)


class QuotaExceededError(IngestionRejected):
    """Raised when a free-tier user has reached the link limit."""

    def __init__(self, user_id: int, limit: int):
        self.user_id = user_id
        self.limit = limit
        super().__init__(
            f"Free tier limit reached ({limit} links). Please upgrade to premium."
        )


class DuplicateLinkError(IngestionRejected):
    """Raised when a user resubmits a URL they already saved without force."""

    def __init__(self, url: str, existing_link_id: int):
        self.url = url
        self.existing_link_id = existing_link_id
        super().__init__("You have already saved this link")


# =============================================================================
# Recoverable enrichment failures
# =============================================================================


class MetadataExtractionError(ClipKeeperError):
    """Raised when an oEmbed lookup fails or returns unusable data."""

    def __init__(self, platform: str, reason: str):
        self.platform = platform
        self.reason = reason
        super().__init__(f"{platform} metadata lookup failed: {reason}")


class ClassificationError(ClipKeeperError):
    """Raised when the LLM call fails or its output cannot be parsed."""

    pass
