"""Link ingestion pipeline: platform, quota, metadata, classification, persistence."""

from typing import Any

from clipkeeper.config import settings
from clipkeeper.exceptions import (
    DuplicateLinkError,
    QuotaExceededError,
    UnsupportedPlatformError,
)
from clipkeeper.logger import ingest_logger
from clipkeeper.models.link import Link
from clipkeeper.repository import LinkRepository
from clipkeeper.services.ai_service import AIService, Classification, UNCATEGORIZED
from clipkeeper.services.metadata_service import MetadataService
from clipkeeper.services.platform_service import (
    Platform,
    PlatformProfile,
    detect_platform,
    supported_platforms,
)
from clipkeeper.services.quota_service import QuotaService


class ResolvedMetadata(Classification):
    """Classification plus display fields, stored on the link as its cache blob."""

    platform: str
    thumbnail_url: str | None = None


class IngestService:
    """
    Service turning a submitted URL into a persisted, tagged link.

    Steps, in order:
        1. detect the platform (unsupported -> UnsupportedPlatformError)
        2. check the free-tier quota (exceeded -> QuotaExceededError)
        3. reject a URL the user already saved unless forced
        4. reuse cached metadata for the URL, or extract and classify
        5. persist the link and one tag row per tag name
    """

    def __init__(
        self,
        repository: LinkRepository,
        ai_service: AIService,
        metadata_service: MetadataService,
        quota_service: QuotaService | None = None,
        profile: PlatformProfile | None = None,
    ):
        self.repository = repository
        self.ai_service = ai_service
        self.metadata_service = metadata_service
        self.quota_service = quota_service or QuotaService(repository)
        self.profile = profile or PlatformProfile(settings.platform_profile)

    async def ingest_link(self, user_id: int, url: str, force: bool = False) -> Link:
        """
        Save a link for a user.

        Args:
            user_id: Authenticated user ID
            url: Submitted URL
            force: Save even if the user already has this URL

        Returns:
            The persisted Link with its tags loaded

        Raises:
            UnsupportedPlatformError: URL not accepted under the active profile
            QuotaExceededError: Free-tier limit reached
            DuplicateLinkError: User already saved this URL and force is False
            UserNotFoundError: Unknown user ID
        """
        url = url.strip()

        platform = detect_platform(url, self.profile)
        if platform is None:
            ingest_logger.info(f"Rejected unsupported link from user {user_id}: {url}")
            raise UnsupportedPlatformError(url, supported_platforms(self.profile))

        if not self.quota_service.check_quota(user_id):
            ingest_logger.info(f"User {user_id} reached the free tier limit")
            raise QuotaExceededError(user_id, self.quota_service.limit)

        if not force:
            existing = self.repository.get_user_link_by_url(user_id, url)
            if existing:
                raise DuplicateLinkError(url, existing.id)

        metadata = await self.resolve_metadata(url, platform)

        link = self.repository.create_link(
            user_id=user_id,
            url=url,
            title=metadata.title,
            platform=platform.value,
            category=metadata.category,
            thumbnail_url=metadata.thumbnail_url,
            duration=metadata.duration,
            link_metadata=metadata.model_dump(),
        )

        # Tags are per link, a name repeated across links is a separate row
        for tag_name in metadata.tags:
            self.repository.create_tag(link.id, tag_name)

        self.repository.commit()
        ingest_logger.info(
            f"Saved link {link.id} for user {user_id} "
            f"({platform.value}, {metadata.category!r}, {len(metadata.tags)} tags)"
        )

        return self.repository.get_link_by_id(link.id)

    async def resolve_metadata(self, url: str, platform: Platform) -> ResolvedMetadata:
        """
        Resolve title, category, tags, duration and thumbnail for a URL.

        A previous link with the exact same URL (saved by any user) short
        circuits extraction and classification.
        """
        cached = self.repository.get_link_by_url(url)
        if cached is not None:
            ingest_logger.info(f"Using cached metadata for URL: {url}")
            return self._from_cache(cached, platform)

        ingest_logger.info(f"No cache found, analyzing content for URL: {url}")
        extracted = await self.metadata_service.extract_metadata(url, platform)
        classification = await self.ai_service.classify(
            url, title=extracted.title, platform=platform
        )

        return ResolvedMetadata(
            title=classification.title or extracted.title,
            category=classification.category,
            tags=classification.tags,
            duration=classification.duration,
            platform=platform.value,
            thumbnail_url=extracted.thumbnail_url,
        )

    def _from_cache(self, cached: Link, platform: Platform) -> ResolvedMetadata:
        blob: dict[str, Any] = dict(cached.link_metadata or {})

        tags = blob.get("tags")
        if not isinstance(tags, list):
            tags = [tag.name for tag in cached.tags]

        return ResolvedMetadata(
            title=blob.get("title") or cached.title,
            category=blob.get("category") or cached.category or UNCATEGORIZED,
            tags=[tag for tag in tags if isinstance(tag, str) and tag],
            duration=blob.get("duration") or cached.duration,
            platform=platform.value,
            thumbnail_url=blob.get("thumbnail_url") or cached.thumbnail_url,
        )
