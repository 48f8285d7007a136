"""Metadata extraction (title, thumbnail) via per-platform oEmbed endpoints."""

import httpx
from pydantic import BaseModel, field_validator

from clipkeeper.config import settings
from clipkeeper.exceptions import MetadataExtractionError
from clipkeeper.logger import api_logger
from clipkeeper.models.link import TITLE_MAX_LENGTH
from clipkeeper.services.platform_service import (
    Platform,
    extract_default_title_from_url,
    extract_instagram_account,
    extract_tiktok_username,
    extract_video_id,
)


class VideoMetadata(BaseModel):
    """Display metadata resolved for a link."""

    title: str
    thumbnail_url: str | None = None

    @field_validator("title")
    @classmethod
    def fit_title(cls, value: str) -> str:
        # oEmbed titles are often the whole caption
        return value.strip()[:TITLE_MAX_LENGTH].rstrip() or value


class MetadataStrategy:
    """
    Base oEmbed strategy.

    Subclasses set ``platform`` and ``oembed_endpoint`` and may override
    ``fallback`` to derive better metadata from the URL when the lookup fails.
    """

    platform: Platform
    oembed_endpoint: str
    oembed_params: dict[str, str] = {}

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def extract(self, url: str) -> VideoMetadata:
        """
        Resolve title and thumbnail for a URL.

        Args:
            url: Link URL

        Returns:
            VideoMetadata, never raises for lookup failures
        """
        default_title = extract_default_title_from_url(url)

        try:
            data = await self.fetch_oembed(url)
        except MetadataExtractionError as e:
            api_logger.warning(f"{e}; using URL heuristics for {url}")
            return self.fallback(url, default_title)

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            title = default_title

        thumbnail_url = data.get("thumbnail_url")
        if not isinstance(thumbnail_url, str) or not thumbnail_url:
            thumbnail_url = self.fallback(url, default_title).thumbnail_url

        return VideoMetadata(title=title.strip(), thumbnail_url=thumbnail_url)

    async def fetch_oembed(self, url: str) -> dict:
        """Call the platform oEmbed endpoint and return the JSON object."""
        params = {"url": url, **self.oembed_params}
        platform = self.platform.value

        try:
            response = await self.client.get(self.oembed_endpoint, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise MetadataExtractionError(
                platform, f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise MetadataExtractionError(platform, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise MetadataExtractionError(platform, "response is not JSON") from e

        if not isinstance(data, dict):
            raise MetadataExtractionError(platform, "response is not a JSON object")

        return data

    def fallback(self, url: str, default_title: str) -> VideoMetadata:
        return VideoMetadata(title=default_title)


class YouTubeStrategy(MetadataStrategy):
    platform = Platform.YOUTUBE
    oembed_endpoint = "https://www.youtube.com/oembed"
    oembed_params = {"format": "json"}

    def fallback(self, url: str, default_title: str) -> VideoMetadata:
        # Thumbnails are served from a predictable CDN path
        video_id = extract_video_id(url)
        thumbnail_url = (
            f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg" if video_id else None
        )
        return VideoMetadata(title=default_title, thumbnail_url=thumbnail_url)


class TikTokStrategy(MetadataStrategy):
    platform = Platform.TIKTOK
    oembed_endpoint = "https://www.tiktok.com/oembed"

    def fallback(self, url: str, default_title: str) -> VideoMetadata:
        username = extract_tiktok_username(url)
        if username:
            return VideoMetadata(title=f"TikTok video by @{username}")
        return VideoMetadata(title=default_title)


class InstagramStrategy(MetadataStrategy):
    platform = Platform.INSTAGRAM
    oembed_endpoint = "https://api.instagram.com/oembed/"

    def fallback(self, url: str, default_title: str) -> VideoMetadata:
        account = extract_instagram_account(url)
        if account:
            return VideoMetadata(title=f"Instagram Reel by @{account}")
        return VideoMetadata(title=default_title)


class VimeoStrategy(MetadataStrategy):
    platform = Platform.VIMEO
    oembed_endpoint = "https://vimeo.com/api/oembed.json"


class TwitterStrategy(MetadataStrategy):
    platform = Platform.TWITTER
    oembed_endpoint = "https://publish.twitter.com/oembed"
    oembed_params = {"omit_script": "true"}


class RedditStrategy(MetadataStrategy):
    platform = Platform.REDDIT
    oembed_endpoint = "https://www.reddit.com/oembed"


STRATEGIES: dict[Platform, type[MetadataStrategy]] = {
    Platform.YOUTUBE: YouTubeStrategy,
    Platform.TIKTOK: TikTokStrategy,
    Platform.INSTAGRAM: InstagramStrategy,
    Platform.VIMEO: VimeoStrategy,
    Platform.TWITTER: TwitterStrategy,
    Platform.REDDIT: RedditStrategy,
}


class MetadataService:
    """Service resolving display metadata for submitted links."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        """
        Args:
            transport: Optional httpx transport (used by tests to fake endpoints)
            timeout: Per-request timeout in seconds
        """
        self.transport = transport
        self.timeout = timeout if timeout is not None else settings.oembed_timeout_seconds

    async def extract_metadata(self, url: str, platform: Platform | None) -> VideoMetadata:
        """
        Extract title and thumbnail for a link.

        Unknown platforms, or platforms without an embed API, get the URL
        heuristic title immediately.

        Args:
            url: Link URL
            platform: Platform detected for the URL

        Returns:
            VideoMetadata with at least a title
        """
        strategy_cls = STRATEGIES.get(platform) if platform else None
        if strategy_cls is None:
            return VideoMetadata(title=extract_default_title_from_url(url))

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.timeout,
                follow_redirects=True,
            ) as client:
                metadata = await strategy_cls(client).extract(url)

            api_logger.info(
                f"Metadata extracted from {platform.value}: "
                f"title={metadata.title!r}, has_thumbnail={bool(metadata.thumbnail_url)}"
            )
            return metadata

        except Exception as e:
            api_logger.error(f"Metadata extraction failed for {url}: {e}")
            return VideoMetadata(title=extract_default_title_from_url(url))
