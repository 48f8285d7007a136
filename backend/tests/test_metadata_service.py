"""Tests for oEmbed metadata extraction."""

import httpx
import pytest

from clipkeeper.exceptions import MetadataExtractionError
from clipkeeper.models.link import TITLE_MAX_LENGTH
from clipkeeper.services.metadata_service import (
    MetadataService,
    TikTokStrategy,
    VideoMetadata,
)
from clipkeeper.services.platform_service import Platform

from conftest import oembed_transport


@pytest.mark.asyncio
async def test_youtube_oembed_success():
    service = MetadataService(
        transport=oembed_transport(
            {
                "www.youtube.com": {
                    "title": "  Learn Python in 60 seconds ",
                    "thumbnail_url": "https://i.ytimg.com/vi/abc/hq.jpg",
                }
            }
        )
    )

    metadata = await service.extract_metadata(
        "https://youtube.com/shorts/abc", Platform.YOUTUBE
    )

    assert metadata == VideoMetadata(
        title="Learn Python in 60 seconds",
        thumbnail_url="https://i.ytimg.com/vi/abc/hq.jpg",
    )


@pytest.mark.asyncio
async def test_oembed_request_carries_url_and_format():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"title": "Clip"})

    service = MetadataService(transport=httpx.MockTransport(handler))
    await service.extract_metadata("https://youtu.be/xyz", Platform.YOUTUBE)

    assert len(seen) == 1
    assert seen[0].url.path == "/oembed"
    assert seen[0].url.params["url"] == "https://youtu.be/xyz"
    assert seen[0].url.params["format"] == "json"


@pytest.mark.asyncio
async def test_youtube_failure_falls_back_to_cdn_thumbnail():
    service = MetadataService(transport=oembed_transport())

    metadata = await service.extract_metadata(
        "https://youtube.com/shorts/abc123", Platform.YOUTUBE
    )

    assert metadata.title == "YouTube Short #abc123"
    assert metadata.thumbnail_url == "https://i.ytimg.com/vi/abc123/hqdefault.jpg"


@pytest.mark.asyncio
async def test_tiktok_failure_uses_username_title():
    service = MetadataService(transport=oembed_transport())

    metadata = await service.extract_metadata(
        "https://www.tiktok.com/@demo/video/123", Platform.TIKTOK
    )

    assert metadata.title == "TikTok video by @demo"
    assert metadata.thumbnail_url is None


@pytest.mark.asyncio
async def test_instagram_failure_uses_account_title():
    service = MetadataService(transport=oembed_transport())

    metadata = await service.extract_metadata(
        "https://www.instagram.com/chef/reel/Cabc/", Platform.INSTAGRAM
    )

    assert metadata.title == "Instagram Reel by @chef"


@pytest.mark.asyncio
async def test_http_error_status_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    service = MetadataService(transport=httpx.MockTransport(handler))
    metadata = await service.extract_metadata(
        "https://www.tiktok.com/video/987", Platform.TIKTOK
    )

    assert metadata.title == "TikTok #987"


@pytest.mark.asyncio
async def test_missing_title_in_response_uses_heuristic():
    service = MetadataService(
        transport=oembed_transport({"www.tiktok.com": {"author_name": "demo"}})
    )

    metadata = await service.extract_metadata(
        "https://www.tiktok.com/@demo/video/1", Platform.TIKTOK
    )

    assert metadata.title == "TikTok video by @demo"


@pytest.mark.asyncio
async def test_platform_without_strategy_uses_heuristic_without_network():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"title": "nope"})

    service = MetadataService(transport=httpx.MockTransport(handler))
    metadata = await service.extract_metadata(
        "https://example.com/blog/post", Platform.ARTICLE
    )

    assert metadata.title == "example.com content"
    assert calls == []


@pytest.mark.asyncio
async def test_fetch_oembed_rejects_non_object_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "an", "object"])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MetadataExtractionError) as exc_info:
            await TikTokStrategy(client).fetch_oembed("https://www.tiktok.com/@a/video/1")

    assert exc_info.value.platform == "tiktok"


@pytest.mark.asyncio
async def test_caption_length_title_is_cut():
    caption = "Day in my life as a line cook " * 100
    service = MetadataService(
        transport=oembed_transport({"www.tiktok.com": {"title": caption}})
    )

    metadata = await service.extract_metadata(
        "https://www.tiktok.com/@demo/video/1", Platform.TIKTOK
    )

    assert len(metadata.title) <= TITLE_MAX_LENGTH
    assert metadata.title.startswith("Day in my life")
