"""Tests for platform detection and heuristic titles."""

import pytest

from clipkeeper.services.platform_service import (
    Platform,
    PlatformProfile,
    UNTITLED,
    detect_platform,
    extract_default_title_from_url,
    extract_video_id,
    supported_platforms,
)


class TestDetectPlatformStrict:
    """Strict profile accepts only TikTok, YouTube Shorts and Instagram Reels."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.tiktok.com/@demo/video/123", Platform.TIKTOK),
            ("https://vm.tiktok.com/ZMabc/", Platform.TIKTOK),
            ("https://www.youtube.com/shorts/abc123", Platform.YOUTUBE),
            ("https://youtu.be/abc123", Platform.YOUTUBE),
            ("https://www.instagram.com/reel/Cxyz/", Platform.INSTAGRAM),
            ("https://www.instagram.com/chef/reel/Cxyz/", Platform.INSTAGRAM),
            ("https://WWW.TIKTOK.COM/@Demo/video/1", Platform.TIKTOK),
        ],
    )
    def test_supported_urls(self, url, expected):
        assert detect_platform(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "https://vimeo.com/123",
            "https://www.youtube.com/watch?v=abc",
            "https://www.instagram.com/p/abc/",
            "https://example.com/blog/post",
            "not a url",
            "",
        ],
    )
    def test_unsupported_urls_return_none(self, url):
        assert detect_platform(url) is None

    def test_non_string_returns_none(self):
        assert detect_platform(None) is None

    def test_supported_platforms_lists_three(self):
        assert supported_platforms() == ["tiktok", "youtube", "instagram"]


class TestDetectPlatformPermissive:
    """Permissive profile applies every rule and falls back to webpage."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.youtube.com/watch?v=abc", Platform.YOUTUBE),
            ("https://www.instagram.com/p/abc/", Platform.INSTAGRAM),
            ("https://fb.watch/xyz/", Platform.FACEBOOK),
            ("https://vimeo.com/123456", Platform.VIMEO),
            ("https://twitter.com/user/status/1", Platform.TWITTER),
            ("https://x.com/user/status/1", Platform.TWITTER),
            ("https://www.linkedin.com/posts/abc", Platform.LINKEDIN),
            ("https://www.reddit.com/r/python/comments/1", Platform.REDDIT),
            ("https://medium.com/@writer/story-1", Platform.MEDIUM),
            ("https://news.substack.com/p/issue", Platform.SUBSTACK),
            ("https://github.com/org/repo/blob/main/blog.md", Platform.GITHUB),
            ("https://example.com/files/report.pdf", Platform.DOCUMENT),
            ("https://example.com/blog/my-post", Platform.ARTICLE),
            ("https://blog.example.com/hello", Platform.ARTICLE),
            ("https://example.com/about", Platform.WEBPAGE),
        ],
    )
    def test_rules_in_order(self, url, expected):
        assert detect_platform(url, PlatformProfile.PERMISSIVE) == expected

    def test_specific_domain_wins_over_article_heuristic(self):
        url = "https://medium.com/blog/some-article"
        assert detect_platform(url, PlatformProfile.PERMISSIVE) == Platform.MEDIUM

    def test_non_http_is_unsupported(self):
        assert detect_platform("ftp://example.com/file", PlatformProfile.PERMISSIVE) is None
        assert detect_platform("just words", PlatformProfile.PERMISSIVE) is None


class TestExtractDefaultTitle:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://www.youtube.com/shorts/abc123?feature=share", "YouTube Short #abc123"),
            ("https://youtu.be/xyz789?t=3", "YouTube Video #xyz789"),
            ("https://www.youtube.com/watch?v=qwe&list=1", "YouTube Video #qwe"),
            ("https://www.tiktok.com/@demo/video/123", "TikTok video by @demo"),
            ("https://www.tiktok.com/video/987", "TikTok #987"),
            ("https://www.instagram.com/reel/Cabc123/", "Instagram Reel #Cabc123"),
            ("https://example.com/some/page", "example.com content"),
        ],
    )
    def test_platform_heuristics(self, url, expected):
        assert extract_default_title_from_url(url) == expected

    @pytest.mark.parametrize(
        "url", ["", "not a url", "http://[invalid", None, 42, "tiktok.com"]
    )
    def test_never_fails_and_never_empty(self, url):
        title = extract_default_title_from_url(url)
        assert isinstance(title, str)
        assert title

    def test_malformed_url_defaults_to_untitled(self):
        assert extract_default_title_from_url("http://[invalid") == UNTITLED
        assert extract_default_title_from_url("not a url") == UNTITLED


class TestExtractVideoId:
    def test_shorts(self):
        assert extract_video_id("https://youtube.com/shorts/abc?x=1") == "abc"

    def test_watch(self):
        assert extract_video_id("https://www.youtube.com/watch?v=def") == "def"

    def test_short_link(self):
        assert extract_video_id("https://youtu.be/ghi") == "ghi"

    def test_not_youtube(self):
        assert extract_video_id("https://vimeo.com/1") is None
