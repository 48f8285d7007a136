"""Platform detection and heuristic titles for submitted URLs."""

import re
from enum import Enum
from urllib.parse import parse_qs, urlparse

from clipkeeper.logger import ingest_logger


class Platform(str, Enum):
    """Origin site of a saved link."""

    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    VIMEO = "vimeo"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    REDDIT = "reddit"
    MEDIUM = "medium"
    SUBSTACK = "substack"
    GITHUB = "github"
    DOCUMENT = "document"
    ARTICLE = "article"
    WEBPAGE = "webpage"


class PlatformProfile(str, Enum):
    """Validation profile deciding which platforms are accepted."""

    STRICT = "strict"  # TikTok, YouTube Shorts and Instagram Reels only
    PERMISSIVE = "permissive"  # Any web content, falling back to "webpage"


STRICT_PLATFORMS = (Platform.TIKTOK, Platform.YOUTUBE, Platform.INSTAGRAM)

DOCUMENT_EXTENSIONS = (".pdf", ".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx")
ARTICLE_PATH_MARKERS = ("/blog", "/article", "/post", "/news")

UNTITLED = "Untitled Content"

# Ordered (platform, pattern) rules. Specific domains come before the broad
# path heuristics so that e.g. "github.com/.../blog" stays "github".
STRICT_RULES: list[tuple[Platform, re.Pattern]] = [
    (Platform.TIKTOK, re.compile(r"tiktok\.com")),
    (Platform.YOUTUBE, re.compile(r"youtube\.com/shorts|youtu\.be/")),
    (Platform.INSTAGRAM, re.compile(r"instagram\.com/([^/?#]+/)?reels?/")),
]

PERMISSIVE_RULES: list[tuple[Platform, re.Pattern]] = [
    (Platform.TIKTOK, re.compile(r"tiktok\.com")),
    (Platform.YOUTUBE, re.compile(r"youtube\.com/|youtu\.be/")),
    (Platform.INSTAGRAM, re.compile(r"instagram\.com")),
    (Platform.FACEBOOK, re.compile(r"facebook\.com|fb\.watch")),
    (Platform.VIMEO, re.compile(r"vimeo\.com")),
    (Platform.TWITTER, re.compile(r"(^|[/.])twitter\.com|(^|[/.])x\.com/")),
    (Platform.LINKEDIN, re.compile(r"linkedin\.com")),
    (Platform.REDDIT, re.compile(r"reddit\.com|redd\.it/")),
    (Platform.MEDIUM, re.compile(r"medium\.com")),
    (Platform.SUBSTACK, re.compile(r"substack\.com")),
    (Platform.GITHUB, re.compile(r"github\.com")),
]


def supported_platforms(profile: PlatformProfile = PlatformProfile.STRICT) -> list[str]:
    """List the platform tags accepted under a profile."""
    if profile == PlatformProfile.STRICT:
        return [p.value for p in STRICT_PLATFORMS]
    return [p.value for p in Platform]


def detect_platform(
    url: str, profile: PlatformProfile = PlatformProfile.STRICT
) -> Platform | None:
    """
    Map a URL to its platform tag.

    Args:
        url: Submitted URL
        profile: Strict accepts only the three short-form video platforms,
            permissive accepts any http(s) URL

    Returns:
        Platform, or None when the URL is unsupported under the profile
    """
    if not url or not isinstance(url, str):
        return None

    normalized = url.strip().lower()

    rules = STRICT_RULES if profile == PlatformProfile.STRICT else PERMISSIVE_RULES
    for platform, pattern in rules:
        if pattern.search(normalized):
            return platform

    if profile == PlatformProfile.STRICT:
        return None

    return _detect_generic(normalized)


def _detect_generic(normalized_url: str) -> Platform | None:
    """Fallback heuristics for content outside the known domains."""
    try:
        parsed = urlparse(normalized_url)
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None

    path = parsed.path or ""
    if path.endswith(DOCUMENT_EXTENSIONS):
        return Platform.DOCUMENT

    if parsed.netloc.startswith("blog.") or any(
        marker in path for marker in ARTICLE_PATH_MARKERS
    ):
        return Platform.ARTICLE

    return Platform.WEBPAGE


def extract_video_id(url: str) -> str | None:
    """Extract a YouTube video id from shorts, youtu.be or watch URLs."""
    try:
        parsed = urlparse(url.strip())
        host = (parsed.hostname or "").lower()
        segments = [s for s in parsed.path.split("/") if s]

        if host.endswith("youtu.be") and segments:
            return segments[0]

        if "youtube.com" in host:
            if len(segments) >= 2 and segments[0] in ("shorts", "embed", "live"):
                return segments[1]
            video_ids = parse_qs(parsed.query).get("v")
            if video_ids and video_ids[0]:
                return video_ids[0]
    except ValueError:
        return None

    return None


def extract_tiktok_username(url: str) -> str | None:
    match = re.search(r"tiktok\.com/@([^/?#]+)", url, re.IGNORECASE)
    return match.group(1) if match else None


def extract_instagram_account(url: str) -> str | None:
    """Account handle from URLs like instagram.com/<account>/reel/<code>."""
    match = re.search(r"instagram\.com/([^/?#]+)/reels?/", url, re.IGNORECASE)
    if match and match.group(1).lower() not in ("p", "reel", "reels", "tv"):
        return match.group(1)
    return None


def extract_default_title_from_url(url: str) -> str:
    """
    Build a readable title from the URL alone.

    Never raises and never returns an empty string.

    Args:
        url: Submitted URL (may be malformed)

    Returns:
        Heuristic title such as "YouTube Short #abc" or "example.com content"
    """
    try:
        lowered = url.lower()

        # YouTube
        if "youtube.com" in lowered or "youtu.be" in lowered:
            video_id = extract_video_id(url)
            if video_id:
                if "/shorts/" in lowered:
                    return f"YouTube Short #{video_id}"
                return f"YouTube Video #{video_id}"

        # TikTok
        if "tiktok.com" in lowered:
            username = extract_tiktok_username(url)
            if username:
                return f"TikTok video by @{username}"
            id_match = re.search(r"video/(\d+)", url)
            if id_match:
                return f"TikTok #{id_match.group(1)}"

        # Instagram
        if "instagram.com" in lowered:
            reel_match = re.search(r"reels?/([^/?#]+)", url)
            if reel_match:
                return f"Instagram Reel #{reel_match.group(1)}"

        hostname = urlparse(url.strip()).hostname
        if hostname:
            return f"{hostname} content"
    except Exception as e:
        ingest_logger.debug(f"Default title extraction failed for {url!r}: {e}")

    return UNTITLED
