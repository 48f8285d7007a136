"""AI service using OpenAI SDK for link categorization, tagging and recommendations."""

import json
import re
from typing import Any, List

from openai import AsyncOpenAI
from pydantic import BaseModel, field_validator

from clipkeeper.config import settings
from clipkeeper.exceptions import ClassificationError
from clipkeeper.logger import ai_logger
from clipkeeper.models.link import (
    CATEGORY_MAX_LENGTH,
    DURATION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from clipkeeper.models.tag import TAG_NAME_MAX_LENGTH
from clipkeeper.services.platform_service import (
    Platform,
    detect_platform,
    extract_default_title_from_url,
    PlatformProfile,
)

UNCATEGORIZED = "Uncategorized"
MAX_TAGS = 5
MAX_DESCRIPTION_CHARS = 500

SYSTEM_PROMPT = "You categorize short-form videos concisely."
RECOMMENDATION_SYSTEM_PROMPT = "You provide concise video recommendations."

_EMOJI_PATTERN = re.compile(r"[😍🔥🎤👀💯]")
_FILLER_PATTERN = re.compile(
    r"\b(how|her|opens|this|that|with|the|and|or|for|is|are|was|were|have|has|had"
    r"|a|an|of|in|on|at|to|by|it|its)\b",
    re.IGNORECASE,
)


class Classification(BaseModel):
    """Parsed categorization result for a link."""

    title: str
    category: str = UNCATEGORIZED
    tags: List[str] = []
    duration: str | None = None

    # Values are cut to the column sizes of links/tags before they are stored
    @field_validator("title")
    @classmethod
    def fit_title(cls, value: str) -> str:
        return _truncate(value, TITLE_MAX_LENGTH) or value

    @field_validator("category")
    @classmethod
    def fit_category(cls, value: str) -> str:
        return _truncate(value, CATEGORY_MAX_LENGTH) or UNCATEGORIZED

    @field_validator("duration")
    @classmethod
    def fit_duration(cls, value: str | None) -> str | None:
        return _truncate(value, DURATION_MAX_LENGTH)

    @field_validator("tags")
    @classmethod
    def fit_tags(cls, value: List[str]) -> List[str]:
        tags = [_truncate(tag, TAG_NAME_MAX_LENGTH) for tag in value]
        return [tag for tag in tags if tag]


class Recommendation(BaseModel):
    """Suggested video based on a user's library."""

    title: str
    platform: str
    category: str
    reason: str


def _truncate(value: str | None, limit: int) -> str | None:
    if value is None:
        return None
    return value.strip()[:limit].rstrip() or None


def optimize_title_for_ai(title: str) -> str:
    """Strip emoji and filler words from a title to cut prompt tokens."""
    title = _EMOJI_PATTERN.sub("", title)
    title = _FILLER_PATTERN.sub("", title)
    return re.sub(r"\s+", " ", title).strip()


def _clean_string(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _clean_tags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    tags = [
        _truncate(tag, TAG_NAME_MAX_LENGTH)
        for tag in value
        if isinstance(tag, str) and tag.strip()
    ]
    return [tag for tag in tags if tag][:MAX_TAGS]


def _clean_duration(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return _clean_string(value)


def parse_classification(content: str | None, default_title: str) -> Classification:
    """
    Parse the model's JSON answer, validating each field independently.

    Args:
        content: Raw message content returned by the model
        default_title: Title to use when the model omits or garbles one

    Returns:
        Classification with per-field fallbacks applied

    Raises:
        ClassificationError: If the content is not a JSON object
    """
    try:
        data = json.loads(content or "{}")
    except json.JSONDecodeError as e:
        raise ClassificationError(f"Model returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ClassificationError("Model returned JSON that is not an object")

    return Classification(
        title=_clean_string(data.get("title")) or default_title,
        category=_clean_string(data.get("category")) or UNCATEGORIZED,
        tags=_clean_tags(data.get("tags")),
        duration=_clean_duration(data.get("duration")),
    )


class AIService:
    """Service for AI-powered link categorization using OpenAI."""

    DEFAULT_RECOMMENDATIONS = [
        Recommendation(
            title="5-Minute Morning Yoga Routine for Energy",
            platform="youtube",
            category="Fitness",
            reason="Popular short workout for quick energy boost",
        ),
        Recommendation(
            title="Easy 15-Minute Pasta Recipe Anyone Can Make",
            platform="tiktok",
            category="Cooking",
            reason="Quick and simple recipe perfect for beginners",
        ),
        Recommendation(
            title="3 Productivity Hacks That Changed My Life",
            platform="instagram",
            category="Productivity",
            reason="Trending time management tips for busy people",
        ),
        Recommendation(
            title="Learn Basic Coding in 60 Seconds",
            platform="youtube",
            category="Education",
            reason="Bite-sized learning for tech beginners",
        ),
        Recommendation(
            title="DIY Home Organization Ideas",
            platform="tiktok",
            category="Lifestyle",
            reason="Creative storage solutions for small spaces",
        ),
    ]

    def __init__(self, client: AsyncOpenAI | None = None):
        """
        Initialize OpenAI client.

        Args:
            client: Preconfigured client; built from settings when omitted.
                Stays None when no API key is configured.
        """
        if client is None and settings.openai_api_key:
            client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.openai_timeout_seconds,
                max_retries=1,
            )
        self.client = client
        self.model = settings.openai_model

    def default_classification(self, url: str, title: str = "") -> Classification:
        """Safe result used whenever the model cannot be consulted."""
        return Classification(
            title=title or extract_default_title_from_url(url),
            category=UNCATEGORIZED,
            tags=[],
            duration=None,
        )

    def _build_classification_prompt(
        self, url: str, platform: str, title: str, description: str
    ) -> str:
        """Build the token-optimized classification prompt."""
        optimized_title = optimize_title_for_ai(title) or title

        prompt_parts = [
            f"Analyze: {platform} video",
            f"Title: {optimized_title}",
            f"URL: {url}",
        ]

        if description:
            if len(description) > MAX_DESCRIPTION_CHARS:
                description = description[:MAX_DESCRIPTION_CHARS] + "..."
            prompt_parts.append(f"Description: {description}")

        title_rule = f"Use exactly: {title}" if title else "Brief descriptive title"
        prompt_parts.extend(
            [
                "",
                "Return JSON with:",
                f"- title: {title_rule}",
                "- category: Single best category",
                "- tags: 3-5 relevant tags",
                "- duration: If detectable (null if not)",
            ]
        )

        return "\n".join(prompt_parts)

    async def classify(
        self,
        url: str,
        title: str = "",
        description: str = "",
        platform: Platform | None = None,
    ) -> Classification:
        """
        Categorize a link with the LLM.

        Failures of any kind degrade to the default classification, so
        ingestion is never blocked by the model.

        Args:
            url: Link URL
            title: Title already resolved by metadata extraction, if any
            description: Optional description text
            platform: Detected platform (detected from the URL if omitted)

        Returns:
            Classification
        """
        if platform is None:
            platform = detect_platform(url, PlatformProfile.PERMISSIVE)
        platform_name = platform.value if platform else "unknown"

        default_title = title or extract_default_title_from_url(url)

        if self.client is None:
            ai_logger.warning("OpenAI API key not configured, skipping classification")
            return self.default_classification(url, title)

        prompt = self._build_classification_prompt(
            url, platform_name, title or default_title, description
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                max_tokens=settings.openai_max_tokens,
                temperature=settings.openai_temperature,
            )
            content = completion.choices[0].message.content
            result = parse_classification(content, default_title)

            ai_logger.info(
                f"Classified {url} as {result.category!r} with {len(result.tags)} tags"
            )
            return result

        except ClassificationError as e:
            ai_logger.error(f"Error parsing classification for {url}: {e}")
        except Exception as e:
            ai_logger.error(f"Error classifying {url}: {e}")

        return self.default_classification(url, title)

    async def generate_recommendations(
        self, categories: List[str], tags: List[str]
    ) -> List[Recommendation]:
        """
        Suggest three videos based on a user's top categories and tags.

        Args:
            categories: User's categories, most used first
            tags: User's tag names, most used first

        Returns:
            Up to three recommendations (empty on failure)
        """
        if self.client is None:
            return []

        prompt = "\n".join(
            [
                "Suggest 3 short videos based on:",
                f"Categories: {', '.join(categories[:3])}",
                f"Tags: {', '.join(tags[:5])}",
                "",
                'Return JSON {"recommendations": [...]} with 3 suggestions:',
                "- title: brief engaging title",
                '- platform: "tiktok", "youtube", or "instagram"',
                "- category: main category",
                "- reason: why it's recommended (brief)",
            ]
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": RECOMMENDATION_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                max_tokens=200,
            )
            data = json.loads(completion.choices[0].message.content or "{}")
        except Exception as e:
            ai_logger.error(f"Error generating recommendations: {e}")
            return []

        if isinstance(data, dict):
            data = data.get("recommendations", [])
        if not isinstance(data, list):
            return []

        recommendations = []
        for item in data[:3]:
            if not isinstance(item, dict):
                continue
            try:
                recommendations.append(Recommendation(**item))
            except ValueError as e:
                ai_logger.debug(f"Skipping malformed recommendation {item}: {e}")

        return recommendations
