from pydantic import BaseModel


class CountItem(BaseModel):
    name: str
    count: int


class LinkStats(BaseModel):
    """Library statistics for the analytics page."""

    total_links: int
    links_this_week: int
    by_platform: list[CountItem]
    by_category: list[CountItem]
    top_tags: list[CountItem]


class RecommendationResponse(BaseModel):
    """Suggested video."""

    title: str
    platform: str
    category: str
    reason: str
