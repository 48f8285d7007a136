"""Recommendations built from a user's saved links."""

from collections import Counter
from typing import List

from clipkeeper.logger import api_logger
from clipkeeper.models.link import Link
from clipkeeper.repository import LinkRepository
from clipkeeper.services.ai_service import AIService, Recommendation


class RecommendationService:
    """Service suggesting new content and resurfacing forgotten links."""

    MIN_LINKS_FOR_AI = 2

    def __init__(self, repository: LinkRepository, ai_service: AIService):
        self.repository = repository
        self.ai_service = ai_service

    async def get_recommendations(self, user_id: int) -> List[Recommendation]:
        """
        Suggest videos matching the user's most used categories and tags.

        Falls back to a fixed list for new users or when the model returns
        nothing usable.
        """
        links = self.repository.get_links_by_user_id(user_id)
        if len(links) < self.MIN_LINKS_FOR_AI:
            return list(AIService.DEFAULT_RECOMMENDATIONS)

        categories, tags = self._top_interests(links)
        recommendations = await self.ai_service.generate_recommendations(
            categories, tags
        )

        if not recommendations:
            api_logger.info(
                f"Falling back to default recommendations for user {user_id}"
            )
            return list(AIService.DEFAULT_RECOMMENDATIONS)

        return recommendations

    def get_not_viewed(self, user_id: int, limit: int = 5) -> List[Link]:
        return self.repository.get_recommended_links(user_id, limit)

    @staticmethod
    def _top_interests(links: List[Link]) -> tuple[List[str], List[str]]:
        category_counts = Counter(link.category for link in links if link.category)
        tag_counts = Counter(tag.name for link in links for tag in link.tags)

        categories = [name for name, _ in category_counts.most_common()]
        tags = [name for name, _ in tag_counts.most_common()]
        return categories, tags
