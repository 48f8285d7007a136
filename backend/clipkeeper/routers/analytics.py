"""Analytics router for library statistics."""

from datetime import datetime, timedelta
from typing import Annotated
from fastapi import APIRouter, Depends, Query

from clipkeeper.config import settings
from clipkeeper.dependencies import get_current_user, get_repository
from clipkeeper.logger import api_logger
from clipkeeper.models.link import Link
from clipkeeper.models.user import User
from clipkeeper.redis_client import RedisClient, get_redis, stats_cache_key
from clipkeeper.repository import LinkRepository
from clipkeeper.schemas.analytics import LinkStats

router = APIRouter(prefix="/analytics")


@router.get("/stats", response_model=LinkStats)
async def get_link_stats(
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    cache: Annotated[RedisClient, Depends(get_redis)],
    force_refresh: bool = Query(False, description="Force refresh cache"),
):
    """
    Get statistics about the user's library (cached for 5 minutes).

    Returns totals per platform and category, the most used tags and the
    number of links added during the last seven days.

    Args:
        force_refresh: Skip cache and fetch fresh data from database
    """
    key = stats_cache_key(current_user.id)

    if not force_refresh:
        cached_stats = cache.get_json(key)
        if cached_stats:
            api_logger.debug(f"Returning cached stats for user {current_user.id}")
            return cached_stats

    api_logger.info(f"Fetching fresh stats for user {current_user.id}")

    by_platform = repository.count_links_by(current_user.id, Link.platform)
    by_category = repository.count_links_by(current_user.id, Link.category)
    top_tags = repository.get_tag_counts(current_user.id)[:10]

    stats = {
        "total_links": repository.get_link_count(current_user.id),
        "links_this_week": repository.count_links_since(
            current_user.id, datetime.utcnow() - timedelta(days=7)
        ),
        "by_platform": [{"name": name, "count": count} for name, count in by_platform],
        "by_category": [{"name": name, "count": count} for name, count in by_category],
        "top_tags": [{"name": name, "count": count} for name, count in top_tags],
    }

    cache.set_json(key, stats, expire=settings.stats_cache_seconds)

    return stats
