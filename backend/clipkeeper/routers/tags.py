"""Tags router for managing link tags."""

from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, status, Query

from clipkeeper.dependencies import get_current_user, get_repository
from clipkeeper.models.user import User
from clipkeeper.redis_client import RedisClient, get_redis, invalidate_user_stats_cache
from clipkeeper.repository import LinkRepository
from clipkeeper.schemas.tag import TagCount, TagCreate, TagResponse

router = APIRouter(prefix="/tags")


@router.get("/", response_model=List[TagCount])
async def get_tags(
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    search: str | None = Query(None, description="Search tags by name"),
    limit: int | None = Query(
        None, ge=1, le=500, description="Limit number of results"
    ),
):
    """
    Get the current user's tag names with the number of links carrying each.

    Args:
        search: Optional case-insensitive substring filter
        limit: Optional limit on number of tags returned

    Returns list of tags ordered by usage count (most used first).
    """
    counts = repository.get_tag_counts(current_user.id)

    result = [{"name": name, "count": count} for name, count in counts]

    if search:
        term = search.lower()
        result = [tag for tag in result if term in tag["name"].lower()]

    if limit:
        result = result[:limit]

    return result


@router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    cache: Annotated[RedisClient, Depends(get_redis)],
):
    """Add a tag to one of the current user's links."""
    link = repository.get_link_by_id(payload.link_id)
    if not link or link.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access to this link",
        )

    tag = repository.create_tag(link.id, payload.name.strip())
    repository.commit()
    invalidate_user_stats_cache(cache, current_user.id)

    return tag


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    cache: Annotated[RedisClient, Depends(get_redis)],
):
    """Remove a tag, provided it belongs to one of the user's links."""
    tag = repository.get_tag_by_id(tag_id)
    if not tag:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found"
        )

    if tag.link.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access to this tag",
        )

    repository.delete_tag(tag)
    repository.commit()
    invalidate_user_stats_cache(cache, current_user.id)

    return {"message": "Tag deleted successfully"}
