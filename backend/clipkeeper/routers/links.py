"""Links router for submitting and managing saved links."""

from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, status, Query

from clipkeeper.dependencies import get_current_user, get_ingest_service, get_repository
from clipkeeper.exceptions import (
    DuplicateLinkError,
    QuotaExceededError,
    UnsupportedPlatformError,
    UserNotFoundError,
)
from clipkeeper.logger import api_logger
from clipkeeper.models.link import Link
from clipkeeper.models.user import User
from clipkeeper.redis_client import RedisClient, get_redis, invalidate_user_stats_cache
from clipkeeper.repository import LinkRepository
from clipkeeper.schemas.link import (
    CategoryUpdate,
    DuplicateLinkResponse,
    LinkCreate,
    LinkResponse,
    TitleUpdate,
)
from clipkeeper.services.ingest_service import IngestService
from clipkeeper.services.platform_service import Platform

router = APIRouter(prefix="/links")

RECENT_LINKS_LIMIT = 5


def get_owned_link(repository: LinkRepository, link_id: int, user: User) -> Link:
    """Fetch a link, raising 404 if missing and 403 if it belongs to someone else."""
    link = repository.get_link_by_id(link_id)

    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Link not found"
        )

    if link.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access to this link",
        )

    return link


@router.post(
    "/",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": DuplicateLinkResponse}},
)
async def create_link(
    payload: LinkCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    ingest_service: Annotated[IngestService, Depends(get_ingest_service)],
    cache: Annotated[RedisClient, Depends(get_redis)],
):
    """
    Save a link: detect its platform, check the quota, then categorize it.

    Returns 400 for unsupported links, 403 when the free tier is full and
    409 when the user already saved the URL (resend with force=true to keep
    a second copy).
    """
    try:
        link = await ingest_service.ingest_link(
            current_user.id, payload.url, force=payload.force
        )

    except UnsupportedPlatformError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    except QuotaExceededError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    except DuplicateLinkError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(e), "existing_link_id": e.existing_link_id},
        )

    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    except Exception as e:
        ingest_service.repository.rollback()
        api_logger.error(f"Create link error for user {current_user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving link",
        )

    invalidate_user_stats_cache(cache, current_user.id)
    return link


@router.get("/", response_model=List[LinkResponse])
async def get_links(
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    platform: str | None = Query(None, description="Filter by platform"),
    type: str | None = Query(None, description="'recent' for the latest links"),
):
    """
    Get the current user's links, newest first.

    Args:
        platform: Only links from this platform (unknown values are ignored)
        type: "recent" returns only the five most recent links
    """
    if type == "recent":
        return repository.get_recent_links(current_user.id, RECENT_LINKS_LIMIT)

    if platform and platform in {p.value for p in Platform}:
        return repository.get_links_by_platform(current_user.id, platform)

    return repository.get_links_by_user_id(current_user.id)


@router.get("/{link_id}", response_model=LinkResponse)
async def get_link(
    link_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get a specific link by ID."""
    return get_owned_link(repository, link_id, current_user)


@router.delete("/{link_id}")
async def delete_link(
    link_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    cache: Annotated[RedisClient, Depends(get_redis)],
):
    """Delete a link together with its tags and tab memberships."""
    get_owned_link(repository, link_id, current_user)

    repository.delete_link(link_id, current_user.id)
    repository.commit()
    invalidate_user_stats_cache(cache, current_user.id)

    return {"message": "Link deleted successfully"}


@router.patch("/{link_id}/category", response_model=LinkResponse)
async def update_link_category(
    link_id: int,
    payload: CategoryUpdate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
    cache: Annotated[RedisClient, Depends(get_redis)],
):
    """Correct the AI-assigned category of a link."""
    link = get_owned_link(repository, link_id, current_user)

    repository.update_link_category(link, payload.category.strip())
    repository.commit()
    invalidate_user_stats_cache(cache, current_user.id)

    return repository.get_link_by_id(link_id)


@router.patch("/{link_id}/title", response_model=LinkResponse)
async def update_link_title(
    link_id: int,
    payload: TitleUpdate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Rename a link."""
    title = payload.title.strip()
    if not title:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Title cannot be empty"
        )

    link = get_owned_link(repository, link_id, current_user)

    repository.update_link_title(link, title)
    repository.commit()

    return repository.get_link_by_id(link_id)


@router.post("/{link_id}/view")
async def record_link_view(
    link_id: int,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Bump the link's last_viewed timestamp."""
    link = get_owned_link(repository, link_id, current_user)

    repository.update_last_viewed(link)
    repository.commit()

    return {"message": "Link view timestamp updated"}
