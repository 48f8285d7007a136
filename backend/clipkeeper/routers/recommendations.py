"""Recommendations router."""

from typing import Annotated, List
from fastapi import APIRouter, Depends

from clipkeeper.dependencies import get_current_user, get_recommendation_service
from clipkeeper.models.user import User
from clipkeeper.schemas.analytics import RecommendationResponse
from clipkeeper.schemas.link import LinkResponse
from clipkeeper.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/recommendations")


@router.get("/", response_model=List[RecommendationResponse])
async def get_recommendations(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecommendationService, Depends(get_recommendation_service)],
):
    """
    Suggest new videos from the user's top categories and tags.

    Users with fewer than two links get a fixed starter list.
    """
    recommendations = await service.get_recommendations(current_user.id)
    return [rec.model_dump() for rec in recommendations]


@router.get("/not-viewed", response_model=List[LinkResponse])
async def get_not_viewed(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecommendationService, Depends(get_recommendation_service)],
):
    """Get the five links the user has not opened for the longest time."""
    return service.get_not_viewed(current_user.id)
