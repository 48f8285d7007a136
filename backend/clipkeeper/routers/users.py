"""Users router for the current user's profile and quota."""

from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status

from clipkeeper.dependencies import get_current_user, get_quota_service, get_repository
from clipkeeper.models.user import User
from clipkeeper.repository import LinkRepository
from clipkeeper.schemas.user import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
    PasswordUpdate,
    QuotaResponse,
    UserResponse,
    UserUpdate,
)
from clipkeeper.services.auth_service import AuthService
from clipkeeper.services.quota_service import QuotaService

router = APIRouter(prefix="/users")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: Annotated[User, Depends(get_current_user)]):
    """Get the authenticated user."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    payload: UserUpdate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Update username, email and profile fields."""
    if payload.username and payload.username != current_user.username:
        if repository.get_user_by_username(payload.username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already taken. Please choose another username.",
            )

    if payload.email and payload.email != current_user.email:
        if repository.get_user_by_email(payload.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already in use. Please use another email address.",
            )

    repository.update_user_profile(current_user, **payload.model_dump())
    repository.commit()

    return repository.get_user_by_id(current_user.id)


@router.patch("/me/password")
async def update_password(
    payload: PasswordUpdate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Change the password after verifying the current one."""
    if not AuthService.verify_password(
        payload.current_password, current_user.password_hash
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    if not AuthService.is_strong_password(payload.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "Password must be at least 8 characters and contain "
                "a number and uppercase letter"
            ),
        )

    repository.update_user_password(
        current_user, AuthService.hash_password(payload.new_password)
    )
    repository.commit()

    return {"message": "Password updated successfully"}


@router.patch("/me/notifications", response_model=NotificationPreferences)
async def update_notification_preferences(
    payload: NotificationPreferencesUpdate,
    repository: Annotated[LinkRepository, Depends(get_repository)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Update notification preferences; omitted fields keep their value."""
    preferences = repository.update_notification_preferences(
        current_user, payload.model_dump(exclude_none=True)
    )
    repository.commit()

    return preferences


@router.get("/me/quota", response_model=QuotaResponse)
async def get_quota(
    current_user: Annotated[User, Depends(get_current_user)],
    quota_service: Annotated[QuotaService, Depends(get_quota_service)],
):
    """Get link usage against the free tier limit."""
    return quota_service.usage(current_user.id)
