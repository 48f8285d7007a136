"""Authentication router for registration, login and JWT tokens."""

from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status

from clipkeeper.dependencies import get_repository
from clipkeeper.logger import auth_logger
from clipkeeper.repository import LinkRepository
from clipkeeper.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    Token,
)
from clipkeeper.schemas.user import UserResponse
from clipkeeper.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: RegisterRequest,
    repository: Annotated[LinkRepository, Depends(get_repository)],
):
    """
    Create an account and return tokens for it.

    Passwords need at least 8 characters, a number and an uppercase letter.
    """
    if repository.get_user_by_email(payload.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    if repository.get_user_by_username(payload.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already taken",
        )

    if not AuthService.is_strong_password(payload.password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "Password must be at least 8 characters and contain "
                "a number and uppercase letter"
            ),
        )

    user = repository.create_user(
        username=payload.username,
        email=payload.email,
        password_hash=AuthService.hash_password(payload.password),
    )
    repository.commit()
    auth_logger.info(f"Registered user {user.id}")

    tokens = AuthService.create_tokens_for_user(user)
    return AuthResponse(**tokens, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    repository: Annotated[LinkRepository, Depends(get_repository)],
):
    """Exchange email and password for tokens."""
    user = repository.get_user_by_email(payload.email)

    if not user or not AuthService.verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    tokens = AuthService.create_tokens_for_user(user)
    return AuthResponse(**tokens, user=UserResponse.model_validate(user))


@router.post("/refresh", response_model=Token)
async def refresh_token(
    payload: RefreshTokenRequest,
    repository: Annotated[LinkRepository, Depends(get_repository)],
):
    """
    Refresh access token using refresh token.

    Returns:
        New access and refresh tokens
    """
    try:
        user_id = AuthService.decode_token(payload.refresh_token, expected_type="refresh")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = repository.get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    tokens = AuthService.create_tokens_for_user(user)

    return Token(
        access_token=tokens["access_token"],
        refresh_token=tokens["refresh_token"],
        token_type="bearer",
    )


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client discards them."""
    return {"message": "Logged out successfully"}
