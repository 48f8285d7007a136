from pydantic import BaseModel, EmailStr, Field

from clipkeeper.schemas.user import UserResponse


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RegisterRequest(BaseModel):
    """Request body for account registration."""

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    """Request body for token refresh."""

    refresh_token: str


class AuthResponse(Token):
    """Tokens plus the authenticated user."""

    user: UserResponse
