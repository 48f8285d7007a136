from datetime import datetime
from pydantic import BaseModel, EmailStr, ConfigDict, Field


class NotificationPreferences(BaseModel):
    """Notification settings stored on the user."""

    email_notifications: bool = True
    new_content_alerts: bool = True
    weekly_digest: bool = False
    platform_updates: bool = True


class NotificationPreferencesUpdate(BaseModel):
    """Partial update of notification settings."""

    email_notifications: bool | None = None
    new_content_alerts: bool | None = None
    weekly_digest: bool | None = None
    platform_updates: bool | None = None


class UserResponse(BaseModel):
    """User response schema (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: EmailStr
    is_premium: bool
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    notification_preferences: NotificationPreferences | None = None
    created_at: datetime


class UserUpdate(BaseModel):
    """Schema for updating the profile."""

    username: str | None = Field(None, min_length=3, max_length=50)
    email: EmailStr | None = None
    display_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None


class PasswordUpdate(BaseModel):
    """Schema for changing the password."""

    current_password: str
    new_password: str


class QuotaResponse(BaseModel):
    """Link usage against the free tier limit."""

    is_premium: bool
    link_count: int
    limit: int | None = None
    remaining: int | None = None
