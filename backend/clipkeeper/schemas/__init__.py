from clipkeeper.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    Token,
)
from clipkeeper.schemas.user import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
    PasswordUpdate,
    QuotaResponse,
    UserResponse,
    UserUpdate,
)
from clipkeeper.schemas.tag import TagBase, TagCount, TagCreate, TagResponse
from clipkeeper.schemas.link import (
    CategoryUpdate,
    DuplicateLinkResponse,
    LinkCreate,
    LinkResponse,
    TitleUpdate,
)
from clipkeeper.schemas.custom_tab import CustomTabCreate, CustomTabResponse
from clipkeeper.schemas.analytics import CountItem, LinkStats, RecommendationResponse

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "Token",
    "NotificationPreferences",
    "NotificationPreferencesUpdate",
    "PasswordUpdate",
    "QuotaResponse",
    "UserResponse",
    "UserUpdate",
    "TagBase",
    "TagCount",
    "TagCreate",
    "TagResponse",
    "CategoryUpdate",
    "DuplicateLinkResponse",
    "LinkCreate",
    "LinkResponse",
    "TitleUpdate",
    "CustomTabCreate",
    "CustomTabResponse",
    "CountItem",
    "LinkStats",
    "RecommendationResponse",
]
