from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from clipkeeper.models.link import CATEGORY_MAX_LENGTH, TITLE_MAX_LENGTH
from clipkeeper.schemas.tag import TagResponse


class LinkCreate(BaseModel):
    """Schema for submitting a link."""

    url: str = Field(min_length=1, max_length=2048)
    force: bool = False  # Save even if the user already has this URL


class LinkResponse(BaseModel):
    """Link response schema with its tags."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str
    platform: str
    thumbnail_url: str | None = None
    category: str
    duration: str | None = None
    user_id: int
    created_at: datetime
    last_viewed: datetime | None = None
    metadata: dict | None = Field(None, validation_alias="link_metadata")
    tags: list[TagResponse] = []


class CategoryUpdate(BaseModel):
    """Schema for changing a link's category."""

    category: str = Field(min_length=1, max_length=CATEGORY_MAX_LENGTH)


class TitleUpdate(BaseModel):
    """Schema for renaming a link."""

    title: str = Field(max_length=TITLE_MAX_LENGTH)


class DuplicateLinkResponse(BaseModel):
    """Body returned with 409 when the user already saved the URL."""

    message: str
    existing_link_id: int
