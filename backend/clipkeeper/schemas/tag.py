from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from clipkeeper.models.tag import TAG_NAME_MAX_LENGTH


class TagBase(BaseModel):
    """Base tag schema."""

    name: str


class TagCreate(TagBase):
    """Schema for adding a tag to a link."""

    name: str = Field(min_length=1, max_length=TAG_NAME_MAX_LENGTH)
    link_id: int


class TagResponse(TagBase):
    """Tag response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    link_id: int
    created_at: datetime


class TagCount(BaseModel):
    """Tag name with the number of the user's links carrying it."""

    name: str
    count: int
