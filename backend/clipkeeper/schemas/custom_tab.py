from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CustomTabCreate(BaseModel):
    """Schema for creating a custom tab."""

    name: str = Field(min_length=1, max_length=100)
    icon: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=500)


class CustomTabResponse(BaseModel):
    """Custom tab response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    icon: str
    description: str
    created_at: datetime
