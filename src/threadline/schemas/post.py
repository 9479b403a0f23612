"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import Content, ExternalId
from .reply import ReplyResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    uid: ExternalId
    content: Content


class PostResponse(BaseModel):
    """Aggregated post view: the stored row plus its like count and replies."""

    id: int
    user_id: int
    content: str
    likes: int = 0
    replies: list[ReplyResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
