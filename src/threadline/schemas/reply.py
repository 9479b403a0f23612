"""Reply-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .common import Content, ExternalId, PostKey


class ReplyCreate(BaseModel):
    """Schema for replying to a post."""

    uid: ExternalId
    post_id: PostKey
    content: Content


class ReplyResponse(BaseModel):
    """Schema for reply information returned by the API."""

    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
