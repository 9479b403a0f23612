"""Like-related Pydantic schemas."""

from pydantic import BaseModel, Field

from .common import ExternalId, PostKey


class LikeCreate(BaseModel):
    """Schema for liking a post."""

    uid: ExternalId
    post_id: PostKey


class LikeResponse(BaseModel):
    """Outcome of a like submission.

    `created` is False when the user had already liked the post; the
    request still succeeds.
    """

    message: str
    created: bool = Field(..., description="False when the like already existed")
