"""User identity schemas."""

from pydantic import BaseModel, Field

from .common import ExternalId


class LoginRequest(BaseModel):
    """Identity presented on login.

    Profile fields are only stored the first time a `uid` is seen.
    """

    uid: ExternalId
    email: str | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=255)


class LoginResponse(BaseModel):
    """Internal key resolved for the presented identity."""

    user_id: int
