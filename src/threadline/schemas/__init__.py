"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .like import LikeCreate, LikeResponse
from .post import PostCreate, PostResponse
from .reply import ReplyCreate, ReplyResponse
from .summary import SummaryResponse
from .user import LoginRequest, LoginResponse

__all__ = [
    "LikeCreate", "LikeResponse",
    "LoginRequest", "LoginResponse",
    "PostCreate", "PostResponse",
    "ReplyCreate", "ReplyResponse",
    "SummaryResponse",
]
