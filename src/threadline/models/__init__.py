"""SQLAlchemy models for the Threadline application."""

from .like import Like
from .post import Post
from .reply import Reply
from .user import User

__all__ = [
    "Like",
    "Post",
    "Reply",
    "User",
]
