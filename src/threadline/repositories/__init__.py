"""Data access layer wrapping the relational store."""

from .like_repo import LikeRepository
from .post_repo import PostRepository
from .reply_repo import ReplyRepository
from .user_repo import UserRepository

__all__ = [
    "LikeRepository",
    "PostRepository",
    "ReplyRepository",
    "UserRepository",
]
