"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .likes import router as likes_router
from .posts import router as posts_router
from .replies import router as replies_router
from .summary import router as summary_router

__all__ = [
    "auth_router",
    "likes_router",
    "posts_router",
    "replies_router",
    "summary_router",
]
