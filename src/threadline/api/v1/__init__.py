"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    likes_router,
    posts_router,
    replies_router,
    summary_router,
)

__all__ = [
    "auth_router",
    "posts_router",
    "replies_router",
    "likes_router",
    "summary_router",
]
