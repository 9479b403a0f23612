"""Shared API dependencies for storage access and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from threadline.core.errors import DependencyNotFoundError, StorageError
from threadline.db.session import get_db
from threadline.repositories import (
    LikeRepository,
    PostRepository,
    ReplyRepository,
    UserRepository,
)
from threadline.services.feed import FeedService
from threadline.services.summarizer import SummaryService, get_summary_service

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_user_repo(db: SessionDep) -> UserRepository:
    """Return the identity resolver bound to the request session."""
    return UserRepository(db)


def get_post_repo(db: SessionDep) -> PostRepository:
    """Return the post accessor bound to the request session."""
    return PostRepository(db)


def get_reply_repo(db: SessionDep) -> ReplyRepository:
    """Return the reply accessor bound to the request session."""
    return ReplyRepository(db)


def get_like_repo(db: SessionDep) -> LikeRepository:
    """Return the like accessor bound to the request session."""
    return LikeRepository(db)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repo)]
ReplyRepoDep = Annotated[ReplyRepository, Depends(get_reply_repo)]
LikeRepoDep = Annotated[LikeRepository, Depends(get_like_repo)]


def get_feed_service(
    posts: PostRepoDep,
    replies: ReplyRepoDep,
    likes: LikeRepoDep,
) -> FeedService:
    """Return the post aggregator for the request."""
    return FeedService(posts, replies, likes)


FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
SummaryServiceDep = Annotated[SummaryService, Depends(get_summary_service)]


def storage_failure(exc: StorageError) -> HTTPException:
    """Map a storage failure to a generic 500; details stay in the server log."""
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


def missing_dependency(exc: DependencyNotFoundError) -> HTTPException:
    """Map a reference to an unknown row to a 404."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{exc.entity} not found",
    )
