"""Data access helpers for working with posts."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from threadline.core.errors import StorageError
from threadline.db.time import utcnow
from threadline.models.post import Post

__all__ = ["PostRepository"]

logger = logging.getLogger(__name__)


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def exists(self, post_id: int) -> bool:
        """Return True if a post with this key is stored."""
        found = self.session.scalars(select(Post.id).where(Post.id == post_id)).first()
        return found is not None

    def list_recent(self) -> list[Post]:
        """Return all posts, newest first.

        Posts created at the same instant are ordered by ascending key.
        """
        result = self.session.scalars(
            select(Post).order_by(Post.created_at.desc(), Post.id.asc())
        )
        return list(result)

    def create(self, *, user_id: int, content: str) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            user_id: Internal key of the author; must already exist.
            content: Text body of the post.

        Raises:
            StorageError: If the insert fails, including an unknown author key.
        """
        now = utcnow()
        post = Post(user_id=user_id, content=content, created_at=now, updated_at=now)
        self.session.add(post)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to insert post for user %s", user_id)
            raise StorageError("Failed to create post") from exc
        self.session.refresh(post)
        return post
