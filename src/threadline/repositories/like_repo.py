"""Data access helpers for likes."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from threadline.core.errors import DependencyNotFoundError, StorageError
from threadline.db.time import utcnow
from threadline.models.like import Like
from threadline.repositories.post_repo import PostRepository

__all__ = ["LikeRepository"]

logger = logging.getLogger(__name__)


class LikeRepository:
    """Thin wrapper around database access for likes.

    Duplicate likes are idempotent: recording a like that already exists
    succeeds without changing anything.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _pair_exists(self, post_id: int, user_id: int) -> bool:
        found = self.session.scalars(
            select(Like.post_id).where(Like.post_id == post_id, Like.user_id == user_id)
        ).first()
        return found is not None

    def create(self, *, post_id: int, user_id: int) -> bool:
        """Record that `user_id` likes `post_id`.

        The insert is attempted unconditionally and the uniqueness constraint
        decides whether it is a duplicate.

        Returns:
            True if a new like was stored, False if it already existed.

        Raises:
            DependencyNotFoundError: If the post does not exist.
            StorageError: If the store fails for any reason other than a duplicate.
        """
        try:
            post_found = PostRepository(self.session).exists(post_id)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to look up post %s for like", post_id)
            raise StorageError("Failed to record like") from exc
        if not post_found:
            raise DependencyNotFoundError("Post", post_id)

        statement = insert(Like).values(post_id=post_id, user_id=user_id, created_at=utcnow())
        try:
            self.session.execute(statement)
            self.session.commit()
            return True
        except IntegrityError as exc:
            self.session.rollback()
            try:
                duplicate = self._pair_exists(post_id, user_id)
            except SQLAlchemyError as lookup_exc:
                logger.exception("Failed to re-read like (%s, %s)", post_id, user_id)
                raise StorageError("Failed to record like") from lookup_exc
            if duplicate:
                logger.debug("Duplicate like by user %s on post %s ignored", user_id, post_id)
                return False
            logger.error("Like (%s, %s) violated a constraint: %s", post_id, user_id, exc)
            raise StorageError("Failed to record like") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to insert like (%s, %s)", post_id, user_id)
            raise StorageError("Failed to record like") from exc

    def count_for_post(self, post_id: int) -> int:
        """Return the number of likes on a post."""
        count = self.session.scalar(
            select(func.count()).select_from(Like).where(Like.post_id == post_id)
        )
        return int(count or 0)

    def counts_for_posts(self, post_ids: Iterable[int]) -> dict[int, int]:
        """Return like counts for many posts with a single grouped query.

        Posts without likes map to 0.
        """
        keys = list(dict.fromkeys(post_ids))
        counts = {key: 0 for key in keys}
        if not keys:
            return counts
        rows = self.session.execute(
            select(Like.post_id, func.count())
            .where(Like.post_id.in_(keys))
            .group_by(Like.post_id)
        )
        for post_id, count in rows:
            counts[post_id] = int(count)
        return counts
