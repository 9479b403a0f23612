"""Data access helpers for replies."""
from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from threadline.core.errors import DependencyNotFoundError, StorageError
from threadline.db.time import utcnow
from threadline.models.reply import Reply
from threadline.repositories.post_repo import PostRepository

__all__ = ["ReplyRepository"]

logger = logging.getLogger(__name__)

_REPLY_ORDER = (Reply.created_at.asc(), Reply.id.asc())


class ReplyRepository:
    """Thin wrapper around database access for reply entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(self, *, post_id: int, user_id: int, content: str) -> Reply:
        """Insert a reply to `post_id` and return the persisted ORM instance.

        Raises:
            DependencyNotFoundError: If the post does not exist.
            StorageError: If the insert fails for any other reason.
        """
        try:
            post_found = PostRepository(self.session).exists(post_id)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to look up post %s for reply", post_id)
            raise StorageError("Failed to create reply") from exc
        if not post_found:
            raise DependencyNotFoundError("Post", post_id)

        now = utcnow()
        reply = Reply(
            post_id=post_id,
            user_id=user_id,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self.session.add(reply)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to insert reply to post %s by user %s", post_id, user_id)
            raise StorageError("Failed to create reply") from exc
        self.session.refresh(reply)
        return reply

    def list_for_post(self, post_id: int) -> list[Reply]:
        """Return the replies to a post in creation order."""
        result = self.session.scalars(
            select(Reply).where(Reply.post_id == post_id).order_by(*_REPLY_ORDER)
        )
        return list(result)

    def list_for_posts(self, post_ids: Iterable[int]) -> dict[int, list[Reply]]:
        """Return replies for many posts with a single query.

        Every requested key is present in the result; each list is in
        creation order, as `list_for_post` would return it.
        """
        keys = list(dict.fromkeys(post_ids))
        grouped: dict[int, list[Reply]] = defaultdict(list)
        if keys:
            result = self.session.scalars(
                select(Reply).where(Reply.post_id.in_(keys)).order_by(*_REPLY_ORDER)
            )
            for reply in result:
                grouped[reply.post_id].append(reply)
        return {key: grouped.get(key, []) for key in keys}

    def list_texts(self, post_id: int) -> list[str]:
        """Return only the reply bodies of a post, in creation order."""
        result = self.session.scalars(
            select(Reply.content).where(Reply.post_id == post_id).order_by(*_REPLY_ORDER)
        )
        return list(result)
