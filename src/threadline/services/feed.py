"""Assembly of the aggregated post listing.

A listing is one query for the posts plus one batched query for like counts
and one batched query for replies, joined in memory. The read is not
transactional: a reply or like written between those queries may be missing
from the result.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from threadline.core.errors import StorageError
from threadline.models.post import Post
from threadline.models.reply import Reply
from threadline.repositories.like_repo import LikeRepository
from threadline.repositories.post_repo import PostRepository
from threadline.repositories.reply_repo import ReplyRepository
from threadline.schemas.post import PostResponse
from threadline.schemas.reply import ReplyResponse

logger = logging.getLogger(__name__)


def to_post_response(
    post: Post,
    *,
    likes: int = 0,
    replies: Sequence[ReplyResponse] = (),
) -> PostResponse:
    """Convert a Post ORM instance to the aggregated API schema."""
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        content=post.content,
        likes=likes,
        replies=list(replies),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _reply_views(post_id: int, replies: Sequence[Reply]) -> list[ReplyResponse]:
    views: list[ReplyResponse] = []
    for reply in replies:
        try:
            views.append(ReplyResponse.model_validate(reply))
        except ValidationError as exc:
            logger.warning("Skipping unreadable reply on post %s: %s", post_id, exc)
    return views


class FeedService:
    """Builds the post listing with like counts and embedded replies."""

    def __init__(
        self,
        posts: PostRepository,
        replies: ReplyRepository,
        likes: LikeRepository,
    ) -> None:
        self.posts = posts
        self.replies = replies
        self.likes = likes

    def _rollback(self) -> None:
        # A failed statement can leave the transaction unusable for the next query.
        try:
            self.posts.session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after failed feed sub-query also failed", exc_info=True)

    def list_posts_with_detail(self) -> list[PostResponse]:
        """Return every post, newest first, with like count and replies.

        A post whose row cannot be read is skipped. If the like-count or the
        reply query fails, posts are still returned with zero likes or no
        replies respectively; those failures are only logged.

        Raises:
            StorageError: If the posts themselves cannot be listed.
        """
        try:
            rows = self.posts.list_recent()
        except SQLAlchemyError as exc:
            self._rollback()
            logger.exception("Failed to list posts")
            raise StorageError("Failed to list posts") from exc

        # Snapshot rows first; a rollback below expires the ORM instances.
        feed: list[PostResponse] = []
        for row in rows:
            try:
                feed.append(to_post_response(row))
            except (ValidationError, ValueError, TypeError) as exc:
                logger.warning("Skipping unreadable post row: %s", exc)
        if not feed:
            return feed

        keys = [post.id for post in feed]

        like_counts: dict[int, int] = {}
        try:
            like_counts = self.likes.counts_for_posts(keys)
        except SQLAlchemyError as exc:
            self._rollback()
            logger.warning("Like counts unavailable for %d posts: %s", len(keys), exc)

        reply_views: dict[int, list[ReplyResponse]] = {}
        try:
            grouped = self.replies.list_for_posts(keys)
            reply_views = {key: _reply_views(key, grouped[key]) for key in grouped}
        except SQLAlchemyError as exc:
            self._rollback()
            logger.warning("Replies unavailable for %d posts: %s", len(keys), exc)

        return [
            post.model_copy(
                update={
                    "likes": like_counts.get(post.id, 0),
                    "replies": reply_views.get(post.id, []),
                }
            )
            for post in feed
        ]
