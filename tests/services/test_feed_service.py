"""Tests for the aggregated post listing."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from threadline.core.errors import StorageError
from threadline.models import Post
from threadline.repositories import (
    LikeRepository,
    PostRepository,
    ReplyRepository,
)
from threadline.services import feed as feed_module
from threadline.services.feed import FeedService


def _feed(session) -> FeedService:
    return FeedService(
        PostRepository(session),
        ReplyRepository(session),
        LikeRepository(session),
    )


def _boom(statement: str = "SELECT") -> OperationalError:
    return OperationalError(statement, {}, Exception("boom"))


@pytest.fixture()
def populated(db_session, test_user, other_user):
    """Two posts an hour apart; the older one has two replies and one like."""
    base = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    older = Post(user_id=test_user.id, content="older", created_at=base, updated_at=base)
    newer_stamp = base + timedelta(hours=1)
    newer = Post(
        user_id=other_user.id,
        content="newer",
        created_at=newer_stamp,
        updated_at=newer_stamp,
    )
    db_session.add_all([older, newer])
    db_session.commit()

    replies = ReplyRepository(db_session)
    replies.create(post_id=older.id, user_id=other_user.id, content="first reply")
    replies.create(post_id=older.id, user_id=test_user.id, content="second reply")
    LikeRepository(db_session).create(post_id=older.id, user_id=other_user.id)
    return {"older": older.id, "newer": newer.id}


def test_empty_store_lists_nothing(db_session) -> None:
    assert _feed(db_session).list_posts_with_detail() == []


def test_posts_are_aggregated(db_session, populated) -> None:
    listing = _feed(db_session).list_posts_with_detail()

    assert [post.id for post in listing] == [populated["newer"], populated["older"]]
    newer, older = listing
    assert newer.likes == 0
    assert newer.replies == []
    assert older.likes == 1
    assert [reply.content for reply in older.replies] == ["first reply", "second reply"]
    assert all(reply.post_id == older.id for reply in older.replies)


def test_listing_uses_constant_number_of_queries(session_factory, populated) -> None:
    """Posts, like counts and replies are each fetched with one query."""
    statements: list[str] = []

    with session_factory() as session:
        engine = session.get_bind()

        def _record(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().upper().startswith("SELECT"):
                statements.append(statement)

        event.listen(engine, "before_cursor_execute", _record)
        try:
            listing = _feed(session).list_posts_with_detail()
        finally:
            event.remove(engine, "before_cursor_execute", _record)

    assert len(listing) == 2
    assert len(statements) == 3


def test_like_count_failure_keeps_replies(db_session, populated, mocker) -> None:
    mocker.patch.object(LikeRepository, "counts_for_posts", side_effect=_boom())

    listing = _feed(db_session).list_posts_with_detail()

    older = next(post for post in listing if post.id == populated["older"])
    assert older.likes == 0
    assert [reply.content for reply in older.replies] == ["first reply", "second reply"]


def test_reply_failure_keeps_like_counts(db_session, populated, mocker) -> None:
    mocker.patch.object(ReplyRepository, "list_for_posts", side_effect=_boom())

    listing = _feed(db_session).list_posts_with_detail()

    older = next(post for post in listing if post.id == populated["older"])
    assert older.likes == 1
    assert older.replies == []
    assert len(listing) == 2


def test_base_query_failure_raises(db_session, populated, mocker) -> None:
    mocker.patch.object(PostRepository, "list_recent", side_effect=_boom())

    with pytest.raises(StorageError):
        _feed(db_session).list_posts_with_detail()


def test_unreadable_post_is_skipped(db_session, populated, mocker) -> None:
    convert = feed_module.to_post_response

    def _flaky(post, **kwargs):
        if post.content == "newer":
            raise ValueError("corrupt row")
        return convert(post, **kwargs)

    mocker.patch.object(feed_module, "to_post_response", side_effect=_flaky)

    listing = _feed(db_session).list_posts_with_detail()

    assert [post.id for post in listing] == [populated["older"]]
    assert listing[0].likes == 1
