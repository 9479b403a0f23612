"""Data builders shared by the test modules."""
from __future__ import annotations

from sqlalchemy.orm import Session

from threadline.models import Post, User
from threadline.repositories import PostRepository, UserRepository


def create_user(session: Session, uid: str, username: str | None = None) -> User:
    """Persist a user through the identity resolver and return it."""
    repo = UserRepository(session)
    repo.resolve_or_create(uid, username=username)
    user = repo.get_by_uid(uid)
    assert user is not None
    return user


def create_post(session: Session, user: User, content: str) -> Post:
    """Persist a post for `user`."""
    return PostRepository(session).create(user_id=user.id, content=content)


def gemini_response(*texts: str) -> dict[str, object]:
    """Build a generateContent response body with one candidate per text."""
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}], "role": "model"}}
            for text in texts
        ]
    }
