"""Identity resolution: external user identifiers to internal keys."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from threadline.core.errors import IdentityResolutionError
from threadline.db.time import utcnow
from threadline.models.user import User

__all__ = ["UserRepository"]

logger = logging.getLogger(__name__)


class UserRepository:
    """Thin wrapper around database access for user identities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_uid(self, uid: str) -> User | None:
        """Return the user registered under an external identifier."""
        return self.session.scalars(select(User).where(User.uid == uid)).first()

    def _lookup_key(self, uid: str) -> int | None:
        return self.session.scalars(select(User.id).where(User.uid == uid)).first()

    def resolve_or_create(
        self,
        uid: str,
        username: str | None = None,
        email: str | None = None,
    ) -> int:
        """Return the internal key for `uid`, creating the user on first sight.

        Profile fields are only written when the row is created; for a known
        `uid` they are ignored.

        Args:
            uid: External identifier supplied by the identity provider.
            username: Display name stored for a new user.
            email: Contact address stored for a new user.

        Returns:
            The internal numeric key of the user.

        Raises:
            IdentityResolutionError: If the store fails while reading or writing.
        """
        try:
            existing = self._lookup_key(uid)
            if existing is not None:
                return existing

            user = User(uid=uid, username=username, email=email, created_at=utcnow())
            self.session.add(user)
            self.session.commit()
            logger.info("Created user %s for external id %r", user.id, uid)
            return user.id
        except IntegrityError as exc:
            # A concurrent first use of the same uid won the insert.
            self.session.rollback()
            try:
                winner = self._lookup_key(uid)
            except SQLAlchemyError as lookup_exc:
                logger.exception("Re-reading user %r after insert conflict failed", uid)
                raise IdentityResolutionError(f"Could not resolve user {uid!r}") from lookup_exc
            if winner is None:
                logger.error("User insert for %r failed without a conflicting row: %s", uid, exc)
                raise IdentityResolutionError(f"Could not create user {uid!r}") from exc
            return winner
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Identity resolution failed for %r", uid)
            raise IdentityResolutionError(f"Could not resolve user {uid!r}") from exc
