"""Model capturing likes on posts."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from threadline.db.session import Base
from threadline.db.time import UTCDateTime, utcnow


class Like(Base):
    """Per-user like on a post.

    The composite (post, user) primary key is the only guard against
    duplicate likes; application code never checks before inserting.
    """

    __tablename__ = "likes"

    # Leading post_id also serves per-post count lookups.
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
