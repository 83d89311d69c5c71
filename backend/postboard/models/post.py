"""Post ORM: a blog entry created by exactly one user.

Invariants:
    - Always belongs to a User (creator_id FK, non-nullable, never reassigned)
    - created_at/updated_at are set by the store, timezone-aware UTC
    - updated_at >= created_at

Design Decisions:
    - joined loading for creator: every post payload embeds creator email and name
    - created_at indexed: the feed sorts on it newest-first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """Post entity."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(
        String(1000), nullable=False, default="",
    )
    creator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    creator: Mapped["User"] = relationship(
        "User", back_populates="posts", lazy="joined",
    )
