"""User ORM: registered account that owns posts.

Invariants:
    - id is UUID primary key (python-side default)
    - email is unique (index) and stored as given
    - password holds the passlib hash only, never plain text
    - posts ordered by creation time; removing a post from the collection deletes it

Design Decisions:
    - selectin loading for posts: profile shaping never triggers lazy IO in async code
    - cascade delete-orphan: detaching a post from its owner and deleting it are one flush
"""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.core.domain_types import DEFAULT_USER_STATUS
from postboard.db.base import Base


class User(Base):
    """User account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, default=DEFAULT_USER_STATUS,
    )

    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="creator",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Post.created_at",
    )
