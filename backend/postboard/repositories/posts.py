"""Post Repository: SQLAlchemy implementation of the PostRepository protocol.

Invariants:
    - created_at == updated_at on create; save() always advances updated_at
    - create() appends the post to the creator's collection in the same commit
    - delete() detaches the post from its owner and deletes the row in ONE commit
    - list() total is the full table count, independent of the page window

Design Decisions:
    - Newest-first by created_at, id as tie-break: stable pages without a sequence column
    - Collections awaited via awaitable_attrs: no implicit lazy IO in async sessions
"""

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.core.domain_types import parse_id
from postboard.models.post import Post, utcnow
from postboard.models.user import User


class SqlPostRepository:
    """Thin data-access layer around the Post model."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_id(self, post_id: UUID | str | None) -> Post | None:
        pid = parse_id(post_id)
        if pid is None:
            return None
        return await self._db.get(Post, pid)

    async def find_one(self, **filters: object) -> Post | None:
        result = await self._db.execute(select(Post).filter_by(**filters))
        return result.scalars().first()

    async def create(
        self, creator: User, title: str, content: str, image_url: str,
    ) -> Post:
        now = utcnow()
        post = Post(
            title=title, content=content, image_url=image_url,
            created_at=now, updated_at=now,
        )
        owned = await creator.awaitable_attrs.posts
        owned.append(post)
        self._db.add(post)
        await self._db.commit()
        return post

    async def save(self, post: Post) -> Post:
        post.updated_at = max(utcnow(), _aware(post.created_at))
        self._db.add(post)
        await self._db.commit()
        return post

    async def delete(self, post: Post) -> None:
        owner = await post.awaitable_attrs.creator
        if owner is not None:
            owned = await owner.awaitable_attrs.posts
            if post in owned:
                owned.remove(post)
        await self._db.delete(post)
        await self._db.commit()

    async def list(
        self, page: int, page_size: int,
    ) -> tuple[Sequence[Post], int]:
        total = await self._db.scalar(select(func.count()).select_from(Post))
        result = await self._db.execute(
            select(Post)
            # ids are uuid4: equal created_at values get a stable order, not insertion order
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(result.scalars().all()), total or 0


def _aware(value: datetime) -> datetime:
    """SQLite drops tzinfo on round-trip; stored values are always UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
