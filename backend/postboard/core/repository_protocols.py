"""Boundary Protocols: contracts between the resolver pipeline and persistence.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy directly
    - Ownership is NOT enforced here: stores persist whatever the pipeline asks
    - PostRepository.list returns (page items, full unfiltered count)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: implementations do IO; the pure core (validation, formatting)
      never awaits anything
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for User objects handed to formatters and services."""
    id: UUID
    email: str
    password: str
    name: str
    status: str
    posts: list


class PostLike(Protocol):
    """Structural contract for Post objects handed to formatters and services."""
    id: UUID
    title: str
    content: str
    image_url: str
    creator_id: UUID
    creator: UserLike
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def find_by_id(self, user_id: UUID | str | None) -> UserLike | None: ...
    async def find_one(self, **filters: object) -> UserLike | None: ...
    async def create(
        self, email: str, password_hash: str, name: str,
    ) -> UserLike: ...
    async def save(self, user: UserLike) -> UserLike: ...


class PostRepository(Protocol):
    """Contract for post persistence."""
    async def find_by_id(self, post_id: UUID | str | None) -> PostLike | None: ...
    async def find_one(self, **filters: object) -> PostLike | None: ...
    async def create(
        self, creator: UserLike, title: str, content: str, image_url: str,
    ) -> PostLike: ...
    async def save(self, post: PostLike) -> PostLike: ...
    async def delete(self, post: PostLike) -> None: ...
    async def list(
        self, page: int, page_size: int,
    ) -> tuple[Sequence[PostLike], int]: ...


class StoreLike(Protocol):
    """Both repositories bound to one unit of work."""
    users: UserRepository
    posts: PostRepository
