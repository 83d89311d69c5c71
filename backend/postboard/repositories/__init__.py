"""Repositories: SQLAlchemy implementations of the store protocols.

Invariants:
    - A Store binds both repositories to ONE AsyncSession (one unit of work)
    - open_store() gives every caller its own session; sessions are never shared
      between concurrently running resolvers
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.infrastructure.database import DatabaseSessionManager
from postboard.repositories.posts import SqlPostRepository
from postboard.repositories.users import SqlUserRepository


class Store:
    """User and post repositories sharing one session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = SqlUserRepository(db)
        self.posts = SqlPostRepository(db)


@asynccontextmanager
async def open_store(
    manager: DatabaseSessionManager,
) -> AsyncGenerator[Store, None]:
    async with manager.session() as db:
        yield Store(db)


__all__ = ["Store", "SqlPostRepository", "SqlUserRepository", "open_store"]
