"""User Repository: SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - Malformed ids behave like missing ids (None), never raise
    - Every write commits its own unit of work
    - A duplicate email on create raises ConflictError, also when a concurrent
      registration wins the race past the service pre-check
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.core.domain_types import parse_id
from postboard.core.errors import ConflictError
from postboard.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """Thin data-access layer around the User model."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_id(self, user_id: UUID | str | None) -> User | None:
        uid = parse_id(user_id)
        if uid is None:
            return None
        return await self._db.get(User, uid)

    async def find_one(self, **filters: object) -> User | None:
        result = await self._db.execute(select(User).filter_by(**filters))
        return result.scalars().first()

    async def create(self, email: str, password_hash: str, name: str) -> User:
        user = User(email=email, password=password_hash, name=name, posts=[])
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            logger.warning("Duplicate email on create", extra={"operation": "createUser"})
            raise ConflictError("User exists already!")
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def save(self, user: User) -> User:
        self._db.add(user)
        await self._db.commit()
        return user
