"""Schema Bootstrap: create tables directly from the ORM metadata.

Invariants:
    - Used for SQLite runs (local development and tests) only
    - Server databases are migrated with alembic, never bootstrapped here
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from postboard.db.base import Base


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    import postboard.models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
