"""Root conftest: shared test configuration and database/app fixtures.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - The session manager singleton is patched to the test engine and restored
    - Media storage writes under tmp_path, never the working directory

Design Decisions:
    - File-backed SQLite over :memory: so request sessions and assertion
      sessions see the same data through separate connections
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

import postboard.infrastructure.database as db_module  # noqa: E402
from postboard.core.request_context import RequestIdentity  # noqa: E402
from postboard.db.session import create_schema  # noqa: E402
from postboard.infrastructure.database import DatabaseSessionManager  # noqa: E402
from postboard.infrastructure.media_storage import (  # noqa: E402
    MediaStorage, get_media_storage,
)
from postboard.infrastructure.security import hash_password  # noqa: E402
from postboard.main import app  # noqa: E402
from postboard.repositories import Store  # noqa: E402

PASSWORD = "secret-pw"


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'postboard.db'}", echo=False,
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def store(session_factory):
    async with session_factory() as db:
        yield Store(db)


@pytest.fixture
def db_manager(test_engine, session_factory, monkeypatch):
    """Session manager singleton bound to the test engine."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = session_factory
    monkeypatch.setattr(db_module, "db_manager", fake_manager)
    return fake_manager


@pytest.fixture
def media(tmp_path):
    return MediaStorage(tmp_path / "media", "images")


@pytest.fixture
async def client(db_manager, media):
    """FastAPI test client with DB and media overridden."""
    app.dependency_overrides[get_media_storage] = lambda: media

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


# ─── Seed helpers ────────────────────────────────────────────────

async def seed_user(store: Store, email: str, name: str = "Ada"):
    return await store.users.create(
        email=email, password_hash=hash_password(PASSWORD), name=name,
    )


@pytest.fixture
async def alice(store):
    return await seed_user(store, "alice@postboard.io", "Alice")


@pytest.fixture
async def bob(store):
    return await seed_user(store, "bob@postboard.io", "Bob")


@pytest.fixture
def alice_identity(alice):
    return RequestIdentity(user_id=alice.id, email=alice.email)


@pytest.fixture
def bob_identity(bob):
    return RequestIdentity(user_id=bob.id, email=bob.email)
