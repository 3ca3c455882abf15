"""
Pytest configuration and shared fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Must be set before infrastructure.database.connection builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from typing import AsyncGenerator
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from adapters.persistence import InMemoryStore
from core.domain import ContentItem, ContentKind, Principal, UserRole
from infrastructure.config import Settings
from infrastructure.database.models import Base


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with handle defaults, independent of the environment."""
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        handle_max_length=20,
        handle_fallback_prefix="user",
        handle_max_suffix_attempts=1000,
        handle_retry_backoff_ms=0,
    )


# ============================================================================
# In-memory store fixtures
# ============================================================================

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def reserve(store: InMemoryStore):
    """Mark handle values as taken by placeholder owners."""

    async def _reserve(*values: str) -> None:
        for value in values:
            await store.try_insert_handle(value, f"reserved:{value.lower()}")

    return _reserve


@pytest.fixture
def creator(store: InMemoryStore) -> Principal:
    return store.add_principal(
        Principal(id=str(uuid4()), role=UserRole.CREATOR, display_name="Creator One")
    )


@pytest.fixture
def fan(store: InMemoryStore) -> Principal:
    return store.add_principal(
        Principal(id=str(uuid4()), role=UserRole.USER, display_name="Fan", email="fan@example.com")
    )


@pytest.fixture
def admin(store: InMemoryStore) -> Principal:
    return store.add_principal(Principal(id=str(uuid4()), role=UserRole.ADMIN))


@pytest.fixture
def premium_post(store: InMemoryStore, creator: Principal) -> ContentItem:
    return store.add_content(
        ContentItem(id=str(uuid4()), owner_id=creator.id, is_premium=True, title="Members only")
    )


@pytest.fixture
def public_post(store: InMemoryStore, creator: Principal) -> ContentItem:
    return store.add_content(
        ContentItem(id=str(uuid4()), owner_id=creator.id, is_premium=False, title="Hello")
    )


@pytest.fixture
def premium_vr(store: InMemoryStore, creator: Principal) -> ContentItem:
    return store.add_content(
        ContentItem(
            id=str(uuid4()),
            owner_id=creator.id,
            is_premium=True,
            kind=ContentKind.VR,
            title="Studio tour",
        )
    )
