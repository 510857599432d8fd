"""
PetPal Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh SQLite database file (aiosqlite driver) with
       the schema created from Base.metadata; the app's session dependency
       is overridden to use it.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine: async engine on a per-test SQLite file
    │   └── db_session: AsyncSession for service-level tests
    ├── test_client: HTTPX AsyncClient wired to the app (cookies persist)
    ├── make_user: registers a user through UserService
    └── sample_pet_payload: JSON body for POST /api/pets
"""

import os
import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any petpal import: settings and the module-level engine
# are built from the environment at import time
_TEST_DIR = tempfile.mkdtemp(prefix="petpal_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/app.db"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from petpal.database import Base, get_db_session  # noqa: E402
from petpal.models.pet import Pet, PetTrait  # noqa: E402,F401
from petpal.models.user import User  # noqa: E402,F401


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A throwaway database with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for calling services directly.

    Usage:
        async def test_create(db_session):
            pet = await pet_service.create_pet(db_session, PetCreate(...))
    """
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Redirects are not followed so tests can assert on 303 + Location.
    The client keeps cookies, so a login carries over to later requests.
    """
    from petpal.main import app

    async def _override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def other_client(test_client) -> AsyncGenerator[AsyncClient, None]:
    """A second browser with its own cookie jar, sharing the same database."""
    from petpal.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(session_factory):
    """Factory: await make_user("alice") → committed User."""
    from petpal.services.user_service import user_service

    async def _make_user(username: str, password: str = "s3cret-pass", email: str = None):
        async with session_factory() as session:
            user = await user_service.create_user(
                session, username, email or f"{username}@petpal.io", password
            )
            await session.commit()
            return user

    return _make_user


@pytest.fixture
def sample_pet_payload():
    return {
        "name": "Sparky",
        "species": "dragon",
        "rarity": "Rare",
        "traits": ["brave", "loyal"],
        "stats": {"hunger": 40, "happiness": 70, "energy": 90},
    }
