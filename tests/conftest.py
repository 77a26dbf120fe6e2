"""Shared pytest fixtures for all test suites."""

import asyncio
import os
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from backend.app.api.deps import (
    get_activity_repository,
    get_catalog_repository,
    get_pdf_storage,
    get_user_repository,
)
from backend.app.db.engine import create_tables
from backend.app.db.inmemory import (
    InMemoryActivityRepository,
    InMemoryCatalogRepository,
    InMemoryUserRepository,
)
from backend.app.db.models import Base
from backend.app.main import app
from backend.app.models.common import Role
from backend.app.storage.files import LocalPdfStorage

PUBLIC_BASE_URL = "http://testserver/pdfs"


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    if not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(database_url, poolclass=NullPool, echo=False)
    await create_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session(tmp_path: Path) -> AsyncGenerator[AsyncSession, None]:
    """Async session on a throwaway SQLite file with all tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}", poolclass=NullPool, echo=False
    )
    await create_tables(engine)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()


@dataclass
class PortalFixture:
    """Test client plus the in-memory stores behind it."""

    client: TestClient
    users: InMemoryUserRepository
    catalog: InMemoryCatalogRepository
    activities: InMemoryActivityRepository
    storage: LocalPdfStorage


async def _seed_accounts(users: InMemoryUserRepository) -> None:
    await users.create_user(
        username="alice", password="pw1", role=Role.student, branch="CSE", year="1"
    )
    await users.create_user(
        username="bob", password="pw2", role=Role.student, branch="CSE", year="2"
    )
    await users.create_user(
        username="erin", password="pw3", role=Role.student, branch="ECE", year="3"
    )
    await users.create_user(
        username="admin", password="admin", role=Role.admin, branch="CSE", year="4"
    )


@pytest.fixture
def portal(tmp_path: Path) -> Generator[PortalFixture, None, None]:
    """App wired to in-memory repositories and tmp_path storage.

    Accounts: students alice (CSE/1), bob (CSE/2), erin (ECE/3) and admin (CSE).
    """
    users = InMemoryUserRepository()
    catalog = InMemoryCatalogRepository()
    activities = InMemoryActivityRepository()
    storage = LocalPdfStorage(tmp_path / "pdfs", PUBLIC_BASE_URL)

    asyncio.run(_seed_accounts(users))

    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_catalog_repository] = lambda: catalog
    app.dependency_overrides[get_activity_repository] = lambda: activities
    app.dependency_overrides[get_pdf_storage] = lambda: storage

    try:
        yield PortalFixture(
            client=TestClient(app),
            users=users,
            catalog=catalog,
            activities=activities,
            storage=storage,
        )
    finally:
        app.dependency_overrides.clear()
