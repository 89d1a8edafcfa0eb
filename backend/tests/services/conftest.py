"""Service test fixtures — async DB, repositories and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session factory
    - db_manager patched so the readiness probe sees the test engine
    - Settings overrides are per-test and cleared afterwards

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests;
      functional unique indexes on lower(name) work the same way there
    - StaticPool: every session shares the single in-memory connection
    - PRAGMA foreign_keys=ON: SQLite otherwise ignores FOREIGN KEY clauses, and
      PostgreSQL enforces them
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import crm.infrastructure.database as db_module
from crm.config import Settings, get_settings
from crm.core.credentials import hash_password
from crm.db.base import Base
from crm.infrastructure.database import DatabaseSessionManager, get_db
from crm.infrastructure.sql_catalog import SqlCategoryRepository, SqlSubCategoryRepository
from crm.infrastructure.sql_customers import SqlCustomerRepository
from crm.infrastructure.sql_users import SqlUserRepository
from crm.main import app
import crm.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repos(test_db):
    """SQL repositories sharing one test session."""
    return {
        "categories": SqlCategoryRepository(test_db),
        "subcategories": SqlSubCategoryRepository(test_db),
        "customers": SqlCustomerRepository(test_db),
        "users": SqlUserRepository(test_db),
    }


@pytest.fixture
def settings_override():
    """Call with keyword overrides to change Settings for the current test."""
    def _override(**values) -> Settings:
        settings = get_settings().model_copy(update=values)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings
    yield _override
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed helpers ────────────────────────────────────────────────

@pytest.fixture
def create_category(client):
    async def _create(name: str = "Web Design", **extra) -> dict:
        res = await client.post("/api/categories", json={"name": name, **extra})
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
def create_subcategory(client):
    async def _create(category_id: str, name: str = "Hosting", **extra) -> dict:
        res = await client.post(
            "/api/subcategories",
            json={"name": name, "category": category_id, **extra},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
def create_customer(client):
    async def _create(category: dict, **fields) -> dict:
        payload = {
            "name": "Jane Doe",
            "phone": "1234567890",
            "address": "12 Main Street",
            "serviceCategory": category["id"],
            "serviceCategoryName": category["name"],
        }
        payload.update(fields)
        res = await client.post("/api/customers", json=payload)
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
async def seed_user(repos):
    """A login user `admin` / `s3cret`."""
    return await repos["users"].insert({
        "username": "admin", "password_hash": hash_password("s3cret"),
    })
