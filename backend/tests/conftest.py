"""Pytest configuration with fixtures for async testing."""

from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.core.clock import FixedClock
from shelflife.core.database import Database
from shelflife.main import create_app

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"

# Reference date shared by store and API tests
TODAY = date(2024, 6, 25)


# ---------------------------------------------------------------------------
# Test Data Factories (using MagicMock for SQLAlchemy 2.0 compatibility)
# ---------------------------------------------------------------------------


def _make_mock(defaults: dict[str, Any], overrides: dict[str, Any]) -> MagicMock:
    """Create a MagicMock with given attributes."""
    merged = {**defaults, **overrides}
    mock = MagicMock()
    for k, v in merged.items():
        setattr(mock, k, v)
    return mock


class ProductFactory:
    """Factory for creating Product instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> MagicMock:
        cls._counter += 1
        defaults = {
            "id": cls._counter,
            "sku": f"{90000 + cls._counter}",
            "name": f"Test Product {cls._counter}",
            "shelf_life": 30,
            "reminder_days": 5,
            "location": "Aisle 1",
            "created_at": datetime.now(timezone.utc),
            "updated_at": datetime.now(timezone.utc),
        }
        return _make_mock(defaults, overrides)


class RecordFactory:
    """Factory for creating ProductionRecord instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> MagicMock:
        cls._counter += 1
        production_date = overrides.get("production_date", TODAY - timedelta(days=cls._counter))
        shelf_life = overrides.get("shelf_life", 30)
        reminder_days = overrides.get("reminder_days", 5)
        defaults = {
            "id": cls._counter,
            "sku": "10001",
            "name": "Whole Milk",
            "production_date": production_date,
            "shelf_life": shelf_life,
            "reminder_days": reminder_days,
            "location": "Chilled row 1",
            "expiry_date": production_date + timedelta(days=shelf_life),
            "alert_date": production_date + timedelta(days=shelf_life - reminder_days),
            "created_at": datetime.now(timezone.utc),
        }
        return _make_mock(defaults, overrides)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def product_factory():
    """Provide ProductFactory for tests."""
    ProductFactory._counter = 0
    return ProductFactory


@pytest.fixture
def record_factory():
    """Provide RecordFactory for tests."""
    RecordFactory._counter = 0
    return RecordFactory


@pytest.fixture
def mock_db():
    """Provide a mock AsyncSession for unit tests."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def make_result():
    """Provide a builder for mock ``db.execute`` results."""

    def _make(scalar: Any = None, scalars: list[Any] | None = None, rowcount: int = 0) -> MagicMock:
        result = MagicMock()
        result.scalar_one_or_none.return_value = scalar
        result.scalar_one.return_value = scalar
        result.scalars.return_value.all.return_value = scalars or []
        result.rowcount = rowcount
        return result

    return _make


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory SQLite database with all tables created."""
    db = Database(IN_MEMORY_URL)
    await db.init()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(fixed_clock: FixedClock) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against a fully started app on an in-memory database."""
    app = create_app(database_url=IN_MEMORY_URL, clock=fixed_clock, seed_demo_data=False)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
