"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from smartpark.api.deps import get_db_session
from smartpark.db.base import Base
from smartpark.db.models import ParkingSlot, Vehicle
from smartpark.db.session import create_engine, create_session_factory
from smartpark.main import app

OPERATOR_HEADERS = {"X-Operator-Id": "operator-1"}


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def database_url(tmp_path) -> str:
    """SQLite file per test unless TEST_DATABASE_URL points at PostgreSQL."""
    return os.getenv("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'smartpark_test.db'}")


@pytest.fixture(scope="function")
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    test_engine = create_engine(database_url)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: AsyncEngine):
    return create_session_factory(engine)


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a clean database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def slot_a1(db_session: AsyncSession) -> ParkingSlot:
    """Regular slot A1 at 1000 per hour."""
    slot = ParkingSlot(
        slot_number="A1",
        slot_type="regular",
        hourly_rate=Decimal("1000.00"),
        slot_status="available",
    )
    db_session.add(slot)
    await db_session.commit()
    return slot


@pytest.fixture(scope="function")
async def car_rab123a(db_session: AsyncSession) -> Vehicle:
    vehicle = Vehicle(
        plate_number="RAB123A",
        driver_name="Jean Uwimana",
        phone_number="0788000001",
        car_model="Toyota RAV4",
        car_color="White",
    )
    db_session.add(vehicle)
    await db_session.commit()
    return vehicle
