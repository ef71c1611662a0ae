"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from parkit.api.deps import get_controller
from parkit.config import Settings
from parkit.db.base import Base
from parkit.main import app
from parkit.services.controller import ParkingController
from parkit.services.store import StateStore

# Set TEST_DATABASE_URL to a postgresql+asyncpg URL to run against PostgreSQL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./parkit_test.db")


@pytest.fixture(scope="function")
async def store() -> AsyncGenerator[StateStore, None]:
    """Create a state store over a clean database for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield StateStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

    await engine.dispose()


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    return Settings(
        SNAPSHOT_CAPACITY=30,
        DEFAULT_PRICING_RULE="balanced",
        DEFAULT_EV_DISCOUNT=0.2,
        DEFAULT_BASE_PRICE=30.0,
        SEED_DEFAULT_SPOTS=True,
    )


@pytest.fixture(scope="function")
async def controller(store: StateStore, test_settings: Settings) -> ParkingController:
    """Controller seeded with the default twelve spots."""
    return await ParkingController.load(store, test_settings)


@pytest.fixture(scope="function")
async def async_client(controller: ParkingController) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client bound to the test controller."""
    app.dependency_overrides[get_controller] = lambda: controller

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
