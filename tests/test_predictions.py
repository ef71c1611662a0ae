"""Tests for snapshot, statistics and prediction endpoints."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from parkit.api.deps import get_controller
from parkit.db import models
from parkit.main import app
from parkit.services.controller import ParkingController
from parkit.services.store import StateStore
from tests.factories import BASE_TIME


@pytest.mark.asyncio
async def test_get_stats(async_client: AsyncClient):
    """Test current occupancy statistics."""
    response = await async_client.get("/api/v1/stats/")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 12
    assert data["free"] == 6
    assert data["occupancy_rate"] == 0.5
    assert data["average_price"] == pytest.approx(28.5)


@pytest.mark.asyncio
async def test_record_and_list_snapshots(async_client: AsyncClient):
    """Test recording a snapshot through the API."""
    response = await async_client.post("/api/v1/snapshots/")
    assert response.status_code == 201
    data = response.json()
    assert data["free"] == 6
    assert data["total"] == 12

    response = await async_client.get("/api/v1/snapshots/")
    assert response.status_code == 200
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_prediction_with_insufficient_history(async_client: AsyncClient):
    """Test the low-confidence forecast for a short history."""
    response = await async_client.get("/api/v1/predictions/")
    assert response.status_code == 200
    data = response.json()
    assert data["predicted_free"] == 0
    assert data["confidence"] == "low"
    assert data["minutes_ahead"] == 30
    assert data["current_free"] == 6
    assert data["total"] == 12


@pytest.mark.asyncio
async def test_prediction_from_history(async_client: AsyncClient, controller: ParkingController):
    """Test a forecast from a steadily filling lot."""
    for i in range(4):
        await controller.record_snapshot(now=BASE_TIME + timedelta(minutes=10 * i))
        await controller.simulate_fill(1)

    response = await async_client.get("/api/v1/predictions/", params={"minutes_ahead": 20})
    assert response.status_code == 200
    data = response.json()
    assert 0 <= data["predicted_free"] <= 12
    assert data["predicted_free"] < 3
    assert data["confidence"] in ("low", "medium", "high")
    assert "4 data points" in data["reasoning"]
    assert "decreasing" in data["reasoning"]


@pytest.mark.asyncio
async def test_prediction_horizon_is_validated(async_client: AsyncClient):
    """Test the allowed forecast horizon."""
    response = await async_client.get("/api/v1/predictions/", params={"minutes_ahead": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    """Test the health check endpoint."""
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_out_of_order_snapshot_is_unprocessable(
    async_client: AsyncClient, controller: ParkingController
):
    """Test that a snapshot older than the stored history maps to 422."""
    await controller.record_snapshot(now=datetime.now(timezone.utc) + timedelta(days=1))

    response = await async_client.post("/api/v1/snapshots/")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_empty_lot_snapshot_conflicts(
    async_client: AsyncClient, controller: ParkingController, store: StateStore
):
    """Test that recording with no tracked spots maps to 409."""
    empty = ParkingController(store, spots=[], pricing_config=controller.pricing_config)
    app.dependency_overrides[get_controller] = lambda: empty

    response = await async_client.post("/api/v1/snapshots/")
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_invalid_history_is_unprocessable(async_client: AsyncClient, store: StateStore):
    """Test that a history with repeated timestamps maps to 422."""
    async with store.session_factory() as session:
        session.add_all(
            models.OccupancySnapshot(timestamp=BASE_TIME, free=free, total=12) for free in (6, 5, 4)
        )
        await session.commit()

    response = await async_client.get("/api/v1/predictions/")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_prediction_uses_snapshots_from_other_writers(
    async_client: AsyncClient, store: StateStore
):
    """Test that the API forecasts from history it did not record itself."""
    async with store.session_factory() as session:
        session.add_all(
            models.OccupancySnapshot(
                timestamp=BASE_TIME + timedelta(minutes=10 * i), free=free, total=12
            )
            for i, free in enumerate((9, 8, 7))
        )
        await session.commit()

    response = await async_client.get("/api/v1/predictions/")
    assert response.status_code == 200
    assert "3 data points" in response.json()["reasoning"]
