"""Tests for parking spot endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_spots(async_client: AsyncClient):
    """Test listing parking spots."""
    response = await async_client.get("/api/v1/spots/")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 12
    assert data[0]["label"] == "Panaji-A1"
    assert data[0]["price"] == 30.0
    assert data[2]["is_ev"] is True
    assert data[2]["price"] == 24.0


@pytest.mark.asyncio
async def test_list_spots_filtered_by_status(async_client: AsyncClient):
    """Test filtering spots by status."""
    response = await async_client.get("/api/v1/spots/", params={"status": "reserved"})
    assert response.status_code == 200
    data = response.json()
    assert [s["label"] for s in data] == ["Panaji-B2", "Panaji-E1", "Panaji-F2"]


@pytest.mark.asyncio
async def test_get_spot(async_client: AsyncClient):
    """Test getting a specific spot."""
    response = await async_client.get("/api/v1/spots/4")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "reserved"
    assert data["reserved_by"] == "Priya Sharma"
    assert data["zone"] == "Panaji - Block B"


@pytest.mark.asyncio
async def test_get_spot_not_found(async_client: AsyncClient):
    """Test getting a non-existent spot."""
    response = await async_client.get("/api/v1/spots/999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_spot(async_client: AsyncClient):
    """Test a manager edit of base price and status."""
    response = await async_client.patch(
        "/api/v1/spots/5",
        json={"base_price": 40.0, "status": "occupied"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["base_price"] == 40.0
    assert data["status"] == "occupied"
    # 7 of 12 unavailable
    assert data["price"] == 50.0


@pytest.mark.asyncio
async def test_update_spot_rejects_non_positive_price(async_client: AsyncClient):
    """Test that base prices must be positive."""
    response = await async_client.patch("/api/v1/spots/5", json={"base_price": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_toggle_status_and_ev(async_client: AsyncClient):
    """Test the status cycle and EV toggle endpoints."""
    response = await async_client.post("/api/v1/spots/1/toggle-status")
    assert response.status_code == 200
    assert response.json()["status"] == "occupied"

    response = await async_client.post("/api/v1/spots/1/toggle-ev")
    assert response.status_code == 200
    data = response.json()
    assert data["is_ev"] is True
    assert data["price"] == 30.0


@pytest.mark.asyncio
async def test_quote_spot(async_client: AsyncClient):
    """Test quoting a booking without reserving."""
    response = await async_client.get(
        "/api/v1/spots/1/quote",
        params={"hours": 3, "vehicle_type": "2-wheeler"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total_cost"] == 45.0
    assert data["size_multiplier"] == 0.5

    spot = await async_client.get("/api/v1/spots/1")
    assert spot.json()["status"] == "free"


@pytest.mark.asyncio
async def test_book_and_release_spot(async_client: AsyncClient):
    """Test booking a free spot and releasing it."""
    response = await async_client.post(
        "/api/v1/spots/1/book",
        json={
            "reserved_by": "Rahul Naik",
            "subscription": "regular",
            "hours": 2,
            "vehicle": {"type": "4-wheeler", "size": "large", "fuel_type": "non-ev"},
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["spot_id"] == 1
    assert data["subscription"] == "regular"
    assert data["total_cost"] == 78.0

    spot = (await async_client.get("/api/v1/spots/1")).json()
    assert spot["status"] == "reserved"
    assert spot["reserved_by"] == "Rahul Naik"

    response = await async_client.post("/api/v1/spots/1/release")
    assert response.status_code == 200
    assert response.json()["status"] == "free"


@pytest.mark.asyncio
async def test_book_unavailable_spot(async_client: AsyncClient):
    """Test booking an occupied spot."""
    response = await async_client.post("/api/v1/spots/2/book", json={"reserved_by": "Rahul Naik"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_bulk_status(async_client: AsyncClient):
    """Test setting the status of several spots."""
    response = await async_client.post(
        "/api/v1/spots/bulk-status",
        json={"spot_ids": [1, 3], "status": "reserved"},
    )
    assert response.status_code == 200
    data = response.json()
    assert [s["status"] for s in data] == ["reserved", "reserved"]

    response = await async_client.post(
        "/api/v1/spots/bulk-status",
        json={"spot_ids": [1, 500], "status": "free"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_simulate_fill_and_clear(async_client: AsyncClient):
    """Test the manager simulation endpoints."""
    response = await async_client.post("/api/v1/spots/simulate-fill", json={"count": 2})
    assert response.status_code == 200
    assert response.json() == {"affected": 2}

    response = await async_client.post("/api/v1/spots/clear-reservations")
    assert response.status_code == 200
    assert response.json() == {"affected": 3}
