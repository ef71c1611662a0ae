"""Tests for pricing configuration endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_get_pricing_config(async_client: AsyncClient):
    """Test reading the default configuration."""
    response = await async_client.get("/api/v1/pricing/")
    assert response.status_code == 200
    assert response.json() == {
        "rule": "balanced",
        "ev_discount": 0.2,
        "base_price_default": 30.0,
    }


@pytest.mark.asyncio
async def test_update_pricing_config_reprices_spots(async_client: AsyncClient):
    """Test that a new EV discount is applied to spot prices."""
    response = await async_client.patch("/api/v1/pricing/", json={"ev_discount": 0.4})
    assert response.status_code == 200
    data = response.json()
    assert data["ev_discount"] == 0.4
    assert data["rule"] == "balanced"

    spot = (await async_client.get("/api/v1/spots/3")).json()
    assert spot["price"] == 18.0


@pytest.mark.asyncio
async def test_update_pricing_config_validates_discount(async_client: AsyncClient):
    """Test that EV discounts above 50% are rejected."""
    response = await async_client.patch("/api/v1/pricing/", json={"ev_discount": 0.8})
    assert response.status_code == 422

    response = await async_client.patch("/api/v1/pricing/", json={"rule": "reckless"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_pricing_multipliers(async_client: AsyncClient):
    """Test the per-rule multiplier table."""
    response = await async_client.get("/api/v1/pricing/multipliers")
    assert response.status_code == 200
    data = response.json()
    assert data["conservative"] == {"high": 1.2, "moderate": 1.1}
    assert data["balanced"] == {"high": 1.5, "moderate": 1.25}
    assert data["aggressive"] == {"high": 2.0, "moderate": 1.5}
