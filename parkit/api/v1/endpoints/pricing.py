"""Pricing configuration endpoints."""

from typing import Dict

from fastapi import APIRouter, Depends

from parkit.api.deps import get_controller
from parkit.core.pricing import PRICING_MULTIPLIERS
from parkit.schemas.pricing import PricingConfig, PricingConfigUpdate, PricingMultipliers
from parkit.services.controller import ParkingController

router = APIRouter()


@router.get("/", response_model=PricingConfig)
async def get_pricing_config(controller: ParkingController = Depends(get_controller)):
    """Get the current pricing configuration."""
    return controller.pricing_config


@router.patch("/", response_model=PricingConfig)
async def update_pricing_config(
    config_data: PricingConfigUpdate,
    controller: ParkingController = Depends(get_controller),
):
    """Update the pricing configuration and reprice all spots."""
    return await controller.update_pricing_config(config_data)


@router.get("/multipliers", response_model=Dict[str, PricingMultipliers])
async def list_pricing_multipliers():
    """Surge multipliers shown for each pricing rule."""
    return {rule.value: multipliers for rule, multipliers in PRICING_MULTIPLIERS.items()}
