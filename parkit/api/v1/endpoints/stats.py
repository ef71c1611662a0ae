"""Occupancy statistics endpoints."""

from fastapi import APIRouter, Depends

from parkit.api.deps import get_controller
from parkit.schemas.occupancy import OccupancyStats
from parkit.services.controller import ParkingController

router = APIRouter()


@router.get("/", response_model=OccupancyStats)
async def get_stats(controller: ParkingController = Depends(get_controller)):
    """Get current occupancy statistics."""
    return controller.stats()
