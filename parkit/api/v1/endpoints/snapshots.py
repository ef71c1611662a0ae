"""OccupancySnapshot endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from parkit.api.deps import get_controller
from parkit.core.exceptions import PreconditionError
from parkit.schemas.occupancy import OccupancySnapshot
from parkit.services.controller import ParkingController

router = APIRouter()


@router.get("/", response_model=List[OccupancySnapshot])
async def list_snapshots(controller: ParkingController = Depends(get_controller)):
    """List the occupancy history, oldest first."""
    return await controller.get_snapshots()


@router.post("/", response_model=OccupancySnapshot, status_code=status.HTTP_201_CREATED)
async def record_snapshot(controller: ParkingController = Depends(get_controller)):
    """Record the current free/total counts."""
    try:
        snapshot = await controller.record_snapshot()
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No parking spots are tracked",
        )
    return snapshot
