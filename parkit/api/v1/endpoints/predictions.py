"""Availability prediction endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from parkit.api.deps import get_controller
from parkit.config import settings
from parkit.core.exceptions import PreconditionError
from parkit.schemas.occupancy import PredictionResponse
from parkit.services.controller import ParkingController

router = APIRouter()


@router.get("/", response_model=PredictionResponse)
async def get_prediction(
    minutes_ahead: int = Query(
        settings.PREDICTION_MINUTES_AHEAD, ge=1, le=240, description="Forecast horizon in minutes"
    ),
    controller: ParkingController = Depends(get_controller),
):
    """Forecast free spots from the snapshot history."""
    now = datetime.now()
    try:
        result = await controller.predict(minutes_ahead, now=now)
    except PreconditionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    stats = controller.stats()
    return PredictionResponse(
        **result.model_dump(),
        minutes_ahead=minutes_ahead,
        current_free=stats.free,
        total=stats.total,
        generated_at=now,
    )
