"""Occupancy snapshot, statistics and prediction schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class OccupancySnapshot(BaseModel):
    """A timestamped observation of free and total spot counts."""

    timestamp: datetime
    free: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def check_free_within_total(self) -> "OccupancySnapshot":
        if self.free > self.total:
            raise ValueError(f"free ({self.free}) cannot exceed total ({self.total})")
        return self


class OccupancyStats(BaseModel):
    """Schema for occupancy statistics."""

    total: int
    free: int
    occupied: int
    reserved: int
    occupancy_rate: float
    average_price: float


class Confidence(str, Enum):
    """Qualitative reliability of a forecast."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PredictionResult(BaseModel):
    """Forecast of free spots some minutes ahead."""

    predicted_free: int
    confidence: Confidence
    reasoning: str


class PredictionResponse(PredictionResult):
    """Schema for prediction response."""

    minutes_ahead: int
    current_free: int
    total: int
    generated_at: datetime
