"""ParkingSpot schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SpotStatus(str, Enum):
    """Status of a parking spot."""

    FREE = "free"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class ParkingSpot(BaseModel):
    """A single bookable parking space."""

    id: int
    label: str
    status: SpotStatus = SpotStatus.FREE
    is_ev: bool = False
    base_price: float
    # Derived from base_price, occupancy and EV discount
    price: float
    reserved_by: Optional[str] = None
    zone: Optional[str] = None
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    last_updated: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @property
    def is_unavailable(self) -> bool:
        return self.status in (SpotStatus.OCCUPIED, SpotStatus.RESERVED)


class ParkingSpotUpdate(BaseModel):
    """Schema for a manager edit of a parking spot."""

    status: Optional[SpotStatus] = None
    is_ev: Optional[bool] = None
    base_price: Optional[float] = Field(None, gt=0)


class BulkStatusUpdate(BaseModel):
    """Schema for setting the status of several spots at once."""

    spot_ids: List[int] = Field(..., min_length=1)
    status: SpotStatus


class SimulateFillRequest(BaseModel):
    """Schema for occupying a number of free spots."""

    count: int = Field(..., ge=1)


class BulkActionResult(BaseModel):
    """Result of a bulk manager action."""

    affected: int
