"""Pricing schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PricingRule(str, Enum):
    """Manager-selected pricing strategy."""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class SubscriptionType(str, Enum):
    """Subscriber class of the person booking."""

    REGULAR = "regular"
    GUEST = "guest"


class VehicleType(str, Enum):
    TWO_WHEELER = "2-wheeler"
    FOUR_WHEELER = "4-wheeler"


class VehicleSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class FuelType(str, Enum):
    EV = "ev"
    NON_EV = "non-ev"


class PricingConfig(BaseModel):
    """Pricing configuration."""

    rule: PricingRule = PricingRule.BALANCED
    ev_discount: float = Field(0.2, ge=0.0, le=0.5)
    base_price_default: float = Field(30.0, gt=0)

    model_config = {"from_attributes": True}


class PricingConfigUpdate(BaseModel):
    """Schema for a partial pricing configuration update."""

    rule: Optional[PricingRule] = None
    ev_discount: Optional[float] = Field(None, ge=0.0, le=0.5)
    base_price_default: Optional[float] = Field(None, gt=0)


class PricingMultipliers(BaseModel):
    """Surge multipliers for the high and moderate demand bands."""

    high: float
    moderate: float


class VehicleInfo(BaseModel):
    """Vehicle details supplied at booking time."""

    type: VehicleType = VehicleType.FOUR_WHEELER
    size: VehicleSize = VehicleSize.MEDIUM
    fuel_type: FuelType = FuelType.NON_EV


class BookingRequest(BaseModel):
    """Schema for booking a spot."""

    reserved_by: str = Field(..., min_length=1, max_length=255)
    subscription: SubscriptionType = SubscriptionType.GUEST
    hours: int = Field(1, ge=1, le=24)
    vehicle: VehicleInfo = Field(default_factory=VehicleInfo)


class BookingQuote(BaseModel):
    """Price quote for a booking."""

    spot_id: int
    subscription: SubscriptionType
    hours: int
    price_per_hour: float
    size_multiplier: float
    fuel_factor: float
    total_cost: float
