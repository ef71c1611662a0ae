"""Schemas package."""

from parkit.schemas.occupancy import (
    Confidence,
    OccupancySnapshot,
    OccupancyStats,
    PredictionResponse,
    PredictionResult,
)
from parkit.schemas.parking_spot import (
    BulkActionResult,
    BulkStatusUpdate,
    ParkingSpot,
    ParkingSpotUpdate,
    SimulateFillRequest,
    SpotStatus,
)
from parkit.schemas.pricing import (
    BookingQuote,
    BookingRequest,
    FuelType,
    PricingConfig,
    PricingConfigUpdate,
    PricingMultipliers,
    PricingRule,
    SubscriptionType,
    VehicleInfo,
    VehicleSize,
    VehicleType,
)

__all__ = [
    "Confidence",
    "OccupancySnapshot",
    "OccupancyStats",
    "PredictionResponse",
    "PredictionResult",
    "BulkActionResult",
    "BulkStatusUpdate",
    "ParkingSpot",
    "ParkingSpotUpdate",
    "SimulateFillRequest",
    "SpotStatus",
    "BookingQuote",
    "BookingRequest",
    "FuelType",
    "PricingConfig",
    "PricingConfigUpdate",
    "PricingMultipliers",
    "PricingRule",
    "SubscriptionType",
    "VehicleInfo",
    "VehicleSize",
    "VehicleType",
]
