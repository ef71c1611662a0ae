"""Database models package."""

from parkit.db.base import Base
from parkit.db.models.occupancy_snapshot import OccupancySnapshot
from parkit.db.models.parking_spot import ParkingSpot
from parkit.db.models.pricing_config import PricingConfig

__all__ = [
    "Base",
    "OccupancySnapshot",
    "ParkingSpot",
    "PricingConfig",
]
