"""Builders for spots and snapshot histories used across tests."""

from datetime import datetime, timedelta, timezone
from typing import List

from parkit.schemas.occupancy import OccupancySnapshot, OccupancyStats
from parkit.schemas.parking_spot import ParkingSpot, SpotStatus

BASE_TIME = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)
OFF_PEAK = datetime(2026, 1, 5, 13, 0)
PEAK = datetime(2026, 1, 5, 9, 0)


def make_spot(
    spot_id: int = 1,
    status: str = "free",
    is_ev: bool = False,
    base_price: float = 30.0,
) -> ParkingSpot:
    return ParkingSpot(
        id=spot_id,
        label=f"Spot-{spot_id}",
        status=SpotStatus(status),
        is_ev=is_ev,
        base_price=base_price,
        price=base_price,
    )


def make_history(frees: List[int], total: int = 20, step_minutes: int = 10) -> List[OccupancySnapshot]:
    return [
        OccupancySnapshot(
            timestamp=BASE_TIME + timedelta(minutes=i * step_minutes),
            free=free,
            total=total,
        )
        for i, free in enumerate(frees)
    ]


def make_stats(occupancy_rate: float, total: int = 20) -> OccupancyStats:
    unavailable = round(total * occupancy_rate)
    return OccupancyStats(
        total=total,
        free=total - unavailable,
        occupied=unavailable,
        reserved=0,
        occupancy_rate=occupancy_rate,
        average_price=30.0,
    )
