"""Pricing, snapshot and prediction core."""

from parkit.core.exceptions import (
    EmptySpotSetError,
    InvalidSnapshotError,
    InvalidSnapshotHistoryError,
    PreconditionError,
    SnapshotOrderError,
)
from parkit.core.prediction import analyze_trend, predict
from parkit.core.pricing import (
    compute_spot_price,
    get_pricing_multipliers,
    occupancy_rate,
    quote_booking,
    update_all_prices,
)
from parkit.core.snapshots import append_snapshot

__all__ = [
    "EmptySpotSetError",
    "InvalidSnapshotError",
    "InvalidSnapshotHistoryError",
    "PreconditionError",
    "SnapshotOrderError",
    "analyze_trend",
    "predict",
    "compute_spot_price",
    "get_pricing_multipliers",
    "occupancy_rate",
    "quote_booking",
    "update_all_prices",
    "append_snapshot",
]
