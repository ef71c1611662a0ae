"""Parking state controller.

Owns the spot list and pricing configuration, reads the snapshot history
from the store and runs the pricing and prediction core over them.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from parkit.config import Settings, settings as default_settings
from parkit.core.exceptions import PreconditionError
from parkit.core.prediction import predict as predict_availability
from parkit.core.pricing import quote_booking, update_all_prices
from parkit.core.snapshots import append_snapshot
from parkit.schemas.occupancy import OccupancySnapshot, OccupancyStats, PredictionResult
from parkit.schemas.parking_spot import ParkingSpot, ParkingSpotUpdate, SpotStatus
from parkit.schemas.pricing import (
    BookingQuote,
    PricingConfig,
    PricingConfigUpdate,
    PricingRule,
    SubscriptionType,
    VehicleInfo,
)
from parkit.services.store import StateStore

logger = logging.getLogger(__name__)


class SpotNotFoundError(LookupError):
    """No spot with the requested id."""


class SpotUnavailableError(PreconditionError):
    """Spot cannot be booked in its current status."""


# label, status, is_ev, reserved_by, (longitude, latitude), zone
DEFAULT_SPOTS = [
    ("Panaji-A1", "free", False, None, (73.8278, 15.4909), "Panaji - Block A"),
    ("Panaji-A2", "occupied", False, None, (73.8285, 15.4912), "Panaji - Block A"),
    ("Panaji-B1", "free", True, None, (73.8290, 15.4906), "Panaji - Block B"),
    ("Panaji-B2", "reserved", False, "Priya Sharma", (73.8282, 15.4915), "Panaji - Block B"),
    ("Panaji-C1", "free", False, None, (73.8287, 15.4903), "Panaji - Block C"),
    ("Panaji-C2", "occupied", False, None, (73.8293, 15.4910), "Panaji - Block C"),
    ("Panaji-D1", "free", True, None, (73.8280, 15.4917), "Panaji - Block D"),
    ("Panaji-D2", "free", False, None, (73.8295, 15.4908), "Panaji - Block D"),
    ("Panaji-E1", "reserved", False, "Amit Desai", (73.8283, 15.4901), "Panaji - Block E"),
    ("Panaji-E2", "occupied", False, None, (73.8291, 15.4914), "Panaji - Block E"),
    ("Panaji-F1", "free", False, None, (73.8281, 15.4905), "Panaji - Block F"),
    ("Panaji-F2", "reserved", True, "Neha Patel", (73.8288, 15.4911), "Panaji - Block F"),
]

STATUS_CYCLE = {
    SpotStatus.FREE: SpotStatus.OCCUPIED,
    SpotStatus.OCCUPIED: SpotStatus.RESERVED,
    SpotStatus.RESERVED: SpotStatus.FREE,
}


def get_default_spots(base_price: float, now: Optional[datetime] = None) -> List[ParkingSpot]:
    """Seed spots for a fresh installation."""
    now = now or datetime.now(timezone.utc)
    return [
        ParkingSpot(
            id=index,
            label=label,
            status=SpotStatus(status),
            is_ev=is_ev,
            base_price=base_price,
            price=base_price,
            reserved_by=reserved_by,
            longitude=location[0],
            latitude=location[1],
            zone=zone,
            last_updated=now,
        )
        for index, (label, status, is_ev, reserved_by, location, zone) in enumerate(
            DEFAULT_SPOTS, start=1
        )
    ]


def compute_stats(spots: Sequence[ParkingSpot]) -> OccupancyStats:
    """Aggregate counts, occupancy rate and average price."""
    total = len(spots)
    free = sum(1 for s in spots if s.status == SpotStatus.FREE)
    occupied = sum(1 for s in spots if s.status == SpotStatus.OCCUPIED)
    reserved = sum(1 for s in spots if s.status == SpotStatus.RESERVED)

    return OccupancyStats(
        total=total,
        free=free,
        occupied=occupied,
        reserved=reserved,
        occupancy_rate=(occupied + reserved) / total if total > 0 else 0.0,
        average_price=sum(s.price for s in spots) / total if total > 0 else 0.0,
    )


def _with_status(spot: ParkingSpot, status: SpotStatus, reserved_by: Optional[str] = None) -> ParkingSpot:
    return spot.model_copy(
        update={
            "status": status,
            "reserved_by": reserved_by if status == SpotStatus.RESERVED else None,
            "last_updated": datetime.now(timezone.utc),
        }
    )


class ParkingController:
    """Explicit owner of parking state.

    Spots and pricing configuration are cached in memory and replaced whole,
    only after the store has accepted them. Snapshot history is read from the
    store on every use, so snapshots recorded by the worker are visible here.
    Writers are serialized by a lock.
    """

    def __init__(
        self,
        store: StateStore,
        spots: Sequence[ParkingSpot],
        pricing_config: PricingConfig,
        snapshot_capacity: int = 30,
    ):
        self.store = store
        self.snapshot_capacity = snapshot_capacity
        self._pricing_config = pricing_config
        self._spots = self._reprice(spots, pricing_config.ev_discount)
        self._lock = asyncio.Lock()

    @classmethod
    async def load(cls, store: StateStore, config: Optional[Settings] = None) -> "ParkingController":
        """Restore state from the store, seeding defaults on first start."""
        config = config or default_settings

        pricing_config = await store.load_pricing_config()
        if pricing_config is None:
            pricing_config = PricingConfig(
                rule=PricingRule(config.DEFAULT_PRICING_RULE),
                ev_discount=config.DEFAULT_EV_DISCOUNT,
                base_price_default=config.DEFAULT_BASE_PRICE,
            )
            await store.save_pricing_config(pricing_config)

        spots = await store.load_spots()
        if not spots and config.SEED_DEFAULT_SPOTS:
            logger.info("No stored spots, seeding defaults")
            spots = get_default_spots(config.DEFAULT_BASE_PRICE)

        controller = cls(
            store=store,
            spots=spots,
            pricing_config=pricing_config,
            snapshot_capacity=config.SNAPSHOT_CAPACITY,
        )
        if controller.spots:
            await store.save_spots(controller.spots)

        logger.info(f"Loaded {len(controller.spots)} spots")
        return controller

    @property
    def spots(self) -> List[ParkingSpot]:
        return list(self._spots)

    @property
    def pricing_config(self) -> PricingConfig:
        return self._pricing_config

    @staticmethod
    def _reprice(spots: Sequence[ParkingSpot], ev_discount: float) -> List[ParkingSpot]:
        if not spots:
            return []
        return update_all_prices(spots, ev_discount)

    def get_spot(self, spot_id: int) -> ParkingSpot:
        for spot in self._spots:
            if spot.id == spot_id:
                return spot
        raise SpotNotFoundError(f"Parking spot with id {spot_id} not found")

    def stats(self) -> OccupancyStats:
        return compute_stats(self._spots)

    def quote(
        self,
        spot_id: int,
        hours: int = 1,
        vehicle: Optional[VehicleInfo] = None,
        subscription: Optional[SubscriptionType] = None,
    ) -> BookingQuote:
        spot = self.get_spot(spot_id)
        return quote_booking(spot, hours, vehicle or VehicleInfo(), subscription)

    async def get_snapshots(self) -> List[OccupancySnapshot]:
        """Stored snapshot history, oldest first, at most `snapshot_capacity` long."""
        return await self.store.load_snapshots(limit=self.snapshot_capacity)

    async def predict(self, minutes_ahead: int = 30, now: Optional[datetime] = None) -> PredictionResult:
        history = await self.get_snapshots()
        return predict_availability(history, minutes_ahead, self.stats(), now=now)

    async def _commit_spots(
        self, spots: Sequence[ParkingSpot], pricing_config: Optional[PricingConfig] = None
    ) -> None:
        config = pricing_config or self._pricing_config
        repriced = self._reprice(spots, config.ev_discount)
        await self.store.save_spots(repriced, pricing_config)

        self._spots = repriced
        self._pricing_config = config

    async def _update_spots(self, spot_ids: Iterable[int], change) -> List[ParkingSpot]:
        """Apply `change` to the given spots and persist the repriced list."""
        wanted = set(spot_ids)
        missing = wanted - {s.id for s in self._spots}
        if missing:
            raise SpotNotFoundError(f"Parking spots not found: {sorted(missing)}")

        updated = [change(s) if s.id in wanted else s for s in self._spots]
        await self._commit_spots(updated)
        return [s for s in self._spots if s.id in wanted]

    async def book_spot(
        self,
        spot_id: int,
        reserved_by: str,
        subscription: SubscriptionType = SubscriptionType.GUEST,
        hours: int = 1,
        vehicle: Optional[VehicleInfo] = None,
    ) -> BookingQuote:
        """Reserve a free spot and return the price of the booking."""
        async with self._lock:
            spot = self.get_spot(spot_id)
            if spot.status != SpotStatus.FREE:
                raise SpotUnavailableError(f"Parking spot {spot.label} is not available")

            quote = quote_booking(spot, hours, vehicle or VehicleInfo(), subscription)
            await self._update_spots(
                [spot_id], lambda s: _with_status(s, SpotStatus.RESERVED, reserved_by)
            )

        logger.info(f"Spot {spot.label} reserved for {reserved_by}: {quote.total_cost:.2f}")
        return quote

    async def release_spot(self, spot_id: int) -> ParkingSpot:
        async with self._lock:
            (spot,) = await self._update_spots(
                [spot_id], lambda s: _with_status(s, SpotStatus.FREE)
            )
        logger.info(f"Spot {spot.label} released")
        return spot

    async def toggle_spot_status(self, spot_id: int) -> ParkingSpot:
        """Cycle free -> occupied -> reserved -> free."""
        async with self._lock:
            (spot,) = await self._update_spots(
                [spot_id], lambda s: _with_status(s, STATUS_CYCLE[s.status], "System")
            )
        return spot

    async def set_spot_status(self, spot_id: int, status: SpotStatus) -> ParkingSpot:
        (spot,) = await self.bulk_set_status([spot_id], status)
        return spot

    async def bulk_set_status(self, spot_ids: Sequence[int], status: SpotStatus) -> List[ParkingSpot]:
        async with self._lock:
            spots = await self._update_spots(
                spot_ids, lambda s: _with_status(s, status, s.reserved_by or "System")
            )
        logger.info(f"Set {len(spots)} spots to {status.value}")
        return spots

    async def toggle_ev(self, spot_id: int) -> ParkingSpot:
        async with self._lock:
            (spot,) = await self._update_spots(
                [spot_id],
                lambda s: s.model_copy(
                    update={"is_ev": not s.is_ev, "last_updated": datetime.now(timezone.utc)}
                ),
            )
        return spot

    async def update_base_price(self, spot_id: int, base_price: float) -> ParkingSpot:
        return await self.update_spot(spot_id, ParkingSpotUpdate(base_price=base_price))

    async def update_spot(self, spot_id: int, update: ParkingSpotUpdate) -> ParkingSpot:
        """Apply a manager edit to one spot."""
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        status = changes.pop("status", None)

        def apply(spot: ParkingSpot) -> ParkingSpot:
            if status is not None and status != spot.status:
                spot = _with_status(spot, status, spot.reserved_by or "System")
            return spot.model_copy(update={**changes, "last_updated": datetime.now(timezone.utc)})

        async with self._lock:
            (spot,) = await self._update_spots([spot_id], apply)
        return spot

    async def update_pricing_config(self, update: PricingConfigUpdate) -> PricingConfig:
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        async with self._lock:
            config = self._pricing_config.model_copy(update=changes)
            await self._commit_spots(self._spots, config)

        logger.info(f"Pricing configuration updated: {changes}")
        return self._pricing_config

    async def simulate_fill(self, count: int) -> int:
        """Mark the first `count` free spots as occupied."""
        async with self._lock:
            targets = [s.id for s in self._spots if s.status == SpotStatus.FREE][:count]
            if targets:
                await self._update_spots(targets, lambda s: _with_status(s, SpotStatus.OCCUPIED))

        logger.info(f"Simulated fill of {len(targets)} spots")
        return len(targets)

    async def clear_all_reservations(self) -> int:
        async with self._lock:
            targets = [s.id for s in self._spots if s.status == SpotStatus.RESERVED]
            if targets:
                await self._update_spots(targets, lambda s: _with_status(s, SpotStatus.FREE))

        logger.info(f"Cleared {len(targets)} reservations")
        return len(targets)

    async def record_snapshot(self, now: Optional[datetime] = None) -> Optional[OccupancySnapshot]:
        """Append the current free/total counts to the history."""
        async with self._lock:
            stats = self.stats()
            if stats.total == 0:
                logger.warning("No spots tracked, skipping snapshot")
                return None

            history = append_snapshot(
                await self.get_snapshots(),
                stats.free,
                stats.total,
                capacity=self.snapshot_capacity,
                now=now,
            )
            snapshot = history[-1]
            await self.store.add_snapshot(snapshot, self.snapshot_capacity)

        logger.info(f"Recorded snapshot: {snapshot.free}/{snapshot.total} free")
        return snapshot

    async def record_initial_snapshot(self, now: Optional[datetime] = None) -> Optional[OccupancySnapshot]:
        """Record a first snapshot when spots exist but the history is empty."""
        if not self._spots or await self.get_snapshots():
            return None
        return await self.record_snapshot(now=now)
