"""Persistence of spots, snapshots and pricing configuration."""

import logging
from datetime import timezone
from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from parkit.db import models
from parkit.schemas.occupancy import OccupancySnapshot
from parkit.schemas.parking_spot import ParkingSpot
from parkit.schemas.pricing import PricingConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "default"


def _as_utc(snapshot: models.OccupancySnapshot) -> OccupancySnapshot:
    # Some backends (SQLite) drop the tzinfo on read
    result = OccupancySnapshot.model_validate(snapshot)
    if result.timestamp.tzinfo is None:
        result = result.model_copy(update={"timestamp": result.timestamp.replace(tzinfo=timezone.utc)})
    return result


async def _merge_spots(session: AsyncSession, spots: Sequence[ParkingSpot]) -> None:
    for spot in spots:
        data = spot.model_dump()
        data["status"] = spot.status.value
        await session.merge(models.ParkingSpot(**data))


async def _merge_pricing_config(session: AsyncSession, config: PricingConfig) -> None:
    await session.merge(
        models.PricingConfig(
            name=DEFAULT_CONFIG_NAME,
            rule=config.rule.value,
            ev_discount=config.ev_discount,
            base_price_default=config.base_price_default,
        )
    )


class StateStore:
    """Database-backed state shared by the API and the snapshot worker.

    Every call opens its own session, so readers always see what other
    processes have committed.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def load_spots(self) -> List[ParkingSpot]:
        async with self.session_factory() as session:
            result = await session.execute(select(models.ParkingSpot).order_by(models.ParkingSpot.id))
            return [ParkingSpot.model_validate(row) for row in result.scalars().all()]

    async def save_spots(
        self, spots: Sequence[ParkingSpot], pricing_config: Optional[PricingConfig] = None
    ) -> None:
        """Upsert spots, and the pricing config if given, in one transaction."""
        async with self.session_factory() as session:
            await _merge_spots(session, spots)
            if pricing_config is not None:
                await _merge_pricing_config(session, pricing_config)
            await session.commit()

    async def load_snapshots(self, limit: Optional[int] = None) -> List[OccupancySnapshot]:
        """Return the newest `limit` snapshots, oldest first."""
        async with self.session_factory() as session:
            query = select(models.OccupancySnapshot).order_by(
                models.OccupancySnapshot.timestamp.desc(), models.OccupancySnapshot.id.desc()
            )
            if limit is not None:
                query = query.limit(limit)
            result = await session.execute(query)
            rows = list(result.scalars().all())
            return [_as_utc(row) for row in reversed(rows)]

    async def add_snapshot(self, snapshot: OccupancySnapshot, capacity: int) -> None:
        """
        Insert one snapshot and evict the oldest rows beyond `capacity`.

        A stored snapshot with the same timestamp is replaced.
        """
        async with self.session_factory() as session:
            await session.execute(
                delete(models.OccupancySnapshot).where(
                    models.OccupancySnapshot.timestamp == snapshot.timestamp
                )
            )
            session.add(
                models.OccupancySnapshot(
                    timestamp=snapshot.timestamp, free=snapshot.free, total=snapshot.total
                )
            )
            await session.flush()

            result = await session.execute(
                select(models.OccupancySnapshot.id)
                .order_by(models.OccupancySnapshot.timestamp.desc(), models.OccupancySnapshot.id.desc())
                .offset(capacity)
            )
            stale_ids = list(result.scalars().all())
            if stale_ids:
                await session.execute(
                    delete(models.OccupancySnapshot).where(models.OccupancySnapshot.id.in_(stale_ids))
                )
                logger.debug(f"Evicted {len(stale_ids)} snapshots past capacity {capacity}")

            await session.commit()

    async def load_pricing_config(self) -> Optional[PricingConfig]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(models.PricingConfig).where(models.PricingConfig.name == DEFAULT_CONFIG_NAME)
            )
            row = result.scalar_one_or_none()
            return PricingConfig.model_validate(row) if row else None

    async def save_pricing_config(self, config: PricingConfig) -> None:
        async with self.session_factory() as session:
            await _merge_pricing_config(session, config)
            await session.commit()
