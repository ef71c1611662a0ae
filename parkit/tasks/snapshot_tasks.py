"""Periodic occupancy snapshot task."""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from parkit.config import settings
from parkit.services.controller import ParkingController
from parkit.services.store import StateStore
from parkit.tasks.broker import broker

logger = logging.getLogger(__name__)


async def take_snapshot(store: StateStore, now: Optional[datetime] = None) -> Dict:
    """Load current state and append one occupancy snapshot."""
    controller = await ParkingController.load(store)
    snapshot = await controller.record_snapshot(now=now)

    if snapshot is None:
        return {"success": False, "reason": "no spots tracked"}

    return {
        "success": True,
        "timestamp": snapshot.timestamp.isoformat(),
        "free": snapshot.free,
        "total": snapshot.total,
        "history_size": len(await controller.get_snapshots()),
    }


@broker.task(schedule=[{"cron": settings.SNAPSHOT_CRON}])
async def record_snapshot_task() -> Dict:
    """
    Record the current free/total spot counts.

    Scheduled every two minutes by default so the prediction engine always
    has a fresh history to work from.

    Returns:
        Dictionary describing the recorded snapshot
    """
    engine = create_async_engine(settings.DATABASE_URL)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    try:
        result = await take_snapshot(StateStore(session_factory), now=datetime.now(timezone.utc))
        logger.info(f"Snapshot task finished: {result}")
        return result
    finally:
        await engine.dispose()
