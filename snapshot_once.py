#!/usr/bin/env python
"""Manually record one occupancy snapshot and print the current forecast."""
import asyncio
import sys

from parkit.config import settings
from parkit.db.session import AsyncSessionLocal, engine
from parkit.services.controller import ParkingController
from parkit.services.store import StateStore
from parkit.tasks.snapshot_tasks import take_snapshot


async def run(minutes_ahead: int):
    """Record a snapshot, then forecast from the stored history."""
    print("Recording snapshot")
    print("Settings:")
    print(f"  - Snapshot capacity: {settings.SNAPSHOT_CAPACITY}")
    print(f"  - Forecast horizon: {minutes_ahead} min")
    print()

    store = StateStore(AsyncSessionLocal)
    try:
        result = await take_snapshot(store)
        print(f"Snapshot: {result}")

        controller = await ParkingController.load(store)
        prediction = await controller.predict(minutes_ahead)
        print(f"Predicted free: {prediction.predicted_free} ({prediction.confidence.value})")
        print(prediction.reasoning)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    horizon = int(sys.argv[1]) if len(sys.argv) > 1 else settings.PREDICTION_MINUTES_AHEAD
    asyncio.run(run(horizon))
