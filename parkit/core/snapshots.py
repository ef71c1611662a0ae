"""Bounded history of occupancy snapshots."""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from parkit.core.exceptions import InvalidSnapshotError, PreconditionError, SnapshotOrderError
from parkit.schemas.occupancy import OccupancySnapshot

DEFAULT_CAPACITY = 30


def append_snapshot(
    buffer: Sequence[OccupancySnapshot],
    free: int,
    total: int,
    capacity: int = DEFAULT_CAPACITY,
    now: Optional[datetime] = None,
) -> List[OccupancySnapshot]:
    """
    Append an observation and keep only the newest `capacity` entries.

    An observation with the same timestamp as the newest entry replaces it.
    The input sequence is left untouched.

    Raises:
        PreconditionError: capacity below 1
        InvalidSnapshotError: negative counts or free > total
        SnapshotOrderError: `now` is older than the newest entry
    """
    if capacity < 1:
        raise PreconditionError(f"Snapshot capacity must be at least 1, got {capacity}")
    if free < 0 or total < 0 or free > total:
        raise InvalidSnapshotError(f"Invalid snapshot counts: free={free}, total={total}")

    now = now or datetime.now(timezone.utc)
    updated = list(buffer)

    if updated:
        latest = updated[-1].timestamp
        if now < latest:
            raise SnapshotOrderError(
                f"Snapshot at {now.isoformat()} is older than latest {latest.isoformat()}"
            )
        if now == latest:
            updated.pop()

    updated.append(OccupancySnapshot(timestamp=now, free=free, total=total))
    return updated[-capacity:]
