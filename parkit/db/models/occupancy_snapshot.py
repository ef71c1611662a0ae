"""OccupancySnapshot model."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer

from parkit.db.base import Base


class OccupancySnapshot(Base):
    """Free and total spot counts observed at a point in time."""

    __tablename__ = "occupancy_snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    free = Column(Integer, nullable=False)
    total = Column(Integer, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint("free >= 0 AND free <= total", name="check_free_within_total"),
    )

    def __repr__(self):
        return f"<OccupancySnapshot(timestamp={self.timestamp}, free={self.free}, total={self.total})>"
