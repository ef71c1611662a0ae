"""ParkingSpot model."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from parkit.db.base import Base


class ParkingSpot(Base):
    """Bookable parking spot with its current price."""

    __tablename__ = "parking_spots"

    id = Column(Integer, primary_key=True, autoincrement=False)
    label = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False, default="free")  # 'free', 'occupied', 'reserved'
    is_ev = Column(Boolean, nullable=False, default=False)
    base_price = Column(Float, nullable=False)
    price = Column(Float, nullable=False)
    reserved_by = Column(String(255), nullable=True)
    zone = Column(String(255), nullable=True)
    longitude = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    last_updated = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=True,
    )

    # Constraints
    __table_args__ = (
        CheckConstraint("status IN ('free', 'occupied', 'reserved')", name="check_spot_status"),
    )

    def __repr__(self):
        return f"<ParkingSpot(id={self.id}, label={self.label}, status={self.status})>"
