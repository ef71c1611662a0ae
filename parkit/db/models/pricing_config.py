"""PricingConfig model."""

from sqlalchemy import Column, DateTime, Float, String
from sqlalchemy.sql import func

from parkit.db.base import Base


class PricingConfig(Base):
    """Manager pricing configuration, one row per named config."""

    __tablename__ = "pricing_configs"

    name = Column(String(64), primary_key=True, default="default")
    rule = Column(String(16), nullable=False, default="balanced")
    ev_discount = Column(Float, nullable=False, default=0.2)
    base_price_default = Column(Float, nullable=False, default=30.0)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<PricingConfig(name={self.name}, rule={self.rule})>"
