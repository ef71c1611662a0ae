"""ParkIt: dynamic parking pricing and availability forecasting."""

__version__ = "1.0.0"
