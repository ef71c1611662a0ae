"""API dependencies."""

from fastapi import Request

from parkit.services.controller import ParkingController


def get_controller(request: Request) -> ParkingController:
    """Get the controller created at application startup."""
    return request.app.state.controller
