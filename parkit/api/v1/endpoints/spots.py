"""ParkingSpot endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from parkit.api.deps import get_controller
from parkit.schemas.parking_spot import (
    BulkActionResult,
    BulkStatusUpdate,
    ParkingSpot,
    ParkingSpotUpdate,
    SimulateFillRequest,
    SpotStatus,
)
from parkit.schemas.pricing import (
    BookingQuote,
    BookingRequest,
    FuelType,
    SubscriptionType,
    VehicleInfo,
    VehicleSize,
    VehicleType,
)
from parkit.services.controller import ParkingController, SpotNotFoundError, SpotUnavailableError

router = APIRouter()


def _not_found(exc: SpotNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/", response_model=List[ParkingSpot])
async def list_spots(
    status_filter: Optional[SpotStatus] = Query(None, alias="status", description="Filter by status"),
    controller: ParkingController = Depends(get_controller),
):
    """List all parking spots with their current prices."""
    spots = controller.spots
    if status_filter:
        spots = [s for s in spots if s.status == status_filter]
    return spots


@router.post("/bulk-status", response_model=List[ParkingSpot])
async def bulk_set_status(
    data: BulkStatusUpdate,
    controller: ParkingController = Depends(get_controller),
):
    """Set the status of several spots."""
    try:
        return await controller.bulk_set_status(data.spot_ids, data.status)
    except SpotNotFoundError as e:
        raise _not_found(e)


@router.post("/simulate-fill", response_model=BulkActionResult)
async def simulate_fill(
    data: SimulateFillRequest,
    controller: ParkingController = Depends(get_controller),
):
    """Occupy up to `count` free spots."""
    return BulkActionResult(affected=await controller.simulate_fill(data.count))


@router.post("/clear-reservations", response_model=BulkActionResult)
async def clear_reservations(controller: ParkingController = Depends(get_controller)):
    """Release every reserved spot."""
    return BulkActionResult(affected=await controller.clear_all_reservations())


@router.get("/{spot_id}", response_model=ParkingSpot)
async def get_spot(
    spot_id: int,
    controller: ParkingController = Depends(get_controller),
):
    """Get a specific parking spot by ID."""
    try:
        return controller.get_spot(spot_id)
    except SpotNotFoundError as e:
        raise _not_found(e)


@router.patch("/{spot_id}", response_model=ParkingSpot)
async def update_spot(
    spot_id: int,
    spot_data: ParkingSpotUpdate,
    controller: ParkingController = Depends(get_controller),
):
    """Update status, EV flag or base price of a spot."""
    try:
        return await controller.update_spot(spot_id, spot_data)
    except SpotNotFoundError as e:
        raise _not_found(e)


@router.post("/{spot_id}/toggle-status", response_model=ParkingSpot)
async def toggle_spot_status(
    spot_id: int,
    controller: ParkingController = Depends(get_controller),
):
    """Cycle a spot through free, occupied and reserved."""
    try:
        return await controller.toggle_spot_status(spot_id)
    except SpotNotFoundError as e:
        raise _not_found(e)


@router.post("/{spot_id}/toggle-ev", response_model=ParkingSpot)
async def toggle_ev(
    spot_id: int,
    controller: ParkingController = Depends(get_controller),
):
    """Flip the EV designation of a spot."""
    try:
        return await controller.toggle_ev(spot_id)
    except SpotNotFoundError as e:
        raise _not_found(e)


@router.get("/{spot_id}/quote", response_model=BookingQuote)
async def quote_spot(
    spot_id: int,
    hours: int = Query(1, ge=1, le=24),
    subscription: SubscriptionType = Query(SubscriptionType.GUEST),
    vehicle_type: VehicleType = Query(VehicleType.FOUR_WHEELER),
    vehicle_size: VehicleSize = Query(VehicleSize.MEDIUM),
    fuel_type: FuelType = Query(FuelType.NON_EV),
    controller: ParkingController = Depends(get_controller),
):
    """Price a booking without reserving the spot."""
    vehicle = VehicleInfo(type=vehicle_type, size=vehicle_size, fuel_type=fuel_type)
    try:
        return controller.quote(spot_id, hours, vehicle, subscription)
    except SpotNotFoundError as e:
        raise _not_found(e)


@router.post("/{spot_id}/book", response_model=BookingQuote, status_code=status.HTTP_201_CREATED)
async def book_spot(
    spot_id: int,
    booking: BookingRequest,
    controller: ParkingController = Depends(get_controller),
):
    """Reserve a free spot."""
    try:
        return await controller.book_spot(
            spot_id,
            reserved_by=booking.reserved_by,
            subscription=booking.subscription,
            hours=booking.hours,
            vehicle=booking.vehicle,
        )
    except SpotNotFoundError as e:
        raise _not_found(e)
    except SpotUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/{spot_id}/release", response_model=ParkingSpot)
async def release_spot(
    spot_id: int,
    controller: ParkingController = Depends(get_controller),
):
    """Make a spot free again."""
    try:
        return await controller.release_spot(spot_id)
    except SpotNotFoundError as e:
        raise _not_found(e)
