"""Dynamic pricing for parking spots (prices in INR).

The displayed price of a spot is its base price scaled by a surge multiplier
chosen from the aggregate occupancy rate, then discounted for EV spots.
Regular subscribers always pay the base price.
"""

from typing import List, Optional, Sequence

from parkit.core.exceptions import EmptySpotSetError
from parkit.schemas.parking_spot import ParkingSpot
from parkit.schemas.pricing import (
    BookingQuote,
    FuelType,
    PricingMultipliers,
    PricingRule,
    SubscriptionType,
    VehicleInfo,
    VehicleSize,
    VehicleType,
)

# (threshold, multiplier), checked in order; the rate must exceed the threshold
SURGE_TIERS = ((0.75, 1.5), (0.5, 1.25))

PRICING_MULTIPLIERS = {
    PricingRule.CONSERVATIVE: PricingMultipliers(high=1.2, moderate=1.1),
    PricingRule.BALANCED: PricingMultipliers(high=1.5, moderate=1.25),
    PricingRule.AGGRESSIVE: PricingMultipliers(high=2.0, moderate=1.5),
}

SIZE_MULTIPLIERS = {
    VehicleSize.SMALL: 0.8,
    VehicleSize.MEDIUM: 1.0,
    VehicleSize.LARGE: 1.3,
}
TWO_WHEELER_MULTIPLIER = 0.5
EV_FUEL_FACTOR = 0.8


def surge_multiplier(occupancy_rate: float) -> float:
    """Return the occupancy-driven price multiplier."""
    for threshold, multiplier in SURGE_TIERS:
        if occupancy_rate > threshold:
            return multiplier
    return 1.0


def compute_spot_price(
    spot: ParkingSpot,
    occupancy_rate: float,
    ev_discount: float = 0.2,
    subscription: Optional[SubscriptionType] = None,
) -> float:
    """
    Calculate the current price of a spot.

    Args:
        spot: Spot being priced
        occupancy_rate: Fraction of spots occupied or reserved (0.0 to 1.0)
        ev_discount: Fraction taken off EV spots
        subscription: Subscriber class; None is treated as guest

    Returns:
        Price rounded to 2 decimals
    """
    if subscription == SubscriptionType.REGULAR:
        return round(spot.base_price, 2)

    price = spot.base_price * surge_multiplier(occupancy_rate)
    if spot.is_ev:
        price = price * (1 - ev_discount)

    return round(price, 2)


def occupancy_rate(spots: Sequence[ParkingSpot]) -> float:
    """Fraction of spots that are occupied or reserved."""
    if not spots:
        raise EmptySpotSetError("Cannot compute occupancy rate of an empty spot set")
    unavailable = sum(1 for spot in spots if spot.is_unavailable)
    return unavailable / len(spots)


def update_all_prices(spots: Sequence[ParkingSpot], ev_discount: float = 0.2) -> List[ParkingSpot]:
    """Return copies of all spots repriced for the current occupancy.

    Prices are computed as for a guest; subscriber pricing only applies to
    individual booking quotes.
    """
    rate = occupancy_rate(spots)
    return [
        spot.model_copy(update={"price": compute_spot_price(spot, rate, ev_discount)})
        for spot in spots
    ]


def get_pricing_multipliers(rule: PricingRule) -> PricingMultipliers:
    """Get the multiplier table shown for a pricing rule."""
    return PRICING_MULTIPLIERS[PricingRule(rule)]


def vehicle_size_multiplier(vehicle: VehicleInfo) -> float:
    if vehicle.type == VehicleType.TWO_WHEELER:
        return TWO_WHEELER_MULTIPLIER
    return SIZE_MULTIPLIERS[vehicle.size]


def quote_booking(
    spot: ParkingSpot,
    hours: int,
    vehicle: VehicleInfo,
    subscription: Optional[SubscriptionType] = None,
) -> BookingQuote:
    """Price a booking of `hours` for the given vehicle."""
    if subscription == SubscriptionType.REGULAR:
        price_per_hour = round(spot.base_price, 2)
    else:
        price_per_hour = spot.price

    size_multiplier = vehicle_size_multiplier(vehicle)
    fuel_factor = EV_FUEL_FACTOR if vehicle.fuel_type == FuelType.EV else 1.0
    total_cost = price_per_hour * hours * size_multiplier * fuel_factor

    return BookingQuote(
        spot_id=spot.id,
        subscription=subscription or SubscriptionType.GUEST,
        hours=hours,
        price_per_hour=price_per_hour,
        size_multiplier=size_multiplier,
        fuel_factor=fuel_factor,
        total_cost=round(total_cost, 2),
    )
