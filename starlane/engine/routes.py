"""Derive the travel edge table from location distances."""

from ..models.location import Location, TravelEdge
from ..utils.constants import DAYS_PER_DISTANCE, FUEL_PER_DISTANCE, MIN_ROUTE_DAYS
from ..utils.rounding import round_half_up


def build_route_table(locations: list[Location]) -> dict[tuple[str, str], TravelEdge]:
    """Build a complete directed edge table between all locations.

    Cost grows with the distance gap between the two locations. Every hop
    takes at least MIN_ROUTE_DAYS.

    Args:
        locations: All locations on the map

    Returns:
        Dict mapping (from_id, to_id) to TravelEdge, without self-loops
    """
    edges = {}
    for origin in locations:
        for destination in locations:
            if origin.id == destination.id:
                continue
            gap = abs(destination.distance - origin.distance)
            edges[(origin.id, destination.id)] = TravelEdge(
                fuel_cost=round_half_up(gap * FUEL_PER_DISTANCE),
                time=max(MIN_ROUTE_DAYS, round_half_up(gap * DAYS_PER_DISTANCE)),
            )
    return edges
