"""Location graph data models."""

from dataclasses import dataclass, field


class MissingRouteError(LookupError):
    """Raised when no travel edge exists between two known locations."""

    def __init__(self, from_id: str, to_id: str):
        self.from_id = from_id
        self.to_id = to_id
        super().__init__(f"No route from {from_id} to {to_id}")


@dataclass
class Location:
    """A dockable location in the system.

    The distance value is only used to compare travel direction (inward vs
    outward), never as an absolute coordinate.
    """

    id: str  # Stable identifier (e.g., "earth")
    name: str  # Display name
    distance: float  # Distance from the sun, used for directionality

    def __post_init__(self):
        """Validate location data after initialization."""
        if not self.id:
            raise ValueError("Location id cannot be empty")
        if self.distance < 0:
            raise ValueError(f"Invalid distance: {self.distance} (must be >= 0)")


@dataclass(frozen=True)
class TravelEdge:
    """Base cost of a single directed hop."""

    fuel_cost: float  # Base fuel consumed
    time: float  # Base travel days

    def __post_init__(self):
        """Validate edge data after initialization."""
        if self.fuel_cost < 0:
            raise ValueError(f"Invalid fuel_cost: {self.fuel_cost} (must be >= 0)")
        if self.time < 0:
            raise ValueError(f"Invalid time: {self.time} (must be >= 0)")


@dataclass
class LocationGraph:
    """Static adjacency of locations with per-edge base costs.

    Edges are directed; a route A->B says nothing about B->A.
    """

    locations: dict[str, Location] = field(default_factory=dict)
    edges: dict[tuple[str, str], TravelEdge] = field(default_factory=dict)

    def get(self, location_id: str) -> Location | None:
        """Return the location with the given id, or None."""
        return self.locations.get(location_id)

    def has_location(self, location_id: str) -> bool:
        return location_id in self.locations

    def get_edge(self, from_id: str, to_id: str) -> TravelEdge:
        """Look up the directed edge between two locations.

        Args:
            from_id: Origin location ID
            to_id: Destination location ID

        Returns:
            The TravelEdge for the hop

        Raises:
            MissingRouteError: If the edge does not exist
        """
        edge = self.edges.get((from_id, to_id))
        if edge is None:
            raise MissingRouteError(from_id, to_id)
        return edge

    def destinations_from(self, from_id: str) -> list[str]:
        """List destination IDs reachable in one hop from a location."""
        return [to_id for (origin, to_id) in self.edges if origin == from_id]
