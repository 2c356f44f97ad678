"""Vessel definitions and per-vessel mutable state."""

from dataclasses import dataclass, field


def clamp(value: float, upper: float, lower: float = 0) -> float:
    """Clamp a resource value into [lower, upper]."""
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class Vessel:
    """Static vessel definition from reference data.

    Attributes are innate trait ids (e.g., "ATTR_SOLAR_SAIL") that can never
    be removed from the hull.
    """

    id: str  # Stable identifier (e.g., "wanderer")
    name: str  # Display name
    max_fuel: float
    max_health: float
    cargo_capacity: int
    attributes: tuple[str, ...] = ()
    vessel_class: str = "C"

    def __post_init__(self):
        """Validate vessel data after initialization."""
        if self.max_fuel < 0:
            raise ValueError(f"Invalid max_fuel: {self.max_fuel} (must be >= 0)")
        if self.max_health <= 0:
            raise ValueError(f"Invalid max_health: {self.max_health} (must be > 0)")
        if self.cargo_capacity < 0:
            raise ValueError(
                f"Invalid cargo_capacity: {self.cargo_capacity} (must be >= 0)"
            )

    def has_attribute(self, attribute_id: str) -> bool:
        return attribute_id in self.attributes


@dataclass
class VesselState:
    """Mutable state of an owned vessel.

    Fuel and health are kept inside [0, max] by every engine mutation.
    Upgrades are kept in installation order.
    """

    fuel: float
    health: float
    upgrades: list[str] = field(default_factory=list)  # Installed upgrade IDs
    trip_count: int = 0  # Completed trips for this hull
    hull_alerts: dict[str, bool] = field(
        default_factory=lambda: {"warning": False, "critical": False}
    )

    def __post_init__(self):
        """Validate vessel state after initialization."""
        if self.fuel < 0:
            raise ValueError(f"Invalid fuel: {self.fuel} (must be >= 0)")
        if self.trip_count < 0:
            raise ValueError(f"Invalid trip_count: {self.trip_count} (must be >= 0)")

    @classmethod
    def full(cls, vessel: Vessel) -> "VesselState":
        """Create a freshly commissioned state with full tanks and hull."""
        return cls(fuel=vessel.max_fuel, health=vessel.max_health)
