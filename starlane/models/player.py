"""Player data model: wallet, perks and owned fleet."""

from dataclasses import dataclass, field

from .vessel import VesselState


@dataclass
class Player:
    """Player state.

    The player owns a fleet of vessels. Exactly one of them is active and
    travels; the rest wait in the hangar. Each vessel has its own state and
    cargo inventory.
    """

    credits: int = 0
    active_vessel_id: str | None = None
    owned_vessel_ids: list[str] = field(default_factory=list)
    vessel_states: dict[str, VesselState] = field(default_factory=dict)
    inventories: dict[str, dict[str, int]] = field(
        default_factory=dict
    )  # Vessel ID -> {item ID: quantity}
    active_perks: set[str] = field(default_factory=set)
    speed_bonus: float = 0.0  # Continuous travel speed stat, >= 0
    trip_count: int = 0  # Completed trips across all vessels

    def __post_init__(self):
        """Validate player data after initialization."""
        if self.credits < 0:
            raise ValueError(f"Invalid credits: {self.credits} (must be >= 0)")
        if self.speed_bonus < 0:
            raise ValueError(f"Invalid speed_bonus: {self.speed_bonus} (must be >= 0)")
        if self.active_vessel_id is not None and self.active_vessel_id not in self.owned_vessel_ids:
            raise ValueError(
                f"Active vessel {self.active_vessel_id} is not in the owned fleet"
            )

    def active_state(self) -> VesselState | None:
        """State of the active vessel, or None when the fleet is empty."""
        if self.active_vessel_id is None:
            return None
        return self.vessel_states.get(self.active_vessel_id)

    def active_inventory(self) -> dict[str, int]:
        """Cargo of the active vessel (empty dict when there is none)."""
        if self.active_vessel_id is None:
            return {}
        return self.inventories.setdefault(self.active_vessel_id, {})

    def cargo_used(self, vessel_id: str | None = None) -> int:
        vessel_id = vessel_id or self.active_vessel_id
        if vessel_id is None:
            return 0
        return sum(self.inventories.get(vessel_id, {}).values())

    def add_vessel(self, vessel_id: str, state: VesselState) -> None:
        """Add a vessel to the fleet; the first vessel becomes active."""
        if vessel_id in self.owned_vessel_ids:
            raise ValueError(f"Vessel {vessel_id} is already owned")
        self.owned_vessel_ids.append(vessel_id)
        self.vessel_states[vessel_id] = state
        self.inventories.setdefault(vessel_id, {})
        if self.active_vessel_id is None:
            self.active_vessel_id = vessel_id

    def remove_vessel(self, vessel_id: str) -> None:
        """Remove a vessel with its state and cargo.

        If it was active, the first remaining vessel becomes active (None when
        the fleet is now empty).
        """
        self.owned_vessel_ids = [v for v in self.owned_vessel_ids if v != vessel_id]
        self.vessel_states.pop(vessel_id, None)
        self.inventories.pop(vessel_id, None)
        if self.active_vessel_id == vessel_id:
            self.active_vessel_id = self.owned_vessel_ids[0] if self.owned_vessel_ids else None
