"""Game state container."""

from dataclasses import dataclass, field

from ..utils import SCREEN_MARKET, GameRNG
from .catalog import Catalog
from .player import Player
from .trip import PendingTravel, TripState
from .vessel import Vessel, VesselState


@dataclass
class Game:
    """Main game state container.

    The Game class holds the mutable state touched by travel (clock, location,
    player fleet, trip state), a reference to the read-only catalog, and the
    RNG through which every random draw goes. It is the single source of
    truth; engine components mutate it in place.
    """

    seed: int  # RNG seed
    catalog: Catalog  # Reference data (not serialized)
    current_location_id: str
    day: int = 1
    player: Player = field(default_factory=Player)
    rng: GameRNG | None = None  # Seeded RNG instance
    trip: TripState = field(default_factory=TripState)
    is_game_over: bool = False
    game_over_reason: str | None = None
    screen: str = SCREEN_MARKET  # Active UI screen ID
    nav_lock_target: str | None = None  # Tutorial gate: only this destination allowed
    tutorial_protected: bool = False  # Suppress random events (first tutorial flight)
    debug_always_trigger: bool = False  # Every travel roll triggers an event
    docking_location_id: str | None = None  # Location with a live docking simulation

    def __post_init__(self):
        """Initialize RNG if not provided."""
        if self.rng is None:
            self.rng = GameRNG(self.seed)
        if self.day < 1:
            raise ValueError(f"Invalid day: {self.day} (must be >= 1)")
        if not self.catalog.graph.has_location(self.current_location_id):
            raise ValueError(f"Unknown current location: {self.current_location_id}")

    @property
    def pending_travel(self) -> PendingTravel | None:
        """The suspended trip, if any."""
        return self.trip.pending

    def active_vessel(self) -> Vessel | None:
        """Static definition of the active vessel, or None."""
        vessel_id = self.player.active_vessel_id
        if vessel_id is None:
            return None
        return self.catalog.vessels.get(vessel_id)

    def active_state(self) -> VesselState | None:
        return self.player.active_state()

    def end_game(self, reason: str) -> None:
        """Enter the terminal game-over state (idempotent)."""
        if self.is_game_over:
            return
        self.is_game_over = True
        self.game_over_reason = reason
