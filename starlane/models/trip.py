"""Trip state: the single in-flight travel record.

A trip that is interrupted by a random event is not blocked on anything; it is
captured as a PendingTravel held by the game's TripState and resumed by a later,
separate call once the player has chosen. TripState only moves along the
transitions in ALLOWED_TRANSITIONS, so "at most one trip in flight" is checked
on every step instead of being a convention.
"""

from dataclasses import dataclass, field
from enum import Enum


class TripPhase(Enum):
    """Lifecycle of a single trip attempt."""

    IDLE = "idle"
    QUOTED = "quoted"
    AWAITING_CHOICE = "awaiting_choice"
    RESOLVED = "resolved"
    EXECUTING = "executing"


ALLOWED_TRANSITIONS: dict[TripPhase, set[TripPhase]] = {
    TripPhase.IDLE: {TripPhase.QUOTED, TripPhase.EXECUTING},
    TripPhase.QUOTED: {TripPhase.IDLE, TripPhase.AWAITING_CHOICE, TripPhase.EXECUTING},
    TripPhase.AWAITING_CHOICE: {TripPhase.RESOLVED},
    TripPhase.RESOLVED: {TripPhase.EXECUTING},
    TripPhase.EXECUTING: {TripPhase.IDLE, TripPhase.AWAITING_CHOICE},
}


class InvalidTripTransition(RuntimeError):
    """Raised when a trip is moved along a transition that does not exist."""

    def __init__(self, current: TripPhase, requested: TripPhase):
        self.current = current
        self.requested = requested
        super().__init__(f"Illegal trip transition: {current.value} -> {requested.value}")


@dataclass
class EventModifiers:
    """Adjustments accumulated from event effects, applied on resume."""

    travel_time_add: float = 0
    travel_time_percent: float = 0
    set_travel_time: float | None = None
    fuel_cost_add: float = 0
    hull_damage_percent: float = 0
    force_event: bool = False

    def is_empty(self) -> bool:
        return self == EventModifiers()


@dataclass
class PendingTravel:
    """A trip suspended while the player decides on an event."""

    destination_id: str
    base_time: float  # Pre-event quoted days, used to scale event effects
    modifiers: EventModifiers = field(default_factory=EventModifiers)
    instant_drive: bool = False
    event_id: str | None = None  # Event currently shown
    resolved_event_ids: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate pending travel data after initialization."""
        if not self.destination_id:
            raise ValueError("destination_id cannot be empty")
        if self.base_time < 0:
            raise ValueError(f"Invalid base_time: {self.base_time} (must be >= 0)")


@dataclass
class TripState:
    """Phase of the current trip together with its pending record.

    The pending record exists exactly while a trip has been interrupted
    (AWAITING_CHOICE or RESOLVED) or is resuming from one (EXECUTING).
    """

    phase: TripPhase = TripPhase.IDLE
    pending: PendingTravel | None = None

    def __post_init__(self):
        """Validate the phase/pending pairing after initialization."""
        if self.phase in (TripPhase.AWAITING_CHOICE, TripPhase.RESOLVED) and self.pending is None:
            raise ValueError(f"Trip phase {self.phase.value} requires a pending record")
        if self.phase in (TripPhase.IDLE, TripPhase.QUOTED) and self.pending is not None:
            raise ValueError(f"Trip phase {self.phase.value} cannot hold a pending record")

    @property
    def in_flight(self) -> bool:
        """True while any trip is between quote and a terminal outcome."""
        return self.phase is not TripPhase.IDLE

    @property
    def awaiting_choice(self) -> bool:
        return self.phase is TripPhase.AWAITING_CHOICE

    def _move(self, target: TripPhase) -> None:
        if target not in ALLOWED_TRANSITIONS[self.phase]:
            raise InvalidTripTransition(self.phase, target)
        self.phase = target

    def begin_quote(self) -> None:
        self._move(TripPhase.QUOTED)

    def suspend(self, pending: PendingTravel) -> None:
        """Capture the trip and wait for the player's choice."""
        self._move(TripPhase.AWAITING_CHOICE)
        self.pending = pending

    def mark_resolved(self) -> None:
        self._move(TripPhase.RESOLVED)

    def begin_execution(self) -> None:
        self._move(TripPhase.EXECUTING)

    def finish(self) -> None:
        """Return to idle from any non-waiting phase, dropping the record."""
        if self.phase is not TripPhase.IDLE:
            self._move(TripPhase.IDLE)
        self.pending = None
