"""Innate vessel trait tables.

Each table maps a trait ID to a pure function or factor. TRAVEL_TRAITS is an
ordered list and is applied in exactly that order; later entries win when two
traits set the same value. Trait IDs that appear in none of the tables (market
or repair traits handled elsewhere) are ignored here.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..models.location import Location
from ..models.vessel import Vessel, VesselState, clamp
from ..utils import GameRNG
from ..utils.constants import (
    FUEL_RECLAIM_RATE,
    FUEL_SCOOP_RATE,
    SELF_REPAIR_RATE,
    SOLAR_SAIL_CHANCE,
    TRAVELLER_TRIP_INTERVAL,
)


@dataclass
class Leg:
    """Intermediate (unrounded) values of a trip in the pipeline."""

    fuel: float
    time: float
    hull_decay: float = 1.0


@dataclass
class TraitContext:
    """What a trait may look at besides the leg itself."""

    origin: Location
    destination: Location
    rng: GameRNG | None = None  # None while quoting; probabilistic traits do not fire

    @property
    def inbound(self) -> bool:
        """True when moving toward the sun."""
        return self.destination.distance < self.origin.distance


TraitFn = Callable[[Leg, TraitContext], bool]


def _metabolic_burn(leg: Leg, ctx: TraitContext) -> bool:
    leg.fuel *= 0.5
    return True


def _efficient(leg: Leg, ctx: TraitContext) -> bool:
    leg.fuel *= 0.75
    return True


def _fast(leg: Leg, ctx: TraitContext) -> bool:
    leg.time *= 0.5
    return True


def _heavy(leg: Leg, ctx: TraitContext) -> bool:
    leg.time *= 1.3
    return True


def _space_folding(leg: Leg, ctx: TraitContext) -> bool:
    leg.time = 1
    leg.fuel *= 1.2
    return True


def _solar_harmony(leg: Leg, ctx: TraitContext) -> bool:
    if not ctx.inbound:
        return False
    leg.fuel = 0
    return True


def _newtons_ghost(leg: Leg, ctx: TraitContext) -> bool:
    leg.fuel = 0
    return True


def _sleeper(leg: Leg, ctx: TraitContext) -> bool:
    leg.time *= 4.5
    leg.fuel = 0
    return True


def _solar_sail(leg: Leg, ctx: TraitContext) -> bool:
    # Drawn once per trip, at execution.
    if ctx.rng is None or not ctx.rng.chance(SOLAR_SAIL_CHANCE):
        return False
    leg.fuel = 0
    leg.time *= 2
    return True


TRAVEL_TRAITS: list[tuple[str, TraitFn]] = [
    ("ATTR_METABOLIC_BURN", _metabolic_burn),
    ("ATTR_EFFICIENT", _efficient),
    ("ATTR_FAST", _fast),
    ("ATTR_HEAVY", _heavy),
    ("ATTR_SPACE_FOLDING", _space_folding),
    ("ATTR_SOLAR_HARMONY", _solar_harmony),
    ("ATTR_NEWTONS_GHOST", _newtons_ghost),
    ("ATTR_SLEEPER", _sleeper),
    ("ATTR_SOLAR_SAIL", _solar_sail),
]

# Multiplier on distance-based hull decay.
DAMAGE_TRAITS: dict[str, float] = {
    "ATTR_XENO_HULL": 0.0,
    "ATTR_RESILIENT": 0.5,
}

# Multiplier on the random event probability.
EVENT_CHANCE_TRAITS: dict[str, float] = {
    "ATTR_ADVANCED_COMMS": 1.25,
}


def apply_travel_traits(leg: Leg, attributes: tuple[str, ...], ctx: TraitContext) -> list[str]:
    """Run the travel trait table over a leg in fixed order.

    Args:
        leg: Leg to modify in place
        attributes: Trait IDs of the vessel
        ctx: Direction and RNG context

    Returns:
        IDs of the traits that changed the leg
    """
    fired = []
    for trait_id, fn in TRAVEL_TRAITS:
        if trait_id in attributes and fn(leg, ctx):
            fired.append(trait_id)
    return fired


def damage_multiplier(attributes: tuple[str, ...]) -> float:
    """Combined hull decay factor from damage traits (0 wins over 0.5)."""
    factor = 1.0
    for trait_id, value in DAMAGE_TRAITS.items():
        if trait_id in attributes:
            factor *= value
    return factor


def event_chance_multiplier(attributes: tuple[str, ...]) -> float:
    factor = 1.0
    for trait_id, value in EVENT_CHANCE_TRAITS.items():
        if trait_id in attributes:
            factor *= value
    return factor


# Post-arrival traits. Each runs after the trip has been committed and returns
# a short notice for the player when it changed something.
ArrivalFn = Callable[[Vessel, VesselState, int], str | None]


def _traveller(vessel: Vessel, state: VesselState, fuel_paid: int) -> str | None:
    if state.trip_count == 0 or state.trip_count % TRAVELLER_TRIP_INTERVAL != 0:
        return None
    state.fuel = vessel.max_fuel
    state.health = vessel.max_health
    return "Resonant core discharge: hull and fuel fully restored"


def _self_repair(vessel: Vessel, state: VesselState, fuel_paid: int) -> str | None:
    if state.health >= vessel.max_health:
        return None
    state.health = clamp(state.health + vessel.max_health * SELF_REPAIR_RATE, vessel.max_health)
    return f"Hull regenerated {SELF_REPAIR_RATE:.0%}"


def _fuel_scoop(vessel: Vessel, state: VesselState, fuel_paid: int) -> str | None:
    if state.fuel >= vessel.max_fuel:
        return None
    state.fuel = clamp(state.fuel + vessel.max_fuel * FUEL_SCOOP_RATE, vessel.max_fuel)
    return f"Fuel scoop recovered {FUEL_SCOOP_RATE:.0%} fuel"


def _fuel_reclaimer(vessel: Vessel, state: VesselState, fuel_paid: int) -> str | None:
    refund = fuel_paid * FUEL_RECLAIM_RATE
    if refund <= 0:
        return None
    state.fuel = clamp(state.fuel + refund, vessel.max_fuel)
    return f"Reclaimed {refund:.0f} fuel"


ARRIVAL_TRAITS: dict[str, ArrivalFn] = {
    "ATTR_TRAVELLER": _traveller,
    "ATTR_SELF_REPAIR": _self_repair,
    "ATTR_FUEL_SCOOP": _fuel_scoop,
    "ATTR_FUEL_RECLAIMER": _fuel_reclaimer,
}


def apply_arrival_traits(vessel: Vessel, state: VesselState, fuel_paid: int) -> list[str]:
    """Apply every post-arrival trait the vessel carries.

    Args:
        vessel: Static vessel definition
        state: State to modify in place
        fuel_paid: Fuel consumed by the trip just completed

    Returns:
        Notices for the traits that had an effect
    """
    notices = []
    for trait_id, fn in ARRIVAL_TRAITS.items():
        if trait_id in vessel.attributes:
            notice = fn(vessel, state, fuel_paid)
            if notice:
                notices.append(notice)
    return notices
