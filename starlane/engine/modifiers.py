"""Travel modifier pipeline.

Turns a base travel edge into effective fuel, days and event probability.
The adjustments run in a fixed order on every quote and every resume:

1. Player perks (fuel, time, hull decay)
2. Installed upgrades (fuel burn, travel time)
3. Innate vessel traits, in TRAVEL_TRAITS order
4. Player speed stat: time / (1 + bonus)
5. Event time modifiers from a suspended trip (time add, time percent,
   absolute time override)

Extra fuel from an event joins the base fuel before stage 1, so perks,
upgrades and fuel traits scale it like the route itself.

Identical inputs and identical RNG draws always give identical quotes.
"""

import logging
from dataclasses import dataclass, field

from ..models.game import Game
from ..models.trip import EventModifiers
from ..utils import (
    EVENT_CHANCE_PER_DISTANCE,
    RANDOM_EVENT_CHANCE,
    GameRNG,
    non_negative_int,
)
from .traits import Leg, TraitContext, apply_travel_traits, event_chance_multiplier

logger = logging.getLogger(__name__)


@dataclass
class TravelQuote:
    """Effective cost of a trip after all modifiers."""

    origin_id: str
    destination_id: str
    fuel_cost: int  # Fuel consumed, >= 0
    time: int  # Days, >= 0 (0 is instant transit)
    hull_decay_mod: float  # Perk multiplier on hull wear
    event_chance: float  # Probability in [0, 1]
    base_fuel_cost: float
    base_time: float
    instant_drive: bool = False
    traits: list[str] = field(default_factory=list)  # Traits that changed the leg


def perk_modifiers(game: Game) -> tuple[float, float, float]:
    """Combined (fuel, time, hull decay) multipliers of the active perks."""
    fuel_mod = time_mod = hull_mod = 1.0
    for perk_id in sorted(game.player.active_perks):
        perk = game.catalog.perks.get(perk_id)
        if perk is None:
            logger.warning(f"Unknown perk '{perk_id}' ignored in travel pipeline")
            continue
        fuel_mod *= perk.fuel_mod
        time_mod *= perk.time_mod
        hull_mod *= perk.hull_decay_mod
    return fuel_mod, time_mod, hull_mod


def installed_upgrades(game: Game) -> list:
    """Upgrade definitions installed on the active vessel, in install order."""
    state = game.active_state()
    if state is None:
        return []
    upgrades = []
    for upgrade_id in state.upgrades:
        upgrade = game.catalog.upgrades.get(upgrade_id)
        if upgrade is None:
            logger.warning(f"Unknown upgrade '{upgrade_id}' ignored")
            continue
        upgrades.append(upgrade)
    return upgrades


def upgrade_modifiers(game: Game) -> tuple[float, float]:
    """Combined (fuel burn, travel time) multipliers of installed upgrades."""
    fuel_mod = time_mod = 1.0
    for upgrade in installed_upgrades(game):
        fuel_mod *= upgrade.fuel_burn_mod
        time_mod *= upgrade.travel_time_mod
    return fuel_mod, time_mod


def hull_resistance(game: Game) -> float:
    """Fraction of event hull damage absorbed by upgrades, in [0, 1]."""
    return min(1.0, max(0.0, sum(u.hull_resistance for u in installed_upgrades(game))))


def passive_repair_rate(game: Game) -> float:
    return sum(u.passive_repair_rate for u in installed_upgrades(game))


def apply_event_modifiers(leg: Leg, modifiers: EventModifiers) -> None:
    """Stage 5: fold event time adjustments into the leg."""
    leg.time += modifiers.travel_time_add
    leg.time *= 1 + modifiers.travel_time_percent
    if modifiers.set_travel_time is not None:
        leg.time = modifiers.set_travel_time


def compute_event_chance(game: Game, origin_id: str, destination_id: str) -> float:
    """Random event probability for a hop.

    Built additively (base + distance term + upgrade bonus), then multiplied
    by trait bonuses, then clamped to [0, 1].
    """
    graph = game.catalog.graph
    origin = graph.get(origin_id)
    destination = graph.get(destination_id)
    distance = abs(destination.distance - origin.distance) if origin and destination else 0

    chance = RANDOM_EVENT_CHANCE + distance * EVENT_CHANCE_PER_DISTANCE
    chance += sum(u.event_chance_bonus for u in installed_upgrades(game))

    vessel = game.active_vessel()
    if vessel is not None:
        chance *= event_chance_multiplier(vessel.attributes)

    if chance > 1.0:
        logger.warning(
            f"Event chance {chance:.3f} for {origin_id}->{destination_id} exceeds 1, clamping"
        )
    return min(1.0, max(0.0, chance))


def compute_quote(
    game: Game,
    origin_id: str,
    destination_id: str,
    *,
    modifiers: EventModifiers | None = None,
    rng: GameRNG | None = None,
    instant_drive: bool = False,
) -> TravelQuote:
    """Compute the effective cost of travelling between two locations.

    Args:
        game: Current game state
        origin_id: Departure location ID
        destination_id: Arrival location ID
        modifiers: Event modifiers of a resumed trip (None for a fresh quote)
        rng: RNG for probabilistic traits; pass it only when executing
        instant_drive: Bypass fuel/time stages (consumable drive)

    Returns:
        TravelQuote with integer, non-negative fuel and time

    Raises:
        MissingRouteError: If the graph has no edge for the hop
    """
    graph = game.catalog.graph
    edge = graph.get_edge(origin_id, destination_id)
    vessel = game.active_vessel()
    attributes = vessel.attributes if vessel else ()

    fuel_perk, time_perk, hull_perk = perk_modifiers(game)
    fired: list[str] = []
    extra_fuel = modifiers.fuel_cost_add if modifiers is not None else 0

    if instant_drive:
        leg = Leg(fuel=extra_fuel, time=0, hull_decay=hull_perk)
    else:
        leg = Leg(
            fuel=(edge.fuel_cost + extra_fuel) * fuel_perk,
            time=edge.time * time_perk,
            hull_decay=hull_perk,
        )

        fuel_upgrade, time_upgrade = upgrade_modifiers(game)
        leg.fuel *= fuel_upgrade
        leg.time *= time_upgrade

        ctx = TraitContext(
            origin=graph.get(origin_id),
            destination=graph.get(destination_id),
            rng=rng,
        )
        fired = apply_travel_traits(leg, attributes, ctx)

        leg.time /= 1 + max(0.0, game.player.speed_bonus)

    if modifiers is not None:
        apply_event_modifiers(leg, modifiers)

    return TravelQuote(
        origin_id=origin_id,
        destination_id=destination_id,
        fuel_cost=non_negative_int(leg.fuel),
        time=non_negative_int(leg.time),
        hull_decay_mod=leg.hull_decay,
        event_chance=compute_event_chance(game, origin_id, destination_id),
        base_fuel_cost=edge.fuel_cost,
        base_time=edge.time,
        instant_drive=instant_drive,
        traits=fired,
    )
