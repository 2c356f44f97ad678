"""Event effect resolvers.

EFFECT_HANDLERS maps every EffectKind to the function that applies it. The
table is checked for completeness at import time, so a new EffectKind without
a handler fails loudly instead of being skipped at runtime.

Resource effects (credits, fuel, hull, cargo) mutate the game immediately.
Travel effects (time, fuel cost, hull damage, redirect, chain) accumulate on
the pending trip and are applied by the pipeline when the trip resumes.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from ..models.event import Effect, EffectKind
from ..models.game import Game
from ..models.location import MissingRouteError
from ..models.vessel import clamp
from ..utils import round_half_up
from .conditions import resolve_value
from .modifiers import hull_resistance

logger = logging.getLogger(__name__)


@dataclass
class AppliedEffect:
    """What an effect actually did, for the result summary."""

    kind: EffectKind
    value: float  # Resolved value (after dynamic scaling)
    target: str | None = None
    applied: bool = True
    note: str = ""


Handler = Callable[[Game, float, Effect], AppliedEffect]


def _skipped(effect: Effect, value, note: str) -> AppliedEffect:
    logger.warning(f"Effect {effect.kind.value} skipped: {note}")
    return AppliedEffect(effect.kind, value, effect.target, applied=False, note=note)


def _credits(game: Game, value: float, effect: Effect) -> AppliedEffect:
    before = game.player.credits
    game.player.credits = max(0, before + round_half_up(value))
    return AppliedEffect(effect.kind, game.player.credits - before)


def _fuel(game: Game, value: float, effect: Effect) -> AppliedEffect:
    vessel, state = game.active_vessel(), game.active_state()
    if vessel is None or state is None:
        return _skipped(effect, value, "no active vessel")
    before = state.fuel
    state.fuel = clamp(state.fuel + round_half_up(value), vessel.max_fuel)
    return AppliedEffect(effect.kind, state.fuel - before)


def _hull(game: Game, value: float, effect: Effect) -> AppliedEffect:
    vessel, state = game.active_vessel(), game.active_state()
    if vessel is None or state is None:
        return _skipped(effect, value, "no active vessel")
    change = round_half_up(value)
    if change < 0:
        change = round_half_up(change * (1 - hull_resistance(game)))
    before = state.health
    state.health = clamp(state.health + change, vessel.max_health)
    return AppliedEffect(effect.kind, state.health - before)


def _travel_time(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    change = round_half_up(value)
    pending.modifiers.travel_time_add += change
    return AppliedEffect(effect.kind, change)


def _travel_time_percent(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    pending.modifiers.travel_time_percent += value
    return AppliedEffect(effect.kind, value)


def _set_travel_time(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    pending.modifiers.set_travel_time = max(0, value)
    return AppliedEffect(effect.kind, pending.modifiers.set_travel_time)


def _travel_fuel(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    pending.modifiers.fuel_cost_add += value
    return AppliedEffect(effect.kind, value)


def _hull_damage_percent(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    pending.modifiers.hull_damage_percent += value
    return AppliedEffect(effect.kind, value)


def _add_item(game: Game, value: float, effect: Effect) -> AppliedEffect:
    vessel = game.active_vessel()
    if vessel is None:
        return _skipped(effect, value, "no active vessel")
    if effect.target not in game.catalog.items:
        return _skipped(effect, value, f"unknown item '{effect.target}'")
    quantity = math.floor(value)
    name = game.catalog.item_name(effect.target)
    if game.player.cargo_used() + quantity > vessel.cargo_capacity:
        return AppliedEffect(
            effect.kind,
            0,
            effect.target,
            applied=False,
            note=f"Cargo hold full! Abandoned {quantity}x {name}.",
        )
    inventory = game.player.active_inventory()
    inventory[effect.target] = inventory.get(effect.target, 0) + quantity
    return AppliedEffect(effect.kind, quantity, effect.target, note=f"+{quantity} {name}")


def _remove_item(game: Game, value: float, effect: Effect) -> AppliedEffect:
    inventory = game.player.active_inventory()
    held = inventory.get(effect.target, 0)
    removed = min(held, math.ceil(value))
    if held - removed > 0:
        inventory[effect.target] = held - removed
    else:
        inventory.pop(effect.target, None)
    return AppliedEffect(effect.kind, removed, effect.target)


def _lose_cargo_percent(game: Game, value: float, effect: Effect) -> AppliedEffect:
    """Lose a fraction (0-1) of one randomly chosen held cargo stack."""
    inventory = game.player.active_inventory()
    held = sorted(item_id for item_id, qty in inventory.items() if qty > 0)
    if not held:
        return AppliedEffect(effect.kind, 0, applied=False, note="Nothing to lose")
    item_id = game.rng.choice(held)
    lost = min(inventory[item_id], math.ceil(inventory[item_id] * value))
    inventory[item_id] -= lost
    if inventory[item_id] <= 0:
        del inventory[item_id]
    name = game.catalog.item_name(item_id)
    return AppliedEffect(effect.kind, lost, item_id, note=f"Lost {lost} {name}")


def _redirect_travel(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    target = effect.target
    if not game.catalog.graph.has_location(target):
        return _skipped(effect, value, f"unknown location '{target}'")
    try:
        edge = game.catalog.graph.get_edge(game.current_location_id, target)
    except MissingRouteError as e:
        return _skipped(effect, value, str(e))
    pending.destination_id = target
    pending.base_time = edge.time
    return AppliedEffect(effect.kind, 0, target, note=f"Course changed to {target}")


def _chain_event(game: Game, value: float, effect: Effect) -> AppliedEffect:
    pending = game.pending_travel
    if pending is None:
        return _skipped(effect, value, "no trip pending")
    pending.modifiers.force_event = True
    return AppliedEffect(effect.kind, 0)


EFFECT_HANDLERS: dict[EffectKind, Handler] = {
    EffectKind.CREDITS: _credits,
    EffectKind.FUEL: _fuel,
    EffectKind.HULL: _hull,
    EffectKind.TRAVEL_TIME: _travel_time,
    EffectKind.TRAVEL_TIME_PERCENT: _travel_time_percent,
    EffectKind.SET_TRAVEL_TIME: _set_travel_time,
    EffectKind.TRAVEL_FUEL: _travel_fuel,
    EffectKind.HULL_DAMAGE_PERCENT: _hull_damage_percent,
    EffectKind.ADD_ITEM: _add_item,
    EffectKind.REMOVE_ITEM: _remove_item,
    EffectKind.LOSE_CARGO_PERCENT: _lose_cargo_percent,
    EffectKind.REDIRECT_TRAVEL: _redirect_travel,
    EffectKind.CHAIN_EVENT: _chain_event,
}

_unhandled = set(EffectKind) - set(EFFECT_HANDLERS)
if _unhandled:
    raise RuntimeError(f"Effect kinds without a handler: {sorted(k.value for k in _unhandled)}")


def apply_effect(game: Game, effect: Effect) -> AppliedEffect:
    """Resolve an effect's value and apply it to the game.

    Args:
        game: Game to mutate
        effect: Effect to apply

    Returns:
        AppliedEffect describing the concrete change
    """
    value = resolve_value(effect.value, game)
    return EFFECT_HANDLERS[effect.kind](game, value, effect)
