"""Event requirement checks and dynamic value resolution.

Conditions gate which events may spawn and which choices are enabled. Dynamic
values let an effect scale with the game state (e.g., lose 10% of max fuel).
"""

import logging
import math

from ..models.event import Condition, ConditionKind, DynamicValue, Outcome
from ..models.game import Game

logger = logging.getLogger(__name__)

# Fallback when TRIP_DURATION is read with no trip pending
DEFAULT_TRIP_DURATION = 7
# Max hull of a baseline vessel; SHIP_CLASS_SCALAR is max_health / this
BASELINE_HULL = 100


def _scaler_value(scale_with: str | None, game: Game) -> float:
    if not scale_with:
        return 0
    vessel = game.active_vessel()
    state = game.active_state()

    if scale_with == "PLAYER_CREDITS":
        return game.player.credits
    if scale_with == "MAX_FUEL":
        return vessel.max_fuel if vessel else 0
    if scale_with == "MAX_HULL":
        return vessel.max_health if vessel else 0
    if scale_with == "CURRENT_FUEL":
        return state.fuel if state else 0
    if scale_with == "CURRENT_HULL":
        return state.health if state else 0
    if scale_with == "CARGO_CAPACITY":
        return vessel.cargo_capacity if vessel else 0
    if scale_with == "TRIP_DURATION":
        pending = game.pending_travel
        return pending.base_time if pending else DEFAULT_TRIP_DURATION
    if scale_with == "SHIP_CLASS_SCALAR":
        return max(1.0, vessel.max_health / BASELINE_HULL) if vessel else 1.0

    logger.warning(f"Unknown scale type '{scale_with}', treating as 0")
    return 0


def resolve_value(value, game: Game):
    """Resolve an effect or condition value into a concrete number.

    Plain numbers (and strings, lists) pass through unchanged. A DynamicValue
    becomes floor(base + scaler * factor).
    """
    if isinstance(value, DynamicValue):
        return math.floor(value.base + _scaler_value(value.scale_with, game) * value.factor)
    return value


def compare(current, operator: str, threshold) -> bool:
    """Compare a game-state value against a threshold."""
    try:
        if operator == "GT":
            return current > threshold
        if operator == "GTE":
            return current >= threshold
        if operator == "LT":
            return current < threshold
        if operator == "LTE":
            return current <= threshold
        if operator == "EQ":
            return current == threshold
        if operator == "NEQ":
            return current != threshold
        if operator == "IN":
            return isinstance(threshold, (list, tuple, set, frozenset)) and current in threshold
    except TypeError:
        logger.warning(f"Cannot compare {current!r} {operator} {threshold!r}")
        return False

    logger.warning(f"Unknown operator '{operator}', condition fails")
    return False


class ConditionEvaluator:
    """Evaluates requirement lists against the game state (AND semantics)."""

    def check_all(self, conditions: list[Condition], game: Game) -> bool:
        return all(self.evaluate(condition, game) for condition in conditions)

    def evaluate(self, condition: Condition, game: Game) -> bool:
        """Evaluate a single condition.

        Args:
            condition: Requirement to check
            game: Current game state

        Returns:
            True if the requirement is met
        """
        threshold = resolve_value(condition.value, game)
        state = game.active_state()
        vessel = game.active_vessel()
        kind = condition.kind

        if kind is ConditionKind.HAS_FUEL:
            current = state.fuel if state else 0
        elif kind is ConditionKind.HAS_CREDITS:
            current = game.player.credits
        elif kind is ConditionKind.HAS_HULL:
            current = state.health if state else 0
        elif kind is ConditionKind.HAS_CARGO_SPACE:
            if vessel is None:
                return False
            current = vessel.cargo_capacity - game.player.cargo_used()
        elif kind is ConditionKind.HAS_ITEM:
            current = game.player.active_inventory().get(condition.target, 0)
        elif kind is ConditionKind.HAS_PERK:
            current = 1 if condition.target in game.player.active_perks else 0
        elif kind is ConditionKind.HAS_ATTRIBUTE:
            current = 1 if vessel and vessel.has_attribute(condition.target) else 0
        elif kind is ConditionKind.LOCATION_IS:
            current = game.current_location_id
        elif kind is ConditionKind.RNG_ROLL:
            # Rolled fresh on every check
            return game.rng.random() < threshold
        else:
            logger.warning(f"Unknown condition type '{kind}', condition fails")
            return False

        return compare(current, condition.operator, threshold)


def select_outcome(outcomes: list[Outcome], game: Game) -> Outcome:
    """Draw one outcome with probability proportional to its weight.

    Falls back to the first outcome (with a warning) when all weights are 0.
    """
    weights = [max(0.0, outcome.weight) for outcome in outcomes]
    if sum(weights) <= 0:
        logger.warning("All outcome weights are 0, defaulting to the first outcome")
        return outcomes[0]
    return game.rng.weighted_choice(outcomes, weights)
