"""Travel execution: commit a trip and route it to its terminal outcome.

Once execution begins it runs to completion without interruption:

1. Final quote (event modifiers applied, probabilistic traits drawn)
2. Destroyed if an event already broke the hull
3. Stranded if the tank cannot cover the final fuel cost
4. Hull damage, then destruction if health reaches 0
5. Commit: fuel, clock, location, counters
6. Post-arrival traits and hull alerts
7. Notify ticker, missions and docking sync, then the travel animation
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..models.event import EventPrompt
from ..models.game import Game
from ..models.location import MissingRouteError
from ..models.trip import EventModifiers, TripPhase
from ..models.vessel import Vessel, VesselState, clamp
from ..utils import HULL_DECAY_PER_TRAVEL_DAY, INSTANT_DRIVE_ITEM_ID, SCREEN_MARKET
from ..utils.constants import HULL_CRITICAL_PERCENT, HULL_WARNING_PERCENT
from .collaborators import Collaborators
from .events import EventResolution
from .modifiers import TravelQuote, compute_quote
from .traits import apply_arrival_traits, damage_multiplier

logger = logging.getLogger(__name__)


class TravelOutcome(Enum):
    """How a travel request ended."""

    ARRIVED = "arrived"
    STRANDED = "stranded"
    DESTROYED = "destroyed"  # Vessel lost, fleet continues
    GAME_OVER = "game_over"  # Last vessel lost, or the clock ended the game
    NO_OP = "no_op"  # Destination is the current location
    BLOCKED = "blocked"  # Validation failed, nothing changed
    SUSPENDED = "suspended"  # Waiting for an event choice


class TravelBlock(Enum):
    """Why a travel request was rejected."""

    GAME_OVER = "game_over"
    TRIP_PENDING = "trip_pending"
    NAV_LOCKED = "nav_locked"
    NO_ACTIVE_VESSEL = "no_active_vessel"
    UNKNOWN_ROUTE = "unknown_route"
    CAPACITY_INSUFFICIENT = "capacity_insufficient"
    FUEL_INSUFFICIENT = "fuel_insufficient"
    MISSING_CONSUMABLE = "missing_consumable"


@dataclass
class TravelResult:
    """Outcome of a travel request, resume or execution.

    Attributes:
        outcome: Terminal or intermediate outcome
        origin_id: Location the trip started from
        destination_id: Requested destination
        block: Reason when outcome is BLOCKED
        message: Human-readable summary
        quote: Final quote used (None when blocked before quoting)
        fuel_spent: Fuel deducted by the trip
        days: Days the clock advanced
        hull_damage: Hull points lost in transit
        notices: Post-arrival trait notices and alerts
        prompt: Event prompt when outcome is SUSPENDED
        lost_vessel_id: Vessel destroyed on this trip
        resolution: Event resolution that preceded this run, if any
    """

    outcome: TravelOutcome
    origin_id: str
    destination_id: str
    block: TravelBlock | None = None
    message: str = ""
    quote: TravelQuote | None = None
    fuel_spent: int = 0
    days: int = 0
    hull_damage: float = 0.0
    notices: list[str] = field(default_factory=list)
    prompt: EventPrompt | None = None
    lost_vessel_id: str | None = None
    resolution: EventResolution | None = None

    @property
    def arrived(self) -> bool:
        return self.outcome is TravelOutcome.ARRIVED


def destroy_active_vessel(game: Game, collaborators: Collaborators) -> bool:
    """Remove the active vessel from the fleet after its hull failed.

    Args:
        game: Current game state
        collaborators: Presentation for the loss notice

    Returns:
        True if that was the last vessel and the game is now over
    """
    vessel = game.active_vessel()
    vessel_id = game.player.active_vessel_id
    name = vessel.name if vessel else vessel_id
    game.player.remove_vessel(vessel_id)
    logger.error(f"Vessel {vessel_id} destroyed")

    if game.player.active_vessel_id is not None:
        replacement = game.active_vessel()
        collaborators.presentation.queue_modal(
            "vessel_lost",
            "Vessel Lost",
            f"The {name} broke apart under the strain. "
            f"Command transfers to the {replacement.name if replacement else game.player.active_vessel_id}.",
        )
        return False

    game.end_game(f"The {name} was destroyed and no vessels remain.")
    collaborators.presentation.queue_modal("game_over", "Game Over", game.game_over_reason)
    return True


def check_hull_alerts(vessel: Vessel, state: VesselState, collaborators: Collaborators) -> list[str]:
    """Raise one-shot hull alerts when health crosses the warning thresholds.

    The flags re-arm once health climbs back above the warning level.
    """
    percent = state.health / vessel.max_health * 100
    alerts = []
    if percent <= HULL_CRITICAL_PERCENT and not state.hull_alerts["critical"]:
        state.hull_alerts["critical"] = True
        state.hull_alerts["warning"] = True
        alerts.append(f"HULL CRITICAL: {percent:.0f}%")
    elif percent <= HULL_WARNING_PERCENT and not state.hull_alerts["warning"]:
        state.hull_alerts["warning"] = True
        alerts.append(f"Hull warning: {percent:.0f}%")
    elif percent > HULL_WARNING_PERCENT:
        state.hull_alerts["warning"] = False
        state.hull_alerts["critical"] = False

    for alert in alerts:
        collaborators.presentation.create_floating_text(alert, "hull", "red")
    return alerts


class TravelExecutor:
    """Commits trips to the game state."""

    def __init__(self, collaborators: Collaborators):
        self.collaborators = collaborators

    def execute(
        self,
        game: Game,
        destination_id: str,
        modifiers: EventModifiers | None = None,
        instant_drive: bool = False,
    ) -> TravelResult:
        """Run a trip from the current location to a destination.

        Args:
            game: Current game state
            destination_id: Where to go
            modifiers: Accumulated event modifiers of a resumed trip
            instant_drive: Consume the instant drive instead of fuel and days

        Returns:
            TravelResult with ARRIVED, STRANDED, DESTROYED, GAME_OVER, NO_OP
            or BLOCKED

        Raises:
            InvalidTripTransition: If the trip is still waiting for a choice
        """
        if game.trip.phase is not TripPhase.EXECUTING:
            game.trip.begin_execution()

        origin_id = game.current_location_id
        if origin_id == destination_id:
            game.trip.finish()
            return TravelResult(TravelOutcome.NO_OP, origin_id, destination_id)

        vessel, state = game.active_vessel(), game.active_state()
        if vessel is None or state is None:
            game.trip.finish()
            return TravelResult(
                TravelOutcome.BLOCKED,
                origin_id,
                destination_id,
                block=TravelBlock.NO_ACTIVE_VESSEL,
                message="No active vessel",
            )

        try:
            quote = compute_quote(
                game,
                origin_id,
                destination_id,
                modifiers=modifiers,
                rng=game.rng,
                instant_drive=instant_drive,
            )
        except MissingRouteError as e:
            logger.error(f"Cannot execute trip: {e}")
            game.trip.finish()
            self.collaborators.presentation.queue_modal("error", "Navigation Error", str(e))
            return TravelResult(
                TravelOutcome.BLOCKED,
                origin_id,
                destination_id,
                block=TravelBlock.UNKNOWN_ROUTE,
                message=str(e),
            )

        if state.health <= 0:
            logger.info(f"{vessel.id} hull failed during an event on {origin_id}->{destination_id}")
            return self._destroy(game, vessel, quote, 0.0)

        if state.fuel < quote.fuel_cost:
            return self._strand(game, quote)

        hull_damage = (
            quote.time
            * HULL_DECAY_PER_TRAVEL_DAY
            * quote.hull_decay_mod
            * damage_multiplier(vessel.attributes)
        )
        if modifiers is not None and modifiers.hull_damage_percent:
            hull_damage += vessel.max_health * modifiers.hull_damage_percent / 100
        state.health = clamp(state.health - hull_damage, vessel.max_health)

        if state.health <= 0:
            return self._destroy(game, vessel, quote, hull_damage)

        return self._commit(game, vessel, state, quote, hull_damage)

    def _destroy(
        self, game: Game, vessel: Vessel, quote: TravelQuote, hull_damage: float
    ) -> TravelResult:
        game.trip.finish()
        game_over = destroy_active_vessel(game, self.collaborators)
        return TravelResult(
            TravelOutcome.GAME_OVER if game_over else TravelOutcome.DESTROYED,
            quote.origin_id,
            quote.destination_id,
            message=f"{vessel.name} was destroyed en route",
            quote=quote,
            hull_damage=hull_damage,
            lost_vessel_id=vessel.id,
        )

    def _strand(self, game: Game, quote: TravelQuote) -> TravelResult:
        state = game.active_state()
        state.fuel = 0
        self.collaborators.clock.advance_days(quote.time)
        game.trip.finish()

        origin = game.catalog.graph.get(quote.origin_id)
        destination = game.catalog.graph.get(quote.destination_id)
        logger.info(
            f"Stranded: needed {quote.fuel_cost} fuel for {quote.origin_id}->{quote.destination_id}, "
            f"lost {quote.time} days"
        )
        self.collaborators.presentation.queue_modal(
            "stranded",
            "Stranded",
            f"Your tanks ran dry before reaching {destination.name}. After {quote.time} days "
            f"adrift you limp back to {origin.name} with empty tanks.",
        )
        return TravelResult(
            TravelOutcome.STRANDED,
            quote.origin_id,
            quote.destination_id,
            message="Ran out of fuel",
            quote=quote,
            days=quote.time,
        )

    def _commit(
        self,
        game: Game,
        vessel: Vessel,
        state: VesselState,
        quote: TravelQuote,
        hull_damage: float,
    ) -> TravelResult:
        origin_id, destination_id = quote.origin_id, quote.destination_id
        state.fuel = clamp(state.fuel - quote.fuel_cost, vessel.max_fuel)
        if quote.instant_drive:
            self._consume_instant_drive(game)

        self.collaborators.clock.advance_days(quote.time)
        if game.is_game_over:
            game.trip.finish()
            return TravelResult(
                TravelOutcome.GAME_OVER,
                origin_id,
                destination_id,
                message=game.game_over_reason or "Game over",
                quote=quote,
                fuel_spent=quote.fuel_cost,
                days=quote.time,
                hull_damage=hull_damage,
            )

        game.current_location_id = destination_id
        game.trip.finish()
        state.trip_count += 1
        game.player.trip_count += 1
        logger.info(
            f"Arrived at {destination_id} on day {game.day} "
            f"(fuel -{quote.fuel_cost}, {quote.time} days, hull -{hull_damage:.1f})"
        )

        notices = apply_arrival_traits(vessel, state, quote.fuel_cost)
        notices += check_hull_alerts(vessel, state, self.collaborators)

        self.collaborators.ticker.on_location_change(destination_id)
        self.collaborators.missions.check_triggers()
        self._sync_docking(game, origin_id, destination_id)

        def on_done():
            game.screen = SCREEN_MARKET

        graph = game.catalog.graph
        self.collaborators.presentation.show_travel_animation(
            graph.get(origin_id),
            graph.get(destination_id),
            quote,
            hull_damage / vessel.max_health * 100,
            on_done,
        )

        return TravelResult(
            TravelOutcome.ARRIVED,
            origin_id,
            destination_id,
            message=f"Arrived at {graph.get(destination_id).name}",
            quote=quote,
            fuel_spent=quote.fuel_cost,
            days=quote.time,
            hull_damage=hull_damage,
            notices=notices,
        )

    def _consume_instant_drive(self, game: Game) -> None:
        inventory = game.player.active_inventory()
        remaining = inventory.get(INSTANT_DRIVE_ITEM_ID, 0) - 1
        if remaining > 0:
            inventory[INSTANT_DRIVE_ITEM_ID] = remaining
        else:
            inventory.pop(INSTANT_DRIVE_ITEM_ID, None)

    def _sync_docking(self, game: Game, origin_id: str, destination_id: str) -> None:
        docking = self.collaborators.docking
        docking_id = game.docking_location_id
        if docking is None or docking_id is None:
            return
        if origin_id == docking_id:
            docking.stop_local_live_loop()
        if destination_id == docking_id:
            docking.catch_up_days(game.day)
            docking.start_local_live_loop()
