"""Travel planner: validate a travel request, quote it and hand it on."""

import logging
from collections.abc import Callable
from typing import Any

from ..models.game import Game
from ..models.location import MissingRouteError
from ..utils import INSTANT_DRIVE_ITEM_ID, SCREEN_MARKET
from .collaborators import Collaborators
from .events import EventEngine
from .executor import TravelBlock, TravelExecutor, TravelOutcome, TravelResult
from .modifiers import TravelQuote, compute_quote

logger = logging.getLogger(__name__)

BLOCK_TITLES = {
    TravelBlock.GAME_OVER: "Game Over",
    TravelBlock.TRIP_PENDING: "Trip In Progress",
    TravelBlock.NAV_LOCKED: "Navigation Locked",
    TravelBlock.NO_ACTIVE_VESSEL: "No Active Vessel",
    TravelBlock.UNKNOWN_ROUTE: "Navigation Error",
    TravelBlock.CAPACITY_INSUFFICIENT: "Insufficient Fuel Capacity",
    TravelBlock.FUEL_INSUFFICIENT: "Insufficient Fuel",
    TravelBlock.MISSING_CONSUMABLE: "Drive Unavailable",
}


class TravelPlanner:
    """Entry point for a travel request.

    Checks run in a fixed order and any failure returns BLOCKED without
    touching the game state (apart from the trip phase, which ends IDLE).
    """

    def __init__(
        self,
        collaborators: Collaborators,
        event_engine: EventEngine,
        executor: TravelExecutor,
        on_choice: Callable[[str], Any] | None = None,
    ):
        self.collaborators = collaborators
        self.event_engine = event_engine
        self.executor = executor
        self.on_choice = on_choice

    def _block(
        self,
        game: Game,
        destination_id: str,
        block: TravelBlock,
        message: str,
        quote: TravelQuote | None = None,
    ) -> TravelResult:
        if block is TravelBlock.UNKNOWN_ROUTE:
            logger.error(f"Travel blocked ({block.value}): {message}")
        elif block in (TravelBlock.GAME_OVER, TravelBlock.TRIP_PENDING):
            logger.warning(f"Travel blocked ({block.value}): {message}")
        else:
            logger.info(f"Travel blocked ({block.value}): {message}")
        self.collaborators.presentation.queue_modal("error", BLOCK_TITLES[block], message)
        return TravelResult(
            TravelOutcome.BLOCKED,
            game.current_location_id,
            destination_id,
            block=block,
            message=message,
            quote=quote,
        )

    def travel_to(
        self, game: Game, destination_id: str, use_instant_drive: bool = False
    ) -> TravelResult:
        """Request a trip from the current location.

        Args:
            game: Current game state
            destination_id: Where to go
            use_instant_drive: Spend one instant drive instead of fuel and days

        Returns:
            TravelResult; BLOCKED and NO_OP leave resources untouched,
            SUSPENDED means an event is waiting for a choice
        """
        if game.is_game_over:
            return self._block(game, destination_id, TravelBlock.GAME_OVER, "The game is over.")
        if game.trip.in_flight:
            return self._block(
                game, destination_id, TravelBlock.TRIP_PENDING, "A trip is already in progress."
            )
        if game.nav_lock_target is not None and destination_id != game.nav_lock_target:
            return self._block(
                game,
                destination_id,
                TravelBlock.NAV_LOCKED,
                f"Navigation is locked to {game.nav_lock_target}.",
            )
        vessel, state = game.active_vessel(), game.active_state()
        if vessel is None or state is None:
            return self._block(
                game, destination_id, TravelBlock.NO_ACTIVE_VESSEL, "You have no active vessel."
            )

        origin_id = game.current_location_id
        if destination_id == origin_id:
            game.screen = SCREEN_MARKET
            return TravelResult(TravelOutcome.NO_OP, origin_id, destination_id)

        try:
            quote = compute_quote(game, origin_id, destination_id, instant_drive=use_instant_drive)
        except MissingRouteError as e:
            return self._block(game, destination_id, TravelBlock.UNKNOWN_ROUTE, str(e))

        game.trip.begin_quote()

        if use_instant_drive:
            if game.player.active_inventory().get(INSTANT_DRIVE_ITEM_ID, 0) <= 0:
                game.trip.finish()
                name = game.catalog.item_name(INSTANT_DRIVE_ITEM_ID)
                return self._block(
                    game, destination_id, TravelBlock.MISSING_CONSUMABLE, f"You have no {name}.", quote
                )
        elif quote.fuel_cost > vessel.max_fuel:
            game.trip.finish()
            return self._block(
                game,
                destination_id,
                TravelBlock.CAPACITY_INSUFFICIENT,
                f"The trip needs {quote.fuel_cost} fuel but the {vessel.name} only holds "
                f"{vessel.max_fuel:.0f}.",
                quote,
            )
        elif quote.fuel_cost > state.fuel:
            game.trip.finish()
            return self._block(
                game,
                destination_id,
                TravelBlock.FUEL_INSUFFICIENT,
                f"The trip needs {quote.fuel_cost} fuel; you have {state.fuel:.0f}.",
                quote,
            )

        logger.info(
            f"Departing {origin_id} for {destination_id} "
            f"({quote.fuel_cost} fuel, {quote.time} days)"
        )

        if not game.tutorial_protected:
            trigger = self.event_engine.check_trigger(
                game,
                destination_id,
                instant_drive=use_instant_drive,
                on_choice=self.on_choice,
            )
            if trigger.suspended:
                return TravelResult(
                    TravelOutcome.SUSPENDED,
                    origin_id,
                    destination_id,
                    message=trigger.prompt.event.title,
                    quote=quote,
                    prompt=trigger.prompt,
                )

        return self.executor.execute(game, destination_id, instant_drive=use_instant_drive)
