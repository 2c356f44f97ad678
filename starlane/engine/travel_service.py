"""Travel service: wires planner, event engine and executor to one game.

Front ends (CLI, HTTP server) talk to this class only. It owns the callbacks
that bridge the three steps of an interrupted trip:

    travel_to()     -> SUSPENDED (event shown)
    choose()        -> effects applied, result shown
    resume_travel() -> executor (or another event when the choice chained one)
"""

import logging

from ..models.game import Game
from ..models.location import MissingRouteError
from ..models.trip import TripPhase
from .collaborators import Collaborators
from .events import EventEngine, EventResolution
from .executor import TravelExecutor, TravelOutcome, TravelResult
from .modifiers import TravelQuote, compute_quote
from .planner import TravelPlanner

logger = logging.getLogger(__name__)


class TravelService:
    """All travel operations for a single game."""

    def __init__(self, game: Game, collaborators: Collaborators | None = None):
        self.game = game
        self.collaborators = collaborators or Collaborators.for_game(game)
        self.events = EventEngine(self.collaborators.presentation)
        self.executor = TravelExecutor(self.collaborators)
        self.planner = TravelPlanner(
            self.collaborators, self.events, self.executor, on_choice=self.choose
        )
        self.last_resolution: EventResolution | None = None

    def quote(self, destination_id: str) -> TravelQuote | None:
        """Quote a trip from the current location, or None if there is no route."""
        try:
            return compute_quote(self.game, self.game.current_location_id, destination_id)
        except MissingRouteError:
            return None

    def routes(self) -> list[tuple[str, TravelQuote]]:
        """Quotes for every destination reachable from the current location."""
        graph = self.game.catalog.graph
        return [
            (destination_id, self.quote(destination_id))
            for destination_id in graph.destinations_from(self.game.current_location_id)
        ]

    def travel_to(self, destination_id: str, use_instant_drive: bool = False) -> TravelResult:
        return self.planner.travel_to(self.game, destination_id, use_instant_drive)

    def choose(self, choice_id: str) -> EventResolution:
        """Resolve the shown event with the player's choice.

        Raises:
            ValueError: If no event is waiting or the choice is not available
        """
        pending = self.game.pending_travel
        if pending is None or pending.event_id is None:
            raise ValueError("No event is awaiting a choice")

        resolution = self.events.resolve_choice(self.game, pending.event_id, choice_id)
        self.last_resolution = resolution
        self.collaborators.missions.check_triggers()
        self.collaborators.presentation.show_event_result_modal(
            resolution.title, resolution.text, self.resume_travel
        )
        return resolution

    def resume_travel(self) -> TravelResult:
        """Continue a trip after its event was resolved.

        Raises:
            ValueError: If there is no resolved trip to resume
        """
        if self.game.trip.phase is not TripPhase.RESOLVED:
            raise ValueError("No resolved trip to resume")
        pending = self.game.pending_travel
        resolution, self.last_resolution = self.last_resolution, None
        origin_id = self.game.current_location_id

        self.game.trip.begin_execution()

        state = self.game.active_state()
        hull_failed = state is not None and state.health <= 0
        if pending.modifiers.force_event and not hull_failed:
            trigger = self.events.check_trigger(
                self.game,
                pending.destination_id,
                force=True,
                instant_drive=pending.instant_drive,
                on_choice=self.choose,
            )
            if trigger.suspended:
                return TravelResult(
                    TravelOutcome.SUSPENDED,
                    origin_id,
                    pending.destination_id,
                    message=trigger.prompt.event.title,
                    prompt=trigger.prompt,
                    resolution=resolution,
                )
            logger.info("Chained event found no eligible follow-up, continuing trip")

        result = self.executor.execute(
            self.game,
            pending.destination_id,
            modifiers=pending.modifiers,
            instant_drive=pending.instant_drive,
        )
        result.resolution = resolution
        return result
