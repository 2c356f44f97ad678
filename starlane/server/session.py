"""Game session management for the HTTP API."""

import logging
import uuid
from dataclasses import asdict, dataclass, field

from ..engine.collaborators import Collaborators, DockingSync, RecordingPresentation
from ..engine.events import EventResolution
from ..engine.executor import TravelResult
from ..engine.modifiers import TravelQuote
from ..engine.travel_service import TravelService
from ..models.catalog import Catalog
from ..models.event import EventPrompt
from ..models.game import Game
from ..utils.catalog import load_catalog, new_game
from ..utils.constants import STARTING_VESSEL_ID

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One game played over the API.

    The presentation records what the engine wanted to show; every response
    drains it, so a client sees each modal exactly once. The callbacks of the
    open event and result modals stay on the presentation until used.
    """

    id: str
    game: Game
    service: TravelService
    presentation: RecordingPresentation = field(default_factory=RecordingPresentation)

    def get_state(self) -> dict:
        """Serialize the player-visible game state."""
        game = self.game
        vessel, state = game.active_vessel(), game.active_state()
        pending = game.pending_travel
        return {
            "day": game.day,
            "location": game.current_location_id,
            "screen": game.screen,
            "credits": game.player.credits,
            "isGameOver": game.is_game_over,
            "tripPhase": game.trip.phase.value,
            "pendingTravel": None
            if pending is None
            else {
                "destination": pending.destination_id,
                "baseTime": pending.base_time,
                "eventId": pending.event_id,
                "modifiers": asdict(pending.modifiers),
            },
            "vessel": None
            if vessel is None or state is None
            else {
                "id": vessel.id,
                "name": vessel.name,
                "fuel": state.fuel,
                "maxFuel": vessel.max_fuel,
                "health": state.health,
                "maxHealth": vessel.max_health,
                "cargo": dict(game.player.active_inventory()),
                "cargoCapacity": vessel.cargo_capacity,
                "attributes": list(vessel.attributes),
                "upgrades": list(state.upgrades),
            },
            "fleet": list(game.player.owned_vessel_ids),
        }

    def drain_presentation(self) -> list[dict]:
        return [asdict(call) for call in self.presentation.drain()]

    def routes(self) -> list[dict]:
        graph = self.game.catalog.graph
        return [
            {"destination": destination_id, "name": graph.get(destination_id).name}
            | serialize_quote(quote)
            for destination_id, quote in self.service.routes()
            if quote is not None
        ]

    def travel(self, destination_id: str, use_instant_drive: bool = False) -> TravelResult:
        logger.info(f"Game {self.id}: travel to {destination_id}")
        return self.service.travel_to(destination_id, use_instant_drive)

    def choose(self, choice_id: str) -> EventResolution:
        """Fire the open event modal's callback.

        Raises:
            LookupError: If no event modal is open
            ValueError: If the choice is not available
        """
        on_choice = self.presentation.pending_choice
        if on_choice is None or not self.game.trip.awaiting_choice:
            raise LookupError("No event is awaiting a choice")
        resolution = on_choice(choice_id)
        self.presentation.pending_choice = None
        return resolution

    def resume(self) -> TravelResult:
        """Fire the open result modal's callback.

        Raises:
            LookupError: If no event result is waiting to be continued
        """
        on_continue = self.presentation.pending_continue
        if on_continue is None:
            raise LookupError("No resolved event to continue from")
        self.presentation.pending_continue = None
        return on_continue()


def serialize_quote(quote: TravelQuote | None) -> dict:
    if quote is None:
        return {}
    return {
        "fuelCost": quote.fuel_cost,
        "days": quote.time,
        "eventChance": round(quote.event_chance, 4),
        "instantDrive": quote.instant_drive,
    }


def serialize_prompt(prompt: EventPrompt | None) -> dict | None:
    if prompt is None:
        return None
    return {
        "id": prompt.event.id,
        "title": prompt.event.title,
        "description": prompt.event.description,
        "choices": [
            {"id": c.id, "text": c.text, "disabled": c.id in prompt.disabled_choice_ids}
            for c in prompt.event.choices
        ],
    }


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; the catalog is loaded once and shared read-only.
    """

    def __init__(self, catalog: Catalog | None = None):
        self.sessions: dict[str, GameSession] = {}
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        if self._catalog is None:
            self._catalog = load_catalog()
        return self._catalog

    def create_session(
        self,
        seed: int | None = None,
        vessel_id: str | None = None,
        always_event: bool = False,
    ) -> GameSession:
        """Create a new game session.

        Args:
            seed: Optional RNG seed for determinism
            vessel_id: Starting vessel (default vessel when None)
            always_event: Trigger an event on every trip

        Returns:
            Newly created GameSession

        Raises:
            ValueError: If the vessel is unknown
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        game = new_game(self.catalog, seed=seed, vessel_id=vessel_id or STARTING_VESSEL_ID)
        game.debug_always_trigger = always_event

        presentation = RecordingPresentation()
        collaborators = Collaborators.for_game(
            game, presentation=presentation, docking=DockingSync()
        )
        session = GameSession(
            id=game_id,
            game=game,
            service=TravelService(game, collaborators),
            presentation=presentation,
        )
        self.sessions[game_id] = session

        logger.info(f"Created game {game_id}: seed={seed}, vessel={vessel_id or STARTING_VESSEL_ID}")
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID."""
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game session.

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
