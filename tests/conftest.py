"""Shared builders for travel engine tests.

The test catalog is small and hand-built with explicit edges so that expected
fuel and day values can be read straight off the table below:

    earth -> mars   50 fuel, 10 days      mars -> earth  50 fuel, 10 days
    earth -> venus  20 fuel,  5 days      venus -> earth 20 fuel,  5 days
    earth -> belt  120 fuel, 20 days      mars -> belt   80 fuel, 14 days

"pluto" exists but has no routes at all.
"""

import pytest

from starlane.engine.collaborators import (
    Collaborators,
    MissionService,
    RecordingPresentation,
)
from starlane.engine.travel_service import TravelService
from starlane.models import (
    Catalog,
    Choice,
    Item,
    Location,
    LocationGraph,
    PendingTravel,
    Perk,
    RandomEvent,
    TravelEdge,
    Upgrade,
    Vessel,
    VesselState,
)
from starlane.models.game import Game
from starlane.utils import GameRNG

EDGES = {
    ("earth", "mars"): (50, 10),
    ("mars", "earth"): (50, 10),
    ("earth", "venus"): (20, 5),
    ("venus", "earth"): (20, 5),
    ("earth", "belt"): (120, 20),
    ("mars", "belt"): (80, 14),
}


class ScriptedRNG(GameRNG):
    """GameRNG whose random() returns queued values before falling back."""

    def __init__(self, rolls=(), seed: int = 0):
        super().__init__(seed)
        self.rolls = list(rolls)

    def random(self) -> float:
        if self.rolls:
            return self.rolls.pop(0)
        return super().random()


class CountingMissions(MissionService):
    def __init__(self):
        self.checks = 0

    def check_triggers(self) -> None:
        self.checks += 1


def make_event(
    event_id="test_event", effects=(), weight=10, requirements=(), choices=None, tags=("space",)
):
    """Event with a single "ok" choice applying the given effects."""
    if choices is None:
        choices = [Choice(id="ok", text="Okay", result_text="Done.", effects=list(effects))]
    return RandomEvent(
        id=event_id,
        title=event_id.replace("_", " ").title(),
        description="Something happens.",
        tags=frozenset(tags),
        weight=weight,
        requirements=list(requirements),
        choices=choices,
    )


def build_catalog(events=None, vessels=None) -> Catalog:
    locations = [
        Location(id="venus", name="Venus", distance=72),
        Location(id="earth", name="Earth", distance=100),
        Location(id="mars", name="Mars", distance=152),
        Location(id="belt", name="The Belt", distance=280),
        Location(id="pluto", name="Pluto", distance=3900),
    ]
    default_vessels = [
        Vessel(id="scout", name="Scout", max_fuel=200, max_health=100, cargo_capacity=10),
        Vessel(id="hauler", name="Hauler", max_fuel=100, max_health=100, cargo_capacity=50),
    ]
    return Catalog(
        graph=LocationGraph(
            locations={l.id: l for l in locations},
            edges={key: TravelEdge(fuel_cost=f, time=t) for key, (f, t) in EDGES.items()},
        ),
        vessels={v.id: v for v in default_vessels + list(vessels or [])},
        perks={
            "navigator": Perk(id="navigator", name="Navigator", fuel_mod=0.9, time_mod=0.9),
            "engineer": Perk(id="engineer", name="Engineer", hull_decay_mod=0.5),
        },
        upgrades={
            "plating": Upgrade(id="plating", name="Plating", hull_resistance=0.5),
            "sensor": Upgrade(id="sensor", name="Sensor", event_chance_bonus=2.0),
            "engine": Upgrade(id="engine", name="Engine", travel_time_mod=0.5),
            "nanites": Upgrade(id="nanites", name="Nanites", passive_repair_rate=0.1),
        },
        items={
            "folded_drive": Item(id="folded_drive", name="Folded-Space Drive", consumable=True),
            "ore": Item(id="ore", name="Ore"),
        },
        events=list(events or []),
    )


def build_game(
    events=None,
    vessels=None,
    vessel_id="scout",
    fuel=None,
    health=None,
    rng=None,
    location_id="earth",
) -> Game:
    """Game at a location with one active vessel (full tanks unless given)."""
    catalog = build_catalog(events, vessels)
    game = Game(seed=42, catalog=catalog, current_location_id=location_id, rng=rng)
    state = VesselState.full(catalog.vessels[vessel_id])
    if fuel is not None:
        state.fuel = fuel
    if health is not None:
        state.health = health
    game.player.add_vessel(vessel_id, state)
    return game


def wire(game: Game, **overrides) -> TravelService:
    """TravelService with recording presentation and counting missions."""
    overrides.setdefault("presentation", RecordingPresentation())
    overrides.setdefault("missions", CountingMissions())
    return TravelService(game, Collaborators.for_game(game, **overrides))


def suspend_trip(game: Game, destination_id="mars", base_time=10) -> PendingTravel:
    """Put the game in the middle of an event on the way to a destination."""
    pending = PendingTravel(destination_id=destination_id, base_time=base_time)
    game.trip.begin_quote()
    game.trip.suspend(pending)
    return pending


@pytest.fixture
def game():
    return build_game()

