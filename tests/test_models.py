"""Tests for data models."""

import pytest

from conftest import build_catalog, build_game
from starlane.models import (
    Choice,
    EventModifiers,
    InvalidTripTransition,
    Location,
    MissingRouteError,
    Outcome,
    PendingTravel,
    Player,
    RandomEvent,
    TravelEdge,
    TripPhase,
    TripState,
    Vessel,
    VesselState,
    clamp,
)
from starlane.models.game import Game


class TestTripState:
    """Test the trip phase machine."""

    def test_full_interrupted_trip(self):
        """Test quote -> event -> resolve -> execute -> idle."""
        trip = TripState()
        assert not trip.in_flight

        trip.begin_quote()
        assert trip.phase is TripPhase.QUOTED
        assert trip.in_flight

        pending = PendingTravel(destination_id="mars", base_time=10)
        trip.suspend(pending)
        assert trip.awaiting_choice
        assert trip.pending is pending

        trip.mark_resolved()
        assert trip.phase is TripPhase.RESOLVED

        trip.begin_execution()
        assert trip.phase is TripPhase.EXECUTING
        assert trip.pending is pending

        trip.finish()
        assert trip.phase is TripPhase.IDLE
        assert trip.pending is None

    def test_execution_may_suspend_again(self):
        """A chained event suspends a resuming trip."""
        trip = TripState()
        trip.begin_quote()
        trip.suspend(PendingTravel(destination_id="mars", base_time=10))
        trip.mark_resolved()
        trip.begin_execution()

        trip.suspend(trip.pending)
        assert trip.awaiting_choice

    def test_illegal_transitions(self):
        """Test that phases cannot be skipped."""
        trip = TripState()
        with pytest.raises(InvalidTripTransition):
            trip.mark_resolved()

        trip.begin_quote()
        trip.suspend(PendingTravel(destination_id="mars", base_time=10))
        with pytest.raises(InvalidTripTransition, match="awaiting_choice -> executing"):
            trip.begin_execution()
        with pytest.raises(InvalidTripTransition):
            trip.finish()
        with pytest.raises(InvalidTripTransition):
            trip.begin_quote()

    def test_finish_from_idle_is_noop(self):
        trip = TripState()
        trip.finish()
        assert trip.phase is TripPhase.IDLE

    def test_phase_requires_pending(self):
        """Test phase/pending pairing validation."""
        with pytest.raises(ValueError, match="requires a pending record"):
            TripState(phase=TripPhase.AWAITING_CHOICE)

        with pytest.raises(ValueError, match="cannot hold a pending record"):
            TripState(pending=PendingTravel(destination_id="mars", base_time=1))


class TestPendingTravel:
    def test_invalid_destination(self):
        with pytest.raises(ValueError, match="destination_id cannot be empty"):
            PendingTravel(destination_id="", base_time=3)

    def test_invalid_base_time(self):
        with pytest.raises(ValueError, match="Invalid base_time"):
            PendingTravel(destination_id="mars", base_time=-1)

    def test_modifiers_start_empty(self):
        pending = PendingTravel(destination_id="mars", base_time=3)
        assert pending.modifiers.is_empty()
        assert pending.resolved_event_ids == []

        pending.modifiers.force_event = True
        assert not pending.modifiers.is_empty()

    def test_modifiers_are_not_shared(self):
        a = PendingTravel(destination_id="mars", base_time=3)
        b = PendingTravel(destination_id="mars", base_time=3)
        a.modifiers.travel_time_add = 2
        assert b.modifiers == EventModifiers()


class TestLocationGraph:
    def test_edges_are_directed(self):
        graph = build_catalog().graph
        assert graph.get_edge("earth", "belt") == TravelEdge(fuel_cost=120, time=20)

        with pytest.raises(MissingRouteError) as exc_info:
            graph.get_edge("belt", "earth")
        assert exc_info.value.from_id == "belt"
        assert exc_info.value.to_id == "earth"

    def test_destinations_from(self):
        graph = build_catalog().graph
        assert sorted(graph.destinations_from("earth")) == ["belt", "mars", "venus"]
        assert graph.destinations_from("pluto") == []

    def test_invalid_location(self):
        with pytest.raises(ValueError, match="Invalid distance"):
            Location(id="x", name="X", distance=-1)

    def test_invalid_edge(self):
        with pytest.raises(ValueError, match="Invalid fuel_cost"):
            TravelEdge(fuel_cost=-5, time=1)


class TestVessel:
    def test_full_state(self):
        vessel = Vessel(id="v", name="V", max_fuel=120, max_health=80, cargo_capacity=5)
        state = VesselState.full(vessel)
        assert state.fuel == 120
        assert state.health == 80
        assert state.hull_alerts == {"warning": False, "critical": False}

    def test_invalid_max_health(self):
        with pytest.raises(ValueError, match="Invalid max_health"):
            Vessel(id="v", name="V", max_fuel=10, max_health=0, cargo_capacity=5)

    def test_invalid_fuel(self):
        with pytest.raises(ValueError, match="Invalid fuel"):
            VesselState(fuel=-1, health=10)

    def test_clamp(self):
        assert clamp(150, 100) == 100
        assert clamp(-3, 100) == 0
        assert clamp(42, 100) == 42


class TestPlayer:
    def test_first_vessel_becomes_active(self):
        player = Player()
        player.add_vessel("a", VesselState(fuel=1, health=1))
        player.add_vessel("b", VesselState(fuel=1, health=1))
        assert player.active_vessel_id == "a"
        assert player.owned_vessel_ids == ["a", "b"]

    def test_duplicate_vessel(self):
        player = Player()
        player.add_vessel("a", VesselState(fuel=1, health=1))
        with pytest.raises(ValueError, match="already owned"):
            player.add_vessel("a", VesselState(fuel=1, health=1))

    def test_remove_active_promotes_next(self):
        player = Player()
        player.add_vessel("a", VesselState(fuel=1, health=1))
        player.add_vessel("b", VesselState(fuel=2, health=2))
        player.inventories["a"]["ore"] = 3

        player.remove_vessel("a")
        assert player.active_vessel_id == "b"
        assert "a" not in player.inventories
        assert player.active_state().fuel == 2

        player.remove_vessel("b")
        assert player.active_vessel_id is None
        assert player.active_state() is None
        assert player.active_inventory() == {}

    def test_active_vessel_must_be_owned(self):
        with pytest.raises(ValueError, match="not in the owned fleet"):
            Player(active_vessel_id="ghost")

    def test_negative_credits(self):
        with pytest.raises(ValueError, match="Invalid credits"):
            Player(credits=-1)


class TestGame:
    def test_unknown_location(self):
        with pytest.raises(ValueError, match="Unknown current location"):
            Game(seed=1, catalog=build_catalog(), current_location_id="atlantis")

    def test_invalid_day(self):
        with pytest.raises(ValueError, match="Invalid day"):
            Game(seed=1, catalog=build_catalog(), current_location_id="earth", day=0)

    def test_end_game_keeps_first_reason(self):
        game = build_game()
        game.end_game("first")
        game.end_game("second")
        assert game.is_game_over
        assert game.game_over_reason == "first"

    def test_active_vessel(self):
        game = build_game(vessel_id="hauler")
        assert game.active_vessel().name == "Hauler"
        assert game.active_state().fuel == 100


class TestEvents:
    def test_event_needs_choices(self):
        with pytest.raises(ValueError, match="has no choices"):
            RandomEvent(id="empty", title="Empty")

    def test_negative_outcome_weight(self):
        with pytest.raises(ValueError, match="Invalid weight"):
            Outcome(id="o", text="o", weight=-1)

    def test_get_choice(self):
        event = RandomEvent(id="e", title="E", choices=[Choice(id="a", text="A")])
        assert event.get_choice("a").text == "A"
        assert event.get_choice("z") is None
