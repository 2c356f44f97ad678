"""Tests for game state serialization."""

import json
import tempfile
from pathlib import Path

import pytest

from conftest import build_catalog, build_game, make_event, wire
from starlane.models import Effect, EffectKind, TripPhase
from starlane.utils.serialization import (
    deserialize_game,
    load_game,
    save_game,
    serialize_game,
)


def test_save_and_load_game():
    """Test that a game can be saved and loaded correctly."""
    game = build_game(fuel=120, health=80)
    game.day = 17
    game.player.credits = 2500
    game.player.active_perks = {"navigator"}
    game.player.speed_bonus = 0.5
    game.player.active_inventory()["ore"] = 4
    game.active_state().upgrades = ["engine", "plating"]
    game.nav_lock_target = "venus"

    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "saves" / "test_game.json"
        save_game(game, filepath)
        loaded = load_game(filepath, game.catalog)

    assert loaded.seed == game.seed
    assert loaded.day == 17
    assert loaded.current_location_id == "earth"
    assert loaded.player.credits == 2500
    assert loaded.player.active_perks == {"navigator"}
    assert loaded.player.speed_bonus == 0.5
    assert loaded.player.active_inventory() == {"ore": 4}
    assert loaded.active_state().fuel == 120
    assert loaded.active_state().health == 80
    assert loaded.active_state().upgrades == ["engine", "plating"]
    assert loaded.nav_lock_target == "venus"
    assert loaded.trip.phase is TripPhase.IDLE


def test_save_is_plain_json():
    game = build_game()
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "game.json"
        save_game(game, filepath)
        with open(filepath) as f:
            data = json.load(f)
    assert data["player"]["active_vessel_id"] == "scout"
    assert data["trip"] == {"phase": "idle", "pending": None}


def test_rng_state_restored():
    """The loaded game draws the same numbers as the original would."""
    game = build_game()
    game.rng.random()
    data = json.loads(json.dumps(serialize_game(game)))
    loaded = deserialize_game(data, game.catalog)

    assert [loaded.rng.random() for _ in range(5)] == [game.rng.random() for _ in range(5)]


def test_mid_event_round_trip():
    """A save taken while an event waits resumes with the same trip."""
    event = make_event(effects=[Effect(EffectKind.TRAVEL_TIME, 3)])
    game = build_game(events=[event])
    game.debug_always_trigger = True
    service = wire(game)
    service.travel_to("mars")

    data = json.loads(json.dumps(serialize_game(game)))
    loaded = deserialize_game(data, game.catalog)

    assert loaded.trip.phase is TripPhase.AWAITING_CHOICE
    assert loaded.pending_travel.destination_id == "mars"
    assert loaded.pending_travel.event_id == "test_event"
    assert loaded.pending_travel.base_time == 10

    service = wire(loaded)
    service.choose("ok")
    result = service.resume_travel()
    assert result.arrived
    assert result.days == 13


def test_resolved_trip_keeps_modifiers():
    event = make_event(
        effects=[Effect(EffectKind.TRAVEL_FUEL, 5), Effect(EffectKind.CHAIN_EVENT)]
    )
    game = build_game(events=[event])
    game.debug_always_trigger = True
    service = wire(game)
    service.travel_to("mars")
    service.choose("ok")

    loaded = deserialize_game(json.loads(json.dumps(serialize_game(game))), game.catalog)
    assert loaded.trip.phase is TripPhase.RESOLVED
    assert loaded.pending_travel.modifiers == game.pending_travel.modifiers
    assert loaded.pending_travel.modifiers.force_event
    assert loaded.pending_travel.resolved_event_ids == ["test_event"]


def test_unknown_vessel_rejected():
    data = serialize_game(build_game())
    catalog = build_catalog()
    del catalog.vessels["scout"]
    with pytest.raises(ValueError, match="not in the catalog"):
        deserialize_game(data, catalog)


def test_load_missing_file():
    with pytest.raises(FileNotFoundError):
        load_game("/nonexistent/path/game.json", build_catalog())
