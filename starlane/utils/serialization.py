"""Game state serialization to/from JSON.

The catalog is reference data and is not saved; load_game takes it as an
argument. Everything mutable is saved, including a trip suspended on an event,
so a save taken mid-event resumes with the same destination and modifiers.
"""

import json
from pathlib import Path
from typing import Any

from ..models.catalog import Catalog
from ..models.game import Game
from ..models.player import Player
from ..models.trip import EventModifiers, PendingTravel, TripPhase, TripState
from ..models.vessel import VesselState
from ..utils.rng import GameRNG


def save_game(game: Game, filepath: str | Path) -> None:
    """Save game state to JSON file.

    Args:
        game: Game state to save
        filepath: Path to save file (parent directories are created)
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(serialize_game(game), f, indent=2)


def load_game(filepath: str | Path, catalog: Catalog) -> Game:
    """Load game state from JSON file.

    Args:
        filepath: Path to saved game file
        catalog: Reference data the save was made against

    Returns:
        Loaded Game object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or references unknown data
    """
    with open(filepath) as f:
        data = json.load(f)
    return deserialize_game(data, catalog)


def serialize_game(game: Game) -> dict[str, Any]:
    """Convert Game object to JSON-compatible dictionary."""
    return {
        "seed": game.seed,
        "day": game.day,
        "current_location_id": game.current_location_id,
        "player": _serialize_player(game.player),
        "trip": _serialize_trip(game.trip),
        "is_game_over": game.is_game_over,
        "game_over_reason": game.game_over_reason,
        "screen": game.screen,
        "nav_lock_target": game.nav_lock_target,
        "tutorial_protected": game.tutorial_protected,
        "debug_always_trigger": game.debug_always_trigger,
        "docking_location_id": game.docking_location_id,
        "rng_state": game.rng.get_state(),  # Save RNG state for determinism
    }


def deserialize_game(data: dict[str, Any], catalog: Catalog) -> Game:
    """Reconstruct Game object from dictionary.

    Args:
        data: Dictionary representation of game state
        catalog: Reference data

    Returns:
        Reconstructed Game object
    """
    rng = GameRNG(data["seed"])
    if "rng_state" in data:
        # JSON turns the state tuples into lists
        state = data["rng_state"]
        if isinstance(state, list):
            state = (state[0], tuple(state[1]), state[2])
        rng.set_state(state)

    player = _deserialize_player(data["player"])
    for vessel_id in player.owned_vessel_ids:
        if vessel_id not in catalog.vessels:
            raise ValueError(f"Saved vessel {vessel_id} is not in the catalog")

    return Game(
        seed=data["seed"],
        catalog=catalog,
        current_location_id=data["current_location_id"],
        day=data.get("day", 1),
        player=player,
        rng=rng,
        trip=_deserialize_trip(data.get("trip")),
        is_game_over=data.get("is_game_over", False),
        game_over_reason=data.get("game_over_reason"),
        screen=data.get("screen", "market"),
        nav_lock_target=data.get("nav_lock_target"),
        tutorial_protected=data.get("tutorial_protected", False),
        debug_always_trigger=data.get("debug_always_trigger", False),
        docking_location_id=data.get("docking_location_id"),
    )


def _serialize_vessel_state(state: VesselState) -> dict[str, Any]:
    return {
        "fuel": state.fuel,
        "health": state.health,
        "upgrades": list(state.upgrades),
        "trip_count": state.trip_count,
        "hull_alerts": dict(state.hull_alerts),
    }


def _deserialize_vessel_state(data: dict[str, Any]) -> VesselState:
    return VesselState(
        fuel=data["fuel"],
        health=data["health"],
        upgrades=list(data.get("upgrades", [])),
        trip_count=data.get("trip_count", 0),
        hull_alerts=data.get("hull_alerts", {"warning": False, "critical": False}),
    )


def _serialize_player(player: Player) -> dict[str, Any]:
    """Convert Player to dictionary."""
    return {
        "credits": player.credits,
        "active_vessel_id": player.active_vessel_id,
        "owned_vessel_ids": list(player.owned_vessel_ids),
        "vessel_states": {
            vid: _serialize_vessel_state(s) for vid, s in player.vessel_states.items()
        },
        "inventories": {vid: dict(inv) for vid, inv in player.inventories.items()},
        "active_perks": sorted(player.active_perks),
        "speed_bonus": player.speed_bonus,
        "trip_count": player.trip_count,
    }


def _deserialize_player(data: dict[str, Any]) -> Player:
    """Reconstruct Player from dictionary."""
    return Player(
        credits=data.get("credits", 0),
        active_vessel_id=data.get("active_vessel_id"),
        owned_vessel_ids=list(data.get("owned_vessel_ids", [])),
        vessel_states={
            vid: _deserialize_vessel_state(s) for vid, s in data.get("vessel_states", {}).items()
        },
        inventories={vid: dict(inv) for vid, inv in data.get("inventories", {}).items()},
        active_perks=set(data.get("active_perks", [])),
        speed_bonus=data.get("speed_bonus", 0.0),
        trip_count=data.get("trip_count", 0),
    )


def _serialize_trip(trip: TripState) -> dict[str, Any]:
    pending = trip.pending
    return {
        "phase": trip.phase.value,
        "pending": None
        if pending is None
        else {
            "destination_id": pending.destination_id,
            "base_time": pending.base_time,
            "modifiers": {
                "travel_time_add": pending.modifiers.travel_time_add,
                "travel_time_percent": pending.modifiers.travel_time_percent,
                "set_travel_time": pending.modifiers.set_travel_time,
                "fuel_cost_add": pending.modifiers.fuel_cost_add,
                "hull_damage_percent": pending.modifiers.hull_damage_percent,
                "force_event": pending.modifiers.force_event,
            },
            "instant_drive": pending.instant_drive,
            "event_id": pending.event_id,
            "resolved_event_ids": list(pending.resolved_event_ids),
        },
    }


def _deserialize_trip(data: dict[str, Any] | None) -> TripState:
    if not data:
        return TripState()
    pending_data = data.get("pending")
    pending = None
    if pending_data is not None:
        pending = PendingTravel(
            destination_id=pending_data["destination_id"],
            base_time=pending_data["base_time"],
            modifiers=EventModifiers(**pending_data.get("modifiers", {})),
            instant_drive=pending_data.get("instant_drive", False),
            event_id=pending_data.get("event_id"),
            resolved_event_ids=list(pending_data.get("resolved_event_ids", [])),
        )
    return TripState(phase=TripPhase(data.get("phase", "idle")), pending=pending)
