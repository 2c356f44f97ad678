"""Data models for Starlane."""

from .catalog import Catalog, Item, Perk, Upgrade
from .event import (
    Choice,
    Condition,
    ConditionKind,
    DynamicValue,
    Effect,
    EffectKind,
    EventPrompt,
    Outcome,
    RandomEvent,
)
from .game import Game
from .location import Location, LocationGraph, MissingRouteError, TravelEdge
from .player import Player
from .trip import (
    EventModifiers,
    InvalidTripTransition,
    PendingTravel,
    TripPhase,
    TripState,
)
from .vessel import Vessel, VesselState, clamp

__all__ = [
    "Catalog",
    "Choice",
    "Condition",
    "ConditionKind",
    "DynamicValue",
    "Effect",
    "EffectKind",
    "EventModifiers",
    "EventPrompt",
    "Game",
    "InvalidTripTransition",
    "Item",
    "Location",
    "LocationGraph",
    "MissingRouteError",
    "Outcome",
    "PendingTravel",
    "Perk",
    "Player",
    "RandomEvent",
    "TravelEdge",
    "TripPhase",
    "TripState",
    "Upgrade",
    "Vessel",
    "VesselState",
    "clamp",
]
