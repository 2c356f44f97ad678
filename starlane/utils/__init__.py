"""Utility functions and constants for Starlane."""

from .constants import (
    DEFAULT_EVENT_WEIGHT,
    DOCKING_LOCATION_ID,
    EVENT_CHANCE_PER_DISTANCE,
    EVENT_CONTEXT_TAG,
    HULL_DECAY_PER_TRAVEL_DAY,
    INSTANT_DRIVE_ITEM_ID,
    RANDOM_EVENT_CHANCE,
    RNG_SEED_DEFAULT,
    SCREEN_MARKET,
    SCREEN_NAVIGATION,
)
from .rng import GameRNG
from .rounding import non_negative_int, round_half_up

__all__ = [
    "DEFAULT_EVENT_WEIGHT",
    "DOCKING_LOCATION_ID",
    "EVENT_CHANCE_PER_DISTANCE",
    "EVENT_CONTEXT_TAG",
    "HULL_DECAY_PER_TRAVEL_DAY",
    "INSTANT_DRIVE_ITEM_ID",
    "RANDOM_EVENT_CHANCE",
    "RNG_SEED_DEFAULT",
    "SCREEN_MARKET",
    "SCREEN_NAVIGATION",
    "GameRNG",
    "non_negative_int",
    "round_half_up",
]
