"""Random event data models.

An event offers the player a list of choices. Each choice resolves into an
ordered list of effects, either directly or through a weighted pool of
outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum


class EffectKind(Enum):
    """Closed set of effect types an event choice can apply."""

    CREDITS = "credits"
    FUEL = "fuel"
    HULL = "hull"
    TRAVEL_TIME = "travel_time"  # Additive day delta on the pending trip
    TRAVEL_TIME_PERCENT = "travel_time_percent"  # Fractional time multiplier
    SET_TRAVEL_TIME = "set_travel_time"  # Absolute day override
    TRAVEL_FUEL = "travel_fuel"  # Extra fuel required to finish the trip
    HULL_DAMAGE_PERCENT = "hull_damage_percent"  # % of max health taken on arrival
    ADD_ITEM = "add_item"
    REMOVE_ITEM = "remove_item"
    LOSE_CARGO_PERCENT = "lose_cargo_percent"
    REDIRECT_TRAVEL = "redirect_travel"
    CHAIN_EVENT = "chain_event"  # Forces another event roll when the trip resumes


class ConditionKind(Enum):
    """Requirement types checked against the game state."""

    HAS_FUEL = "has_fuel"
    HAS_CREDITS = "has_credits"
    HAS_HULL = "has_hull"
    HAS_CARGO_SPACE = "has_cargo_space"
    HAS_ITEM = "has_item"
    HAS_PERK = "has_perk"
    HAS_ATTRIBUTE = "has_attribute"
    LOCATION_IS = "location_is"
    RNG_ROLL = "rng_roll"


@dataclass(frozen=True)
class DynamicValue:
    """A value that scales with game state: floor(base + scaler * factor)."""

    base: float = 0
    scale_with: str | None = None
    factor: float = 1


@dataclass(frozen=True)
class Effect:
    """A single typed consequence of an event choice."""

    kind: EffectKind
    value: float | DynamicValue = 0
    target: str | None = None  # Item or location ID, depending on kind


@dataclass(frozen=True)
class Condition:
    """A requirement: compare a game-state value against a threshold."""

    kind: ConditionKind
    operator: str = "GTE"  # GT, GTE, LT, LTE, EQ, NEQ, IN
    value: object = 0
    target: str | None = None


@dataclass
class Outcome:
    """One weighted result of a choice."""

    id: str
    text: str
    effects: list[Effect] = field(default_factory=list)
    title: str | None = None
    weight: float = 1

    def __post_init__(self):
        """Validate outcome data after initialization."""
        if self.weight < 0:
            raise ValueError(f"Invalid weight: {self.weight} (must be >= 0)")


@dataclass
class Choice:
    """A player option within an event."""

    id: str
    text: str
    effects: list[Effect] = field(default_factory=list)
    result_text: str = ""
    requirements: list[Condition] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)


@dataclass
class RandomEvent:
    """An interruption that can fire while travelling."""

    id: str
    title: str
    description: str = ""
    tags: frozenset[str] = frozenset()
    weight: float = 10
    requirements: list[Condition] = field(default_factory=list)
    choices: list[Choice] = field(default_factory=list)

    def __post_init__(self):
        """Validate event data after initialization."""
        if not self.choices:
            raise ValueError(f"Event {self.id} has no choices")
        if self.weight < 0:
            raise ValueError(f"Invalid weight: {self.weight} (must be >= 0)")

    def get_choice(self, choice_id: str) -> Choice | None:
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None


@dataclass
class EventPrompt:
    """An event as offered to the player, with unavailable choices marked."""

    event: RandomEvent
    disabled_choice_ids: set[str] = field(default_factory=set)

    def available_choices(self) -> list[Choice]:
        return [c for c in self.event.choices if c.id not in self.disabled_choice_ids]
