"""Random event engine: trigger roll, event selection and choice resolution.

A triggered event does not block. It captures the trip as a PendingTravel on
the game's TripState, shows the event and returns. The player's choice is
resolved by a later call, and the trip resumes after that.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..models.event import EventPrompt, RandomEvent
from ..models.game import Game
from ..models.trip import PendingTravel, TripPhase
from ..utils import EVENT_CONTEXT_TAG
from .collaborators import Presentation
from .conditions import ConditionEvaluator, select_outcome
from .effects import AppliedEffect, apply_effect
from .modifiers import compute_event_chance, compute_quote

logger = logging.getLogger(__name__)


class TriggerOutcome(Enum):
    NO_EVENT = "no_event"
    SUSPENDED = "suspended"


@dataclass
class TriggerResult:
    """Result of an event trigger check."""

    outcome: TriggerOutcome
    prompt: EventPrompt | None = None
    chance: float = 0.0

    @property
    def suspended(self) -> bool:
        return self.outcome is TriggerOutcome.SUSPENDED


@dataclass
class EventResolution:
    """Summary of a resolved choice for the result modal.

    Attributes:
        event_id: Event that was resolved
        choice_id: Choice the player picked
        outcome_id: Drawn outcome, or None for a choice without outcomes
        title: Result title (outcome title, falling back to the event title)
        text: Narrative shown to the player
        effects: Concrete changes, in application order
    """

    event_id: str
    choice_id: str
    outcome_id: str | None
    title: str
    text: str
    effects: list[AppliedEffect] = field(default_factory=list)


class EventEngine:
    """Rolls, selects and resolves random events."""

    def __init__(
        self,
        presentation: Presentation | None = None,
        evaluator: ConditionEvaluator | None = None,
    ):
        self.presentation = presentation or Presentation()
        self.evaluator = evaluator or ConditionEvaluator()

    def eligible_events(self, game: Game, exclude: Sequence[str] = ()) -> list[RandomEvent]:
        """Events tagged for travel whose requirements currently pass."""
        return [
            event
            for event in game.catalog.events
            if EVENT_CONTEXT_TAG in event.tags
            and event.id not in exclude
            and self.evaluator.check_all(event.requirements, game)
        ]

    def _forced_event(self, game: Game, force: int | str) -> RandomEvent | None:
        if isinstance(force, str):
            event = game.catalog.get_event(force)
            if event is None:
                logger.warning(f"Forced event '{force}' does not exist")
            return event
        if 0 <= force < len(game.catalog.events):
            return game.catalog.events[force]
        logger.warning(f"Forced event index {force} out of range")
        return None

    def _select_event(self, game: Game, pick, exclude: list[str]) -> RandomEvent | None:
        if pick is not None:
            return self._forced_event(game, pick)
        candidates = self.eligible_events(game, exclude)
        if not candidates:
            return None
        return game.rng.weighted_choice(candidates, [e.weight for e in candidates])

    def build_prompt(self, game: Game, event: RandomEvent) -> EventPrompt:
        """Mark the choices whose requirements the player does not meet."""
        disabled = {
            choice.id
            for choice in event.choices
            if choice.requirements and not self.evaluator.check_all(choice.requirements, game)
        }
        return EventPrompt(event=event, disabled_choice_ids=disabled)

    def check_trigger(
        self,
        game: Game,
        destination_id: str,
        force: bool | int | str | None = None,
        *,
        instant_drive: bool = False,
        on_choice: Callable[[str], Any] | None = None,
    ) -> TriggerResult:
        """Roll for a random event on the way to a destination.

        The roll is skipped when force is truthy or the debug always-trigger
        flag is set. When the trip is resuming (a pending record exists), the
        same record is suspended again so accumulated modifiers carry over and
        events already resolved on this trip are excluded.

        Args:
            game: Current game state
            destination_id: Where the trip is headed
            force: True to skip the roll, an int catalog index or str event ID
                to pick a specific event
            instant_drive: Whether the trip uses the instant drive
            on_choice: Callback given to the event modal; defaults to
                resolving the choice directly

        Returns:
            TriggerResult, SUSPENDED with the prompt when an event fired
        """
        origin_id = game.current_location_id
        chance = compute_event_chance(game, origin_id, destination_id)

        # Index 0 is a valid forced pick; only None and False mean "roll"
        forced = force is not None and force is not False
        if not forced and not game.debug_always_trigger and not game.rng.chance(chance):
            return TriggerResult(TriggerOutcome.NO_EVENT, chance=chance)

        pending = game.pending_travel
        exclude = pending.resolved_event_ids if pending else []
        # True means "trigger now", not index 1
        pick = force if forced and force is not True else None
        event = self._select_event(game, pick, exclude)
        if event is None:
            logger.debug(f"Event roll passed but no event is eligible for {destination_id}")
            return TriggerResult(TriggerOutcome.NO_EVENT, chance=chance)

        if pending is None:
            base_time = compute_quote(
                game, origin_id, destination_id, instant_drive=instant_drive
            ).time
            pending = PendingTravel(
                destination_id=destination_id,
                base_time=base_time,
                instant_drive=instant_drive,
            )
        pending.event_id = event.id
        pending.modifiers.force_event = False

        if game.trip.phase is TripPhase.IDLE:
            game.trip.begin_quote()
        game.trip.suspend(pending)

        prompt = self.build_prompt(game, event)
        logger.info(f"Event '{event.id}' triggered en route to {destination_id}")

        if on_choice is None:

            def on_choice(choice_id: str) -> EventResolution:
                return self.resolve_choice(game, event.id, choice_id)

        self.presentation.show_random_event_modal(prompt, on_choice)
        return TriggerResult(TriggerOutcome.SUSPENDED, prompt=prompt, chance=chance)

    def resolve_choice(self, game: Game, event_id: str, choice_id: str) -> EventResolution:
        """Apply the effects of the player's choice.

        Does not resume the trip; the trip moves to RESOLVED and waits for
        the caller to continue it.

        Args:
            game: Current game state
            event_id: Event currently shown
            choice_id: Picked choice

        Returns:
            EventResolution summary

        Raises:
            ValueError: If no event is awaiting a choice, the IDs are unknown
                or the choice is disabled
        """
        pending = game.pending_travel
        if not game.trip.awaiting_choice or pending is None:
            raise ValueError("No event is awaiting a choice")
        if pending.event_id != event_id:
            raise ValueError(f"Event {event_id} is not the event being shown")

        event = game.catalog.get_event(event_id)
        if event is None:
            raise ValueError(f"Event not found: {event_id}")
        choice = event.get_choice(choice_id)
        if choice is None:
            raise ValueError(f"Choice not found: {choice_id}")
        if choice.requirements and not self.evaluator.check_all(choice.requirements, game):
            raise ValueError(f"Choice {choice_id} is not available")

        outcome_id = None
        title = event.title
        text = choice.result_text or choice.text
        effects = choice.effects
        if choice.outcomes:
            outcome = select_outcome(choice.outcomes, game)
            outcome_id = outcome.id
            title = outcome.title or event.title
            text = outcome.text
            effects = outcome.effects

        applied = [apply_effect(game, effect) for effect in effects]
        notes = [a.note for a in applied if a.note]
        if notes:
            text = " ".join([text, *notes])

        pending.resolved_event_ids.append(event_id)
        pending.event_id = None
        game.trip.mark_resolved()

        logger.info(
            f"Resolved event '{event_id}' with choice '{choice_id}'"
            + (f" -> outcome '{outcome_id}'" if outcome_id else "")
        )
        return EventResolution(
            event_id=event_id,
            choice_id=choice_id,
            outcome_id=outcome_id,
            title=title,
            text=text,
            effects=applied,
        )
