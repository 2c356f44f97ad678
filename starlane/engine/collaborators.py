"""Interfaces the travel engine calls out to.

The engine never renders or runs missions itself. It computes data and hands
it to these collaborators. The base classes are no-ops so a headless game
(tests, scripts) can run without any front end.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..models.event import EventPrompt
from ..models.game import Game
from .clock import GameClock

logger = logging.getLogger(__name__)


class Presentation:
    """Front-end hooks. Every method is advisory; state is already committed."""

    def queue_modal(
        self,
        kind: str,
        title: str,
        body: str,
        on_dismiss: Callable[[], None] | None = None,
        **opts: Any,
    ) -> None:
        pass

    def show_random_event_modal(
        self, prompt: EventPrompt, on_choice: Callable[[str], Any]
    ) -> None:
        pass

    def show_event_result_modal(
        self, title: str, body: str, on_continue: Callable[[], Any]
    ) -> None:
        pass

    def show_travel_animation(
        self, from_loc, to_loc, quote, damage_percent: float, on_done: Callable[[], None]
    ) -> None:
        """Play the travel animation; the default completes immediately."""
        on_done()

    def create_floating_text(self, text: str, pos: str | None = None, color: str | None = None) -> None:
        pass


@dataclass
class PresentationCall:
    """One recorded presentation call."""

    method: str
    kind: str | None = None
    title: str = ""
    body: str = ""
    data: dict[str, Any] = field(default_factory=dict)


class RecordingPresentation(Presentation):
    """Presentation that records every call instead of rendering.

    Used by the HTTP server (calls are drained into responses) and by tests.
    The callbacks of the most recent event and result modals are kept so the
    caller can fire them later.
    """

    def __init__(self):
        self.calls: list[PresentationCall] = []
        self.pending_choice: Callable[[str], Any] | None = None
        self.pending_continue: Callable[[], Any] | None = None

    def queue_modal(self, kind, title, body, on_dismiss=None, **opts):
        self.calls.append(PresentationCall("queue_modal", kind, title, body, dict(opts)))

    def show_random_event_modal(self, prompt, on_choice):
        self.pending_choice = on_choice
        self.calls.append(
            PresentationCall(
                "show_random_event_modal",
                "event",
                prompt.event.title,
                prompt.event.description,
                {
                    "event_id": prompt.event.id,
                    "choices": [
                        {
                            "id": c.id,
                            "text": c.text,
                            "disabled": c.id in prompt.disabled_choice_ids,
                        }
                        for c in prompt.event.choices
                    ],
                },
            )
        )

    def show_event_result_modal(self, title, body, on_continue):
        self.pending_continue = on_continue
        self.calls.append(PresentationCall("show_event_result_modal", "event_result", title, body))

    def show_travel_animation(self, from_loc, to_loc, quote, damage_percent, on_done):
        self.calls.append(
            PresentationCall(
                "show_travel_animation",
                data={
                    "from": from_loc.id,
                    "to": to_loc.id,
                    "days": quote.time,
                    "fuel": quote.fuel_cost,
                    "damage_percent": damage_percent,
                },
            )
        )
        on_done()

    def create_floating_text(self, text, pos=None, color=None):
        self.calls.append(PresentationCall("create_floating_text", body=text, data={"color": color}))

    def methods(self) -> list[str]:
        return [call.method for call in self.calls]

    def modals(self, kind: str | None = None) -> list[PresentationCall]:
        """Recorded queue_modal calls, optionally filtered by kind."""
        return [
            call
            for call in self.calls
            if call.method == "queue_modal" and (kind is None or call.kind == kind)
        ]

    def drain(self) -> list[PresentationCall]:
        """Return and forget every call recorded so far."""
        calls, self.calls = self.calls, []
        return calls


class MissionService:
    """Mission objective hook; re-checked after arrival and event resolution."""

    def check_triggers(self) -> None:
        pass


class NewsTicker:
    """Location-change feed for the news ticker."""

    def __init__(self):
        self.visited: list[str] = []

    def on_location_change(self, location_id: str) -> None:
        self.visited.append(location_id)


class DockingSync:
    """Keeps the live simulation of the docking location in step with the game.

    The simulation only runs while the player is docked there. On arrival it
    catches up on the days that passed while away.
    """

    def __init__(self):
        self.live = False
        self.synced_day: int | None = None

    def stop_local_live_loop(self) -> None:
        self.live = False
        logger.debug("Docking live loop stopped")

    def catch_up_days(self, day: int) -> None:
        if self.synced_day is not None and day > self.synced_day:
            logger.debug(f"Docking simulation catching up {day - self.synced_day} days")
        self.synced_day = day

    def start_local_live_loop(self) -> None:
        self.live = True
        logger.debug("Docking live loop started")


@dataclass
class Collaborators:
    """Everything the travel engine notifies, bundled for injection."""

    clock: Any  # advance_days(n)
    presentation: Presentation = field(default_factory=Presentation)
    missions: MissionService = field(default_factory=MissionService)
    ticker: NewsTicker = field(default_factory=NewsTicker)
    docking: DockingSync | None = None  # Optional; None disables docking sync

    @classmethod
    def for_game(cls, game: Game, **overrides: Any) -> "Collaborators":
        """Default collaborators bound to a game, with optional overrides."""
        overrides.setdefault("clock", GameClock(game))
        return cls(**overrides)
