"""Game clock: the only way simulated days pass."""

import logging

from ..models.game import Game
from ..models.vessel import clamp
from .modifiers import passive_repair_rate

logger = logging.getLogger(__name__)


class GameClock:
    """Advances the day counter and runs per-day upkeep.

    Per-day upkeep is limited to passive hull repair from installed upgrades;
    the full calendar simulation lives outside the travel engine.
    """

    def __init__(self, game: Game):
        self.game = game

    def advance_days(self, days: int) -> None:
        """Advance the clock.

        Args:
            days: Number of days to pass (0 is allowed, negative is not)

        Raises:
            ValueError: If days is negative
        """
        if days < 0:
            raise ValueError(f"Cannot advance clock by {days} days")
        for _ in range(days):
            self.game.day += 1
            self._passive_repair()
        if days:
            logger.debug(f"Clock advanced {days} days to day {self.game.day}")

    def _passive_repair(self) -> None:
        vessel, state = self.game.active_vessel(), self.game.active_state()
        if vessel is None or state is None or state.health <= 0:
            return
        rate = passive_repair_rate(self.game)
        if rate > 0:
            state.health = clamp(state.health + vessel.max_health * rate, vessel.max_health)
