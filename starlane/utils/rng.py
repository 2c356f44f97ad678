"""Seedable RNG wrapper for deterministic gameplay."""

import random
from collections.abc import Sequence


class GameRNG:
    """Wrapper around Python's random.Random for deterministic game behavior.

    All randomness in the game (event roll, event selection, outcome draw,
    probabilistic traits, cargo loss) goes through this class, so a fixed seed
    or a stubbed instance reproduces a trip exactly.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence."""
        return self.rng.choice(seq)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self.rng.random()

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def weighted_choice(self, items: Sequence, weights: Sequence[float]):
        """Pick one item with probability proportional to its weight.

        Falls back to the first item when every weight is zero.

        Args:
            items: Non-empty sequence of candidates
            weights: Non-negative weight per candidate

        Returns:
            The selected item
        """
        total = sum(weights)
        if total <= 0:
            return items[0]
        roll = self.random() * total
        for item, weight in zip(items, weights):
            if roll < weight:
                return item
            roll -= weight
        return items[-1]

    def get_state(self):
        """Get the current state of the RNG for serialization."""
        return self.rng.getstate()

    def set_state(self, state):
        """Set the state of the RNG for deserialization."""
        self.rng.setstate(state)
