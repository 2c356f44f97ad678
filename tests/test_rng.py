"""Tests for the seeded RNG wrapper."""

from starlane.utils import GameRNG


def test_same_seed_same_sequence():
    a, b = GameRNG(123), GameRNG(123)
    assert [a.randint(1, 50) for _ in range(20)] == [b.randint(1, 50) for _ in range(20)]


def test_state_round_trip():
    rng = GameRNG(5)
    rng.random()
    state = rng.get_state()
    first = [rng.random() for _ in range(3)]
    rng.set_state(state)
    assert [rng.random() for _ in range(3)] == first


def test_weighted_choice_respects_zero_weight():
    rng = GameRNG(9)
    picks = {rng.weighted_choice(["a", "b", "c"], [1, 0, 3]) for _ in range(200)}
    assert picks == {"a", "c"}


def test_weighted_choice_all_zero():
    assert GameRNG(1).weighted_choice(["x", "y"], [0, 0]) == "x"


def test_chance_bounds():
    rng = GameRNG(3)
    assert not any(rng.chance(0.0) for _ in range(50))
    assert all(rng.chance(1.0) for _ in range(50))
