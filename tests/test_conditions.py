"""Tests for event conditions, dynamic values and outcome selection."""

import pytest

from conftest import ScriptedRNG, build_game, suspend_trip
from starlane.engine.conditions import (
    DEFAULT_TRIP_DURATION,
    ConditionEvaluator,
    compare,
    resolve_value,
    select_outcome,
)
from starlane.models import Condition, ConditionKind, DynamicValue, Outcome, Vessel


class TestResolveValue:
    def test_plain_values_pass_through(self, game):
        assert resolve_value(15, game) == 15
        assert resolve_value("mars", game) == "mars"

    def test_scales_with_max_fuel(self, game):
        value = DynamicValue(base=0, scale_with="MAX_FUEL", factor=-0.25)
        assert resolve_value(value, game) == -50

    def test_floor(self, game):
        game.player.credits = 999
        value = DynamicValue(base=1, scale_with="PLAYER_CREDITS", factor=0.01)
        # 1 + 9.99
        assert resolve_value(value, game) == 10

    def test_current_values(self):
        game = build_game(fuel=60, health=40)
        assert resolve_value(DynamicValue(scale_with="CURRENT_FUEL"), game) == 60
        assert resolve_value(DynamicValue(scale_with="CURRENT_HULL"), game) == 40
        assert resolve_value(DynamicValue(scale_with="MAX_HULL"), game) == 100
        assert resolve_value(DynamicValue(scale_with="CARGO_CAPACITY"), game) == 10

    def test_trip_duration(self, game):
        value = DynamicValue(scale_with="TRIP_DURATION", factor=2)
        assert resolve_value(value, game) == DEFAULT_TRIP_DURATION * 2

        suspend_trip(game, base_time=10)
        assert resolve_value(value, game) == 20

    def test_ship_class_scalar(self):
        big = Vessel(id="big", name="Big", max_fuel=10, max_health=250, cargo_capacity=1)
        game = build_game(vessels=[big], vessel_id="big")
        value = DynamicValue(base=100, scale_with="SHIP_CLASS_SCALAR", factor=100)
        assert resolve_value(value, game) == 350

        small = Vessel(id="small", name="Small", max_fuel=10, max_health=50, cargo_capacity=1)
        game = build_game(vessels=[small], vessel_id="small")
        assert resolve_value(value, game) == 200

    def test_unknown_scaler_counts_as_zero(self, game):
        value = DynamicValue(base=5, scale_with="MOON_PHASE", factor=3)
        assert resolve_value(value, game) == 5


class TestCompare:
    @pytest.mark.parametrize(
        "current,operator,threshold,expected",
        [
            (5, "GT", 4, True),
            (5, "GT", 5, False),
            (5, "GTE", 5, True),
            (4, "LT", 5, True),
            (5, "LTE", 5, True),
            ("mars", "EQ", "mars", True),
            ("mars", "NEQ", "earth", True),
            ("mars", "IN", ("earth", "mars"), True),
            ("venus", "IN", ("earth", "mars"), False),
            ("mars", "IN", "mars", False),
        ],
    )
    def test_operators(self, current, operator, threshold, expected):
        assert compare(current, operator, threshold) is expected

    def test_unknown_operator_fails(self):
        assert compare(5, "ABOUT", 5) is False

    def test_type_mismatch_fails(self):
        assert compare("mars", "GT", 3) is False


class TestConditionEvaluator:
    def setup_method(self):
        self.evaluator = ConditionEvaluator()

    def test_has_fuel(self):
        game = build_game(fuel=60)
        assert self.evaluator.evaluate(Condition(ConditionKind.HAS_FUEL, "GTE", 50), game)
        assert not self.evaluator.evaluate(Condition(ConditionKind.HAS_FUEL, "GTE", 61), game)

    def test_has_credits_dynamic(self, game):
        game.player.credits = 100
        condition = Condition(
            ConditionKind.HAS_CREDITS, "GTE", DynamicValue(base=0, scale_with="MAX_FUEL", factor=1)
        )
        assert not self.evaluator.evaluate(condition, game)
        game.player.credits = 200
        assert self.evaluator.evaluate(condition, game)

    def test_has_cargo_space(self, game):
        game.player.active_inventory()["ore"] = 7
        assert self.evaluator.evaluate(Condition(ConditionKind.HAS_CARGO_SPACE, "GTE", 3), game)
        assert not self.evaluator.evaluate(Condition(ConditionKind.HAS_CARGO_SPACE, "GTE", 4), game)

    def test_has_item(self, game):
        condition = Condition(ConditionKind.HAS_ITEM, "GTE", 1, target="ore")
        assert not self.evaluator.evaluate(condition, game)
        game.player.active_inventory()["ore"] = 1
        assert self.evaluator.evaluate(condition, game)

    def test_has_perk_and_attribute(self, game):
        assert self.evaluator.evaluate(
            Condition(ConditionKind.HAS_PERK, "EQ", 0, target="navigator"), game
        )
        game.player.active_perks.add("navigator")
        assert self.evaluator.evaluate(
            Condition(ConditionKind.HAS_PERK, "EQ", 1, target="navigator"), game
        )
        assert not self.evaluator.evaluate(
            Condition(ConditionKind.HAS_ATTRIBUTE, "EQ", 1, target="ATTR_FAST"), game
        )

    def test_location_is(self, game):
        assert self.evaluator.evaluate(
            Condition(ConditionKind.LOCATION_IS, "IN", ("earth", "luna")), game
        )
        assert not self.evaluator.evaluate(Condition(ConditionKind.LOCATION_IS, "EQ", "mars"), game)

    def test_rng_roll_draws_each_time(self):
        game = build_game(rng=ScriptedRNG([0.2, 0.7]))
        condition = Condition(ConditionKind.RNG_ROLL, value=0.5)
        assert self.evaluator.evaluate(condition, game)
        assert not self.evaluator.evaluate(condition, game)

    def test_no_vessel(self, game):
        game.player.remove_vessel("scout")
        assert not self.evaluator.evaluate(Condition(ConditionKind.HAS_CARGO_SPACE, "GTE", 0), game)
        assert not self.evaluator.evaluate(Condition(ConditionKind.HAS_FUEL, "GT", 0), game)

    def test_check_all(self, game):
        assert self.evaluator.check_all([], game)
        conditions = [
            Condition(ConditionKind.HAS_FUEL, "GTE", 1),
            Condition(ConditionKind.HAS_CREDITS, "GTE", 1),
        ]
        assert not self.evaluator.check_all(conditions, game)
        game.player.credits = 1
        assert self.evaluator.check_all(conditions, game)


class TestSelectOutcome:
    def test_weighted(self):
        outcomes = [Outcome(id="a", text="A", weight=60), Outcome(id="b", text="B", weight=40)]
        assert select_outcome(outcomes, build_game(rng=ScriptedRNG([0.5]))).id == "a"
        assert select_outcome(outcomes, build_game(rng=ScriptedRNG([0.7]))).id == "b"

    def test_all_zero_weights_fall_back_to_first(self, game):
        outcomes = [Outcome(id="a", text="A", weight=0), Outcome(id="b", text="B", weight=0)]
        assert select_outcome(outcomes, game).id == "a"
