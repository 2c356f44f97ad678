"""Tests for event effect handlers."""

from conftest import ScriptedRNG, build_game, suspend_trip
from starlane.engine.effects import EFFECT_HANDLERS, apply_effect
from starlane.models import DynamicValue, Effect, EffectKind


def test_every_kind_has_a_handler():
    assert set(EFFECT_HANDLERS) == set(EffectKind)


class TestResourceEffects:
    def test_credits(self, game):
        game.player.credits = 100
        applied = apply_effect(game, Effect(EffectKind.CREDITS, 250))
        assert game.player.credits == 350
        assert applied.value == 250

    def test_credits_floor_at_zero(self, game):
        game.player.credits = 100
        applied = apply_effect(game, Effect(EffectKind.CREDITS, -10000))
        assert game.player.credits == 0
        assert applied.value == -100

    def test_fuel_clamped(self):
        game = build_game(fuel=190)
        apply_effect(game, Effect(EffectKind.FUEL, 50))
        assert game.active_state().fuel == 200

        apply_effect(game, Effect(EffectKind.FUEL, -500))
        assert game.active_state().fuel == 0

    def test_fuel_dynamic(self, game):
        applied = apply_effect(
            game, Effect(EffectKind.FUEL, DynamicValue(base=0, scale_with="MAX_FUEL", factor=-0.25))
        )
        assert game.active_state().fuel == 150
        assert applied.value == -50

    def test_hull_resistance_reduces_damage(self, game):
        game.active_state().upgrades = ["plating"]
        apply_effect(game, Effect(EffectKind.HULL, -20))
        assert game.active_state().health == 90

    def test_hull_repair_ignores_resistance(self):
        game = build_game(health=50)
        game.active_state().upgrades = ["plating"]
        apply_effect(game, Effect(EffectKind.HULL, 20))
        assert game.active_state().health == 70

    def test_hull_clamped_at_zero(self):
        game = build_game(health=5)
        apply_effect(game, Effect(EffectKind.HULL, -40))
        assert game.active_state().health == 0

    def test_no_vessel(self, game):
        game.player.remove_vessel("scout")
        applied = apply_effect(game, Effect(EffectKind.FUEL, 10))
        assert not applied.applied


class TestCargoEffects:
    def test_add_item(self, game):
        applied = apply_effect(game, Effect(EffectKind.ADD_ITEM, 4, target="ore"))
        assert game.player.active_inventory() == {"ore": 4}
        assert applied.applied
        assert applied.note == "+4 Ore"

    def test_add_item_hold_full(self, game):
        game.player.active_inventory()["ore"] = 8
        applied = apply_effect(game, Effect(EffectKind.ADD_ITEM, 5, target="ore"))
        assert game.player.active_inventory() == {"ore": 8}
        assert not applied.applied
        assert applied.note == "Cargo hold full! Abandoned 5x Ore."

    def test_add_unknown_item(self, game):
        applied = apply_effect(game, Effect(EffectKind.ADD_ITEM, 1, target="unobtainium"))
        assert not applied.applied
        assert game.player.active_inventory() == {}

    def test_remove_item_rounds_up(self, game):
        game.player.active_inventory()["ore"] = 5
        applied = apply_effect(game, Effect(EffectKind.REMOVE_ITEM, 2.2, target="ore"))
        assert applied.value == 3
        assert game.player.active_inventory() == {"ore": 2}

    def test_remove_more_than_held(self, game):
        game.player.active_inventory()["ore"] = 2
        applied = apply_effect(game, Effect(EffectKind.REMOVE_ITEM, 999, target="ore"))
        assert applied.value == 2
        assert "ore" not in game.player.active_inventory()

    def test_lose_cargo_percent(self, game):
        game.player.active_inventory()["ore"] = 10
        applied = apply_effect(game, Effect(EffectKind.LOSE_CARGO_PERCENT, 0.25))
        # ceil(2.5)
        assert applied.value == 3
        assert applied.target == "ore"
        assert game.player.active_inventory() == {"ore": 7}

    def test_lose_cargo_picks_one_stack(self):
        game = build_game(rng=ScriptedRNG(seed=7))
        inventory = game.player.active_inventory()
        inventory.update({"ore": 4, "folded_drive": 4})
        apply_effect(game, Effect(EffectKind.LOSE_CARGO_PERCENT, 1.0))
        assert len(inventory) == 1

    def test_lose_cargo_empty_hold(self, game):
        applied = apply_effect(game, Effect(EffectKind.LOSE_CARGO_PERCENT, 0.5))
        assert not applied.applied
        assert applied.note == "Nothing to lose"


class TestTravelEffects:
    def test_skipped_without_pending_trip(self, game):
        for kind in (
            EffectKind.TRAVEL_TIME,
            EffectKind.TRAVEL_TIME_PERCENT,
            EffectKind.SET_TRAVEL_TIME,
            EffectKind.TRAVEL_FUEL,
            EffectKind.HULL_DAMAGE_PERCENT,
            EffectKind.CHAIN_EVENT,
        ):
            assert not apply_effect(game, Effect(kind, 1)).applied

    def test_modifiers_accumulate(self, game):
        pending = suspend_trip(game)
        apply_effect(game, Effect(EffectKind.TRAVEL_TIME, 2.5))
        apply_effect(game, Effect(EffectKind.TRAVEL_TIME, 1))
        apply_effect(game, Effect(EffectKind.TRAVEL_TIME_PERCENT, 0.5))
        apply_effect(game, Effect(EffectKind.TRAVEL_FUEL, 20))
        apply_effect(game, Effect(EffectKind.HULL_DAMAGE_PERCENT, 15))

        modifiers = pending.modifiers
        assert modifiers.travel_time_add == 4
        assert modifiers.travel_time_percent == 0.5
        assert modifiers.fuel_cost_add == 20
        assert modifiers.hull_damage_percent == 15
        assert modifiers.set_travel_time is None

    def test_set_travel_time(self, game):
        pending = suspend_trip(game)
        apply_effect(game, Effect(EffectKind.SET_TRAVEL_TIME, -3))
        assert pending.modifiers.set_travel_time == 0

    def test_trip_duration_scaling(self, game):
        pending = suspend_trip(game, base_time=12)
        apply_effect(
            game,
            Effect(
                EffectKind.TRAVEL_TIME,
                DynamicValue(base=0, scale_with="TRIP_DURATION", factor=0.5),
            ),
        )
        assert pending.modifiers.travel_time_add == 6

    def test_chain_event(self, game):
        pending = suspend_trip(game)
        apply_effect(game, Effect(EffectKind.CHAIN_EVENT))
        assert pending.modifiers.force_event

    def test_redirect(self, game):
        pending = suspend_trip(game, destination_id="mars", base_time=10)
        applied = apply_effect(game, Effect(EffectKind.REDIRECT_TRAVEL, target="belt"))
        assert applied.applied
        assert pending.destination_id == "belt"
        assert pending.base_time == 20

    def test_redirect_unknown_location(self, game):
        pending = suspend_trip(game)
        applied = apply_effect(game, Effect(EffectKind.REDIRECT_TRAVEL, target="atlantis"))
        assert not applied.applied
        assert pending.destination_id == "mars"

    def test_redirect_without_route(self, game):
        pending = suspend_trip(game)
        applied = apply_effect(game, Effect(EffectKind.REDIRECT_TRAVEL, target="pluto"))
        assert not applied.applied
        assert pending.destination_id == "mars"
        assert pending.base_time == 10
