"""Tests for brew roll resolution."""

import pytest
from herbalism import InvalidArgument, PairedEffect, RecipeType, resolve_brew, roll_brews


class TestRollBrews:
    def test_one_roll_per_unit(self, scripted):
        rolls = roll_brews(3, 1, 15, scripted([14, 2, 20]))
        assert [r.total for r in rolls] == [15, 3, 21]
        assert [r.success for r in rolls] == [True, False, True]

    def test_zero_units_rejected(self):
        with pytest.raises(InvalidArgument):
            roll_brews(0, 0, 15)


class TestResolveBrew:
    def test_success_builds_brewed_item(self, scripted, steam_tonic):
        outcome = resolve_brew(
            [PairedEffect(recipe=steam_tonic, count=2)], {}, 1, 0, 15, scripted([15])
        )
        assert outcome.success_count == 1
        assert outcome.type is RecipeType.ELIXIR
        assert outcome.description == "Heals 4 hit points."
        assert outcome.brewed is not None
        assert outcome.brewed.quantity == 1
        assert outcome.brewed.effects == ("Steam Tonic", "Steam Tonic")

    def test_failure_builds_nothing(self, scripted, steam_tonic):
        outcome = resolve_brew([PairedEffect(recipe=steam_tonic)], {}, 1, 0, 15, scripted([14]))
        assert outcome.success_count == 0
        assert outcome.description is None
        assert outcome.brewed is None
        assert outcome.type is RecipeType.ELIXIR

    def test_batch_quantity_is_success_count(self, scripted, scorch_bomb):
        outcome = resolve_brew(
            [PairedEffect(recipe=scorch_bomb)],
            {"damage": "fire"},
            4,
            3,
            15,
            scripted([12, 11, 1, 19]),
        )
        assert len(outcome.rolls) == 4
        assert outcome.success_count == 2
        assert outcome.brewed is not None
        assert outcome.brewed.quantity == 2
        assert outcome.brewed.choices == {"damage": "fire"}
        assert outcome.description == "Deals 1d6 fire damage."

    def test_nothing_to_brew(self):
        with pytest.raises(InvalidArgument, match="Nothing to brew"):
            resolve_brew([], {}, 1, 0, 15)

    def test_mixed_types_rejected(self, steam_tonic, scorch_bomb):
        with pytest.raises(InvalidArgument, match="Cannot mix"):
            resolve_brew(
                [PairedEffect(recipe=steam_tonic), PairedEffect(recipe=scorch_bomb)],
                {},
                1,
                0,
                15,
            )
