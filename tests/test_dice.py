"""Tests for dice rolling, the quantity table and weighted sampling."""

import random
from collections import Counter

import pytest
from herbalism import InvalidArgument, resolve_check, roll_die, roll_quantity, weighted_sample
from herbalism.helpers import default_rng, roll_d4, roll_d20
from herbalism.models import TableRoll


class TestRollDie:
    def test_within_bounds(self):
        rng = random.Random(7)
        rolls = {roll_die(6, rng) for _ in range(500)}
        assert rolls == {1, 2, 3, 4, 5, 6}

    def test_one_sided_die(self):
        assert roll_die(1, random.Random(1)) == 1

    def test_zero_sides_rejected(self):
        with pytest.raises(InvalidArgument):
            roll_die(0)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            roll_die(-3)

    def test_default_source_is_system_random(self):
        assert isinstance(default_rng(), random.SystemRandom)
        assert 1 <= roll_d20() <= 20
        assert 1 <= roll_d4() <= 4

    def test_seeded_rolls_repeat(self):
        first = [roll_d20(random.Random(99)) for _ in range(3)]
        second = [roll_d20(random.Random(99)) for _ in range(3)]
        assert first == second


class TestResolveCheck:
    def test_success_at_dc(self, scripted):
        check = resolve_check(2, 15, scripted([13]))
        assert check.die == 13
        assert check.total == 15
        assert check.success is True

    def test_failure_below_dc(self, scripted):
        check = resolve_check(2, 15, scripted([12]))
        assert check.total == 14
        assert check.success is False

    def test_negative_modifier(self, scripted):
        check = resolve_check(-1, 13, scripted([20]))
        assert check.total == 19
        assert check.modifier == -1
        assert check.dc == 13

    def test_custom_die(self, scripted):
        check = resolve_check(0, 5, scripted([6]), sides=6)
        assert check.success


class TestQuantityTable:
    def test_low_roll_gives_one_herb(self, scripted):
        qty = roll_quantity(scripted([10]))
        assert qty.total == 1
        assert qty.rolls == (TableRoll(d20=10, herbs=1),)
        assert qty.describe() == ["d20: 10 → 1 herb"]

    def test_eleven_to_fifteen_rolls_d4(self, scripted):
        qty = roll_quantity(scripted([11, 3]))
        assert qty.total == 3
        assert qty.rolls[0].d4 == 3
        assert qty.rolls[0].bonus == 0
        assert qty.describe() == ["d20: 11 → 1d4 = 3 herbs"]

    def test_sixteen_to_eighteen_adds_one(self, scripted):
        qty = roll_quantity(scripted([17, 3]))
        assert qty.total == 4
        assert qty.describe() == ["d20: 17 → 1d4+1 = 3+1 = 4 herbs"]

    def test_nineteen_adds_two(self, scripted):
        qty = roll_quantity(scripted([19, 4]))
        assert qty.total == 6

    def test_twenty_rolls_twice_more(self, scripted):
        rng = scripted([20, 5, 12, 2])
        qty = roll_quantity(rng)
        assert qty.total == 3
        assert len(qty.rolls) == 3
        assert qty.rolls[0].reroll is True
        assert qty.rolls[0].herbs == 0
        assert qty.describe()[0] == "d20: 20 → Roll twice more!"
        assert rng.remaining == []

    def test_twenties_chain(self, scripted):
        rng = scripted([20, 20, 1, 1, 1])
        qty = roll_quantity(rng)
        assert qty.total == 3
        assert len(qty.rolls) == 5
        assert rng.remaining == []

    def test_total_is_sum_of_rolls(self):
        rng = random.Random(3)
        for _ in range(200):
            qty = roll_quantity(rng)
            assert qty.total == sum(r.herbs for r in qty.rolls)
            assert qty.total >= 1


class TestWeightedSample:
    def test_proportional_to_weight(self):
        rng = random.Random(1234)
        counts = Counter(weighted_sample([("a", 1), ("b", 3)], rng) for _ in range(10_000))
        ratio = counts["b"] / counts["a"]
        assert 2.7 < ratio < 3.3

    def test_zero_weight_never_chosen(self):
        rng = random.Random(5)
        picks = {weighted_sample([("a", 0), ("b", 1), ("c", -2)], rng) for _ in range(500)}
        assert picks == {"b"}

    def test_single_entry(self):
        assert weighted_sample([("only", 4)], random.Random(0)) == "only"

    def test_empty_rejected(self):
        with pytest.raises(InvalidArgument):
            weighted_sample([])

    def test_all_zero_rejected(self):
        with pytest.raises(InvalidArgument):
            weighted_sample([("a", 0), ("b", 0)])

    def test_with_replacement(self):
        rng = random.Random(8)
        picks = [weighted_sample([("a", 1), ("b", 1)], rng) for _ in range(50)]
        assert picks.count("a") + picks.count("b") == 50
        assert picks.count("a") > 1
        assert picks.count("b") > 1
