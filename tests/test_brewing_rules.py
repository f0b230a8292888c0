"""Unit tests for the brew workflow guard functions."""

from herbalism import InventoryItem, PairedEffect, SelectedRecipe, TemplateVariable
from herbalism.brewing.rules import (
    check_add_herb,
    check_choices,
    check_herb_selection,
    check_pairing,
    check_recipe_herbs,
    check_recipe_selection,
    scaled_herb_cap,
)


class TestHerbGuards:
    def test_scaled_cap(self):
        assert scaled_herb_cap(6) == 6
        assert scaled_herb_cap(6, 3) == 18
        assert scaled_herb_cap(6, 0) == 6

    def test_add_herb_ok(self, emberroot):
        item = InventoryItem(id=1, herb=emberroot, quantity=2)
        assert check_add_herb(item, 1, 1, 6) == []

    def test_add_unknown_herb(self):
        assert check_add_herb(None, 0, 0, 6) == ["Herb is not in the inventory"]

    def test_add_beyond_quantity(self, emberroot):
        item = InventoryItem(id=1, herb=emberroot, quantity=2)
        assert check_add_herb(item, 2, 2, 6) == ["No more Emberroot available (2 held)"]

    def test_add_beyond_cap(self, emberroot):
        item = InventoryItem(id=1, herb=emberroot, quantity=9)
        assert check_add_herb(item, 0, 6, 6) == ["Herb limit reached (6 per brew)"]

    def test_selection_bounds(self):
        assert check_herb_selection(0, 6) == ["Select at least one herb"]
        assert check_herb_selection(1, 6) == []
        assert check_herb_selection(6, 6) == []
        assert check_herb_selection(7, 6) == ["Too many herbs selected: 7/6"]


class TestPairingGuard:
    def test_no_effects(self):
        assert check_pairing([]) == ["Pair elements into at least one effect"]

    def test_mixed_effects(self, steam_tonic, scorch_bomb):
        errors = check_pairing(
            [PairedEffect(recipe=steam_tonic), PairedEffect(recipe=scorch_bomb)]
        )
        assert errors == ["Cannot mix bomb and elixir effects in one brew"]

    def test_valid(self, steam_tonic):
        assert check_pairing([PairedEffect(recipe=steam_tonic, count=2)]) == []


class TestChoiceGuard:
    def test_missing_choices_listed(self):
        required = [
            TemplateVariable(name="damage", options=("fire", "acid")),
            TemplateVariable(name="target"),
        ]
        assert check_choices(required, {}) == [
            "Choose a damage: one of fire, acid",
            "Enter a value for target",
        ]

    def test_all_made(self):
        required = [TemplateVariable(name="damage", options=("fire", "acid"))]
        assert check_choices(required, {"damage": "fire"}) == []


class TestRecipeGuards:
    def test_needs_a_recipe(self):
        assert check_recipe_selection([]) == ["Select at least one recipe"]

    def test_mixed_recipe_types(self, steam_tonic, scorch_bomb):
        errors = check_recipe_selection(
            [SelectedRecipe(recipe=steam_tonic), SelectedRecipe(recipe=scorch_bomb)]
        )
        assert errors == ["Cannot mix bomb and elixir effects in one brew"]

    def test_herbs_cover_single_brew(self, steam_tonic, emberroot):
        errors = check_recipe_herbs([SelectedRecipe(recipe=steam_tonic)], 1, [(emberroot, 1)], 6)
        assert errors == []

    def test_stacked_recipe_needs_more_elements(self, steam_tonic, emberroot):
        errors = check_recipe_herbs(
            [SelectedRecipe(recipe=steam_tonic, count=2)], 1, [(emberroot, 1)], 6
        )
        assert errors == ["Not enough fire: 1/2", "Not enough water: 1/2"]

    def test_batch_fails_on_elements_and_instances(self, flame_draught, ashpetal):
        # one herb with two fire tags, three brews of a fire+fire recipe
        errors = check_recipe_herbs([SelectedRecipe(recipe=flame_draught)], 3, [(ashpetal, 1)], 18)
        assert "Not enough fire: 2/6" in errors
        assert "Need 3 herbs carrying fire for 3 brews, have 1" in errors

    def test_batch_fails_on_instances_alone(self, flame_draught, sunblaze):
        # six fire tags cover the element count, but one herb cannot split into three brews
        errors = check_recipe_herbs([SelectedRecipe(recipe=flame_draught)], 3, [(sunblaze, 1)], 18)
        assert errors == ["Need 3 herbs carrying fire for 3 brews, have 1"]

    def test_batch_passes_with_enough_instances(self, flame_draught, ashpetal):
        errors = check_recipe_herbs([SelectedRecipe(recipe=flame_draught)], 3, [(ashpetal, 3)], 18)
        assert errors == []

    def test_herb_cap_applies(self, steam_tonic, emberroot):
        errors = check_recipe_herbs([SelectedRecipe(recipe=steam_tonic)], 1, [(emberroot, 7)], 6)
        assert errors == ["Too many herbs selected: 7/6"]

    def test_no_herbs(self, steam_tonic):
        errors = check_recipe_herbs([SelectedRecipe(recipe=steam_tonic)], 1, [], 6)
        assert errors[0] == "Select at least one herb"
