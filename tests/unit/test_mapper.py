"""Unit tests for mapping parsed model output to validated records."""

import json
from unittest.mock import patch

from recipe_assistant.mapping.recipes import (
    MappedRecipe,
    RejectedRecipe,
    generate_recipe_id,
    map_recipe,
    map_recipes,
    map_substitutions,
)
from recipe_assistant.utils.result import ErrorKind


class TestGenerateRecipeId:
    def test_ids_are_short_and_distinct(self):
        ids = {generate_recipe_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(len(recipe_id) == 12 for recipe_id in ids)


class TestMapRecipe:
    """Test mapping a single raw recipe."""

    def test_valid_recipe_gets_id(self, raw_recipe):
        outcome = map_recipe(raw_recipe(), "id-1")

        assert isinstance(outcome, MappedRecipe)
        assert outcome.recipe.id == "id-1"
        assert outcome.recipe.name == "Garlic Chicken Rice Bowl"

    def test_model_supplied_id_ignored(self, raw_recipe):
        outcome = map_recipe(raw_recipe(id="from-model"), "local-id")
        assert outcome.recipe.id == "local-id"

    def test_missing_field_rejected(self, raw_recipe):
        raw = raw_recipe()
        del raw["nutrition"]

        outcome = map_recipe(raw, "id-1", index=2)

        assert isinstance(outcome, RejectedRecipe)
        assert outcome.index == 2
        assert outcome.name == "Garlic Chicken Rice Bowl"
        assert any(error["field"] == "nutrition" for error in outcome.errors)

    def test_wrong_scalar_type_rejected(self, raw_recipe):
        outcome = map_recipe(raw_recipe(servings="four"), "id-1")

        assert isinstance(outcome, RejectedRecipe)
        assert outcome.errors[0]["field"] == "servings"

    def test_empty_instructions_rejected(self, raw_recipe):
        outcome = map_recipe(raw_recipe(instructions=[]), "id-1")

        assert isinstance(outcome, RejectedRecipe)
        assert outcome.errors[0]["field"] == "instructions"

    def test_non_object_rejected(self):
        outcome = map_recipe("just a string", "id-1")

        assert isinstance(outcome, RejectedRecipe)
        assert outcome.errors[0]["message"] == "Recipe must be an object, got str"


class TestMapRecipes:
    """Test batch mapping policy."""

    def test_all_valid(self, raw_recipe):
        result = map_recipes([raw_recipe(), raw_recipe(name="Second"), raw_recipe(name="Third")])

        assert result.ok
        assert [recipe.name for recipe in result.value.recipes] == ["Garlic Chicken Rice Bowl", "Second", "Third"]
        assert result.value.rejected == []

    def test_ids_distinct_within_batch(self, raw_recipe):
        result = map_recipes([raw_recipe() for _ in range(3)])
        assert len({recipe.id for recipe in result.value.recipes}) == 3

    def test_ids_distinct_even_if_generator_repeats(self, raw_recipe):
        with patch(
            "recipe_assistant.mapping.recipes.generate_recipe_id",
            side_effect=["same", "same", "other"],
        ):
            result = map_recipes([raw_recipe(), raw_recipe()])

        assert [recipe.id for recipe in result.value.recipes] == ["same", "other"]

    def test_invalid_recipe_dropped_whole(self, raw_recipe):
        broken = raw_recipe(name="Broken")
        del broken["instructions"]

        result = map_recipes([raw_recipe(), broken])

        assert result.ok
        assert len(result.value.recipes) == 1
        assert result.value.rejected[0].index == 1
        assert result.value.rejected[0].name == "Broken"

    def test_empty_batch_is_ok(self):
        result = map_recipes([])

        assert result.ok
        assert result.value.recipes == []

    def test_all_invalid_is_parsing_error(self):
        result = map_recipes([{"name": "Only a name"}, 42])

        assert not result.ok
        assert result.kind == ErrorKind.PARSING
        assert [detail["index"] for detail in result.details] == [0, 1]


class TestMapSubstitutions:
    """Test substitution mapping with the same drop-invalid policy."""

    def test_valid_payload(self, substitution_completion):
        result = map_substitutions(json.loads(substitution_completion))

        assert result.ok
        alternative = result.value.substitutions[0].alternatives[0]
        assert alternative.substitute == "olive oil"
        assert alternative.dietary_tags == ("vegan", "dairy-free")
        assert result.value.general_tips == ("Taste as you go",)

    def test_invalid_entry_dropped(self):
        payload = {
            "substitutions": [
                {"original": "butter", "alternatives": []},
                {"original": "eggs"},
            ]
        }
        result = map_substitutions(payload)

        assert result.ok
        assert [s.original for s in result.value.substitutions] == ["butter"]

    def test_all_invalid_is_parsing_error(self):
        result = map_substitutions({"substitutions": [{"alternatives": "none"}]})

        assert not result.ok
        assert result.kind == ErrorKind.PARSING

    def test_malformed_tips_ignored(self):
        result = map_substitutions({"substitutions": [], "generalTips": "not a list"})

        assert result.ok
        assert result.value.general_tips == ()
