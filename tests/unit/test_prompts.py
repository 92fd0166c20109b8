"""Unit tests for prompt construction."""

import json

from recipe_assistant.models.models import DietaryFilter
from recipe_assistant.prompts.prompts import (
    NO_PROSE_CLAUSE,
    RECIPE_JSON_SHAPE,
    SUBSTITUTION_JSON_SHAPE,
    build_recipe_prompt,
    build_substitution_prompt,
)


class TestRecipePrompt:
    """Test the recipe-generation prompt."""

    def test_prompt_is_deterministic(self):
        args = (["chicken", "rice"], [DietaryFilter.VEGAN], 2)
        assert build_recipe_prompt(*args) == build_recipe_prompt(*args)

    def test_ingredients_included_verbatim_in_order(self):
        prompt = build_recipe_prompt(["chicken", "rice", "broccoli"])
        assert "these available ingredients: chicken, rice, broccoli." in prompt

    def test_asks_for_three_recipes(self):
        assert "Generate 3 diverse recipe suggestions" in build_recipe_prompt(["a", "b"])

    def test_dietary_line_only_with_filters(self):
        without = build_recipe_prompt(["tofu", "rice"])
        with_filters = build_recipe_prompt(["tofu", "rice"], [DietaryFilter.VEGAN, DietaryFilter.GLUTEN_FREE])

        assert "Must comply with" not in without
        assert "- Must comply with: vegan, gluten-free dietary requirements" in with_filters

    def test_plain_string_filters_accepted(self):
        prompt = build_recipe_prompt(["tofu", "rice"], ["keto"])
        assert "Must comply with: keto" in prompt

    def test_servings_embedded(self):
        prompt = build_recipe_prompt(["a", "b"], servings=6)

        assert "(6 servings total)" in prompt
        assert '"servings": 6,' in prompt

    def test_ends_with_no_prose_clause(self):
        assert build_recipe_prompt(["a", "b"]).endswith(NO_PROSE_CLAUSE)

    def test_json_shape_is_valid_json(self):
        """Test that the embedded example is itself parseable."""
        shape = json.loads(RECIPE_JSON_SHAPE.format(servings=4))
        recipe = shape["recipes"][0]

        assert set(recipe) == {
            "name",
            "description",
            "cuisine",
            "prepTime",
            "cookTime",
            "totalTime",
            "difficulty",
            "servings",
            "ingredients",
            "instructions",
            "nutrition",
            "substitutions",
            "tags",
            "tips",
        }
        assert isinstance(recipe["nutrition"]["calories"], int)


class TestSubstitutionPrompt:
    """Test the ingredient-substitution prompt."""

    def test_ingredients_included(self):
        prompt = build_substitution_prompt(["butter", "eggs"])
        assert "the following ingredients: butter, eggs." in prompt

    def test_context_omitted_without_details(self):
        assert "Context:" not in build_substitution_prompt(["butter"])

    def test_context_lines(self):
        prompt = build_substitution_prompt(["butter"], ["vegan"], recipe_name="Cookies", recipe_type="baking")

        assert "- Recipe: Cookies" in prompt
        assert "- Recipe Type: baking" in prompt
        assert "- Dietary Requirements: vegan" in prompt

    def test_ends_with_no_prose_clause(self):
        assert build_substitution_prompt(["butter"]).endswith(NO_PROSE_CLAUSE)

    def test_json_shape_is_valid_json(self):
        shape = json.loads(SUBSTITUTION_JSON_SHAPE)

        assert "generalTips" in shape
        assert shape["substitutions"][0]["alternatives"][0]["ratio"] == "1:1"
