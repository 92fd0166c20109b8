"""Shared fixtures for unit tests: sample model output and a fake invoker."""

import copy
import json
from unittest.mock import AsyncMock

import pytest

from recipe_assistant.models.models import Recipe
from recipe_assistant.services.recipe_service import RecipeService
from recipe_assistant.utils.result import Ok


SAMPLE_RECIPE = {
    "name": "Garlic Chicken Rice Bowl",
    "description": "Savory chicken over fluffy rice",
    "cuisine": "Asian",
    "prepTime": "15 minutes",
    "cookTime": "25 minutes",
    "totalTime": "40 minutes",
    "difficulty": "Easy",
    "servings": 4,
    "ingredients": [
        {"name": "chicken", "amount": "500g", "notes": "diced"},
        {"name": "rice", "amount": "2 cups"},
    ],
    "instructions": ["Cook the rice", "Sear the chicken", "Combine and serve"],
    "nutrition": {
        "calories": 450,
        "protein": "35g",
        "carbs": "50g",
        "fat": "10g",
        "fiber": "2g",
        "sugar": "1g",
    },
    "substitutions": {"chicken": "tofu"},
    "tags": ["quick", "high-protein"],
    "tips": "Use day-old rice for better texture",
}

SAMPLE_SUBSTITUTIONS = {
    "substitutions": [
        {
            "original": "butter",
            "alternatives": [
                {
                    "substitute": "olive oil",
                    "ratio": "3/4 cup per 1 cup",
                    "notes": "Less rich, works for sauteing",
                    "availability": "common",
                    "dietaryTags": ["vegan", "dairy-free"],
                }
            ],
        }
    ],
    "generalTips": ["Taste as you go"],
}


@pytest.fixture
def raw_recipe():
    """Factory returning a fresh, valid raw recipe dict with optional overrides."""

    def _make(**overrides):
        recipe = copy.deepcopy(SAMPLE_RECIPE)
        recipe.update(overrides)
        return recipe

    return _make


@pytest.fixture
def recipe_completion(raw_recipe):
    """Factory rendering raw recipes as a fenced model completion."""

    def _make(*recipes):
        body = json.dumps({"recipes": list(recipes) or [raw_recipe()]})
        return f"```json\n{body}\n```"

    return _make


@pytest.fixture
def sample_recipe(raw_recipe):
    return Recipe.model_validate({**raw_recipe(), "id": "abc123"})


@pytest.fixture
def substitution_completion():
    return json.dumps(SAMPLE_SUBSTITUTIONS)


@pytest.fixture
def fake_invoker():
    """Invoker double whose generate() returns a configurable Result."""
    invoker = AsyncMock()
    invoker.generate = AsyncMock(return_value=Ok("{\"recipes\": []}"))
    return invoker


@pytest.fixture
def service(fake_invoker):
    return RecipeService(fake_invoker)
