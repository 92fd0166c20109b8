"""schema.org Recipe JSON-LD for search engines."""

from typing import Any

from recipe_assistant.models.models import Recipe
from recipe_assistant.presentation.filters import parse_minutes


def iso_duration(text: str) -> str:
    """Convert a free-text duration to ISO-8601, e.g. "1 hour 30 minutes" -> "PT1H30M"."""
    hours, minutes = divmod(parse_minutes(text), 60)
    if hours and minutes:
        return f"PT{hours}H{minutes}M"
    if hours:
        return f"PT{hours}H"
    return f"PT{minutes}M"


def recipe_structured_data(recipe: Recipe, base_url: str) -> dict[str, Any]:
    """Build the JSON-LD document for one recipe."""
    base_url = base_url.rstrip("/")
    nutrition = recipe.nutrition

    data: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": recipe.name,
        "description": recipe.description,
        "image": recipe.image or f"{base_url}/og-image.png",
        "url": f"{base_url}/recipe/{recipe.id}",
        "author": {"@type": "Organization", "name": "Smart Recipe Assistant", "url": base_url},
        "prepTime": iso_duration(recipe.prep_time),
        "cookTime": iso_duration(recipe.cook_time),
        "totalTime": iso_duration(recipe.total_time),
        "recipeYield": str(recipe.servings),
        "recipeCuisine": recipe.cuisine,
        "keywords": ", ".join(recipe.tags),
        "recipeIngredient": [f"{ingredient.amount} {ingredient.name}" for ingredient in recipe.ingredients],
        "recipeInstructions": [
            {"@type": "HowToStep", "position": position, "text": step}
            for position, step in enumerate(recipe.instructions, start=1)
        ],
        "nutrition": {
            "@type": "NutritionInformation",
            "calories": f"{nutrition.calories} calories",
            "proteinContent": nutrition.protein,
            "carbohydrateContent": nutrition.carbs,
            "fatContent": nutrition.fat,
            "fiberContent": nutrition.fiber,
            "sugarContent": nutrition.sugar,
        },
    }
    return data
