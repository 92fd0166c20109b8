"""Share links and the plain-text recipe card."""

import re

from recipe_assistant.models.models import Recipe


def share_url(recipe: Recipe, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/recipe/{recipe.id}"


def share_filename(recipe: Recipe) -> str:
    """File name used when the text card is downloaded."""
    return re.sub(r"[^a-z0-9]", "_", recipe.name, flags=re.IGNORECASE).lower() + ".txt"


def share_text(recipe: Recipe) -> str:
    """Render the recipe as a copy-pasteable text card."""
    ingredients = "\n".join(f"• {ingredient.amount} {ingredient.name}" for ingredient in recipe.ingredients)
    steps = "\n".join(f"{number}. {step}" for number, step in enumerate(recipe.instructions, start=1))
    nutrition = recipe.nutrition

    return (
        f"🍳 {recipe.name}\n"
        f"\n"
        f"{recipe.description}\n"
        f"\n"
        f"⏱️ Prep: {recipe.prep_time} | Cook: {recipe.cook_time} | Total: {recipe.total_time}\n"
        f"👥 Servings: {recipe.servings} | 🔥 {recipe.difficulty.value}\n"
        f"🍽️ {recipe.cuisine} cuisine\n"
        f"\n"
        f"📝 Ingredients:\n"
        f"{ingredients}\n"
        f"\n"
        f"👨‍🍳 Instructions:\n"
        f"{steps}\n"
        f"\n"
        f"📊 Nutrition (per serving):\n"
        f"• Calories: {nutrition.calories}\n"
        f"• Protein: {nutrition.protein}\n"
        f"• Carbs: {nutrition.carbs}\n"
        f"• Fat: {nutrition.fat}\n"
        f"\n"
        f"Generated with Smart Recipe Assistant"
    )
