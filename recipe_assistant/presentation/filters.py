"""Client-side filtering over a list of generated recipes.

Filters combine with AND. Empty selections and None thresholds mean "any".
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from recipe_assistant.models.models import Difficulty, Recipe


PREP_TIME_OPTIONS = (15, 30, 60, 120)

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)\s*(hours?|hrs?|h|minutes?|mins?|m)?", re.IGNORECASE)


def parse_minutes(text: str) -> int:
    """Read a free-text duration such as "1 hour 30 minutes" or "45 mins".

    Bare numbers count as minutes. Text without any number yields 0.
    """
    total = 0.0
    for amount, unit in _DURATION_PART.findall(text or ""):
        value = float(amount)
        if unit and unit.lower().startswith("h"):
            value *= 60
        total += value
    return int(round(total))


@dataclass(frozen=True)
class RecipeFilters:
    search: str = ""
    max_prep_minutes: Optional[int] = None
    servings: tuple[int, ...] = ()
    difficulty: tuple[Difficulty, ...] = ()
    cuisine: tuple[str, ...] = ()
    dietary: tuple[str, ...] = ()
    max_calories: Optional[float] = None

    @property
    def active_count(self) -> int:
        """Number of filters that narrow the list."""
        return sum(
            [
                bool(self.search.strip()),
                self.max_prep_minutes is not None,
                bool(self.servings),
                bool(self.difficulty),
                bool(self.cuisine),
                bool(self.dietary),
                self.max_calories is not None,
            ]
        )


def _matches_search(recipe: Recipe, needle: str) -> bool:
    return (
        needle in recipe.name.lower()
        or needle in recipe.description.lower()
        or any(needle in ingredient.name.lower() for ingredient in recipe.ingredients)
        or any(needle in tag.lower() for tag in recipe.tags)
    )


def _matches(recipe: Recipe, filters: RecipeFilters) -> bool:
    needle = filters.search.strip().lower()
    if needle and not _matches_search(recipe, needle):
        return False
    if filters.max_prep_minutes is not None and parse_minutes(recipe.prep_time) > filters.max_prep_minutes:
        return False
    if filters.servings and recipe.servings not in filters.servings:
        return False
    if filters.difficulty and recipe.difficulty not in {Difficulty(d) for d in filters.difficulty}:
        return False
    if filters.cuisine and recipe.cuisine not in filters.cuisine:
        return False
    if filters.dietary and not all(diet in recipe.tags for diet in filters.dietary):
        return False
    if filters.max_calories is not None and recipe.nutrition.calories > filters.max_calories:
        return False
    return True


def apply_filters(recipes: Iterable[Recipe], filters: RecipeFilters) -> list[Recipe]:
    """Return the recipes passing every active filter, in their original order."""
    return [recipe for recipe in recipes if _matches(recipe, filters)]


def available_cuisines(recipes: Sequence[Recipe]) -> list[str]:
    """Distinct non-empty cuisines in first-seen order."""
    return list(dict.fromkeys(recipe.cuisine for recipe in recipes if recipe.cuisine))


def available_servings(recipes: Sequence[Recipe]) -> list[int]:
    return sorted({recipe.servings for recipe in recipes})
