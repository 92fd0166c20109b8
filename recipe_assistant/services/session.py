"""Per-client recipe state: recipes, selection, loading flag and error.

A RecipeSession is owned by one form instance. Each submission takes a new,
monotonically increasing request token; when a response arrives it is applied
only if its token is still the latest one issued. A slow response to an
earlier submission therefore never overwrites a newer result.
"""

from typing import Any, Optional

from recipe_assistant.models.models import Recipe
from recipe_assistant.services.recipe_service import RecipeService
from recipe_assistant.utils.logger import logger
from recipe_assistant.validation.ingredients import validate_query


UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class RecipeSession:
    """Client-side state for one recipe form."""

    def __init__(self, service: RecipeService) -> None:
        self.service = service
        self.recipes: list[Recipe] = []
        self.selected_recipe: Optional[Recipe] = None
        self.loading: bool = False
        self.error: Optional[str] = None
        self._latest_token = 0

    @property
    def latest_token(self) -> int:
        return self._latest_token

    async def submit(self, payload: Any) -> bool:
        """Validate and run one submission.

        Validation failures are reported immediately through ``error`` and never
        reach the model.

        Args:
            payload: Raw request body (``ingredients``, ``dietaryFilters``, ``servings``).

        Returns:
            True if this submission's outcome was applied, False if it was
            superseded by a newer submission while in flight.
        """
        self._latest_token += 1
        token = self._latest_token

        validated = validate_query(payload)
        if not validated.ok:
            self.error = validated.message
            self.loading = False
            return True

        self.loading = True
        self.error = None
        try:
            result = await self.service.generate_recipes(validated.value)
        except Exception as e:
            if token != self._latest_token:
                logger.warning(f"Stale request #{token} failed after being superseded: {e}")
                return False
            logger.exception(f"Recipe generation failed for request #{token}: {e}")
            self.loading = False
            self.error = UNEXPECTED_ERROR_MESSAGE
            return True

        if token != self._latest_token:
            logger.info(f"Discarding stale response for request #{token} (latest is #{self._latest_token})")
            return False

        self.loading = False
        if result.ok:
            self.recipes = list(result.value)
        else:
            self.error = result.message
        return True

    def select_recipe(self, recipe: Optional[Recipe]) -> None:
        self.selected_recipe = recipe

    def clear_recipes(self) -> None:
        self.recipes = []
        self.selected_recipe = None

    def clear_error(self) -> None:
        self.error = None
