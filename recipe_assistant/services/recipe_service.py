"""Recipe pipeline: prompt -> model -> parser -> mapper.

RecipeService holds no per-request state; each call runs the whole pipeline
once and returns a Result. Internal failure messages are replaced by stable,
user-facing ones here, so raw model text and provider errors only ever reach
the logs.
"""

import dataclasses
import time

from recipe_assistant.llm.gemini import GeminiInvoker, create_gemini_client
from recipe_assistant.mapping.recipes import map_recipes, map_substitutions
from recipe_assistant.models.models import IngredientQuery, Recipe, SubstitutionRequest, SubstitutionResult
from recipe_assistant.parsing.responses import parse_recipe_response, parse_substitution_response
from recipe_assistant.prompts.prompts import build_recipe_prompt, build_substitution_prompt
from recipe_assistant.utils.config import Config, config
from recipe_assistant.utils.logger import logger
from recipe_assistant.utils.result import Err, ErrorKind, Ok, Result


RECIPE_MESSAGES = {
    ErrorKind.GENERATION: "Failed to generate recipes. Please try again.",
    ErrorKind.PARSING: "The AI failed to produce recipes. Please try again.",
}

SUBSTITUTION_MESSAGES = {
    ErrorKind.GENERATION: "Failed to generate ingredient substitutions. Please try again.",
    ErrorKind.PARSING: "The AI failed to produce ingredient substitutions. Please try again.",
}


def _user_facing(err: Err, messages: dict[ErrorKind, str]) -> Err:
    """Swap the internal message for the stable one shown to users."""
    if err.kind in messages:
        return dataclasses.replace(err, message=messages[err.kind], details=[])
    return err


class RecipeService:
    """Run recipe and substitution requests against an injected model invoker."""

    def __init__(self, invoker: GeminiInvoker) -> None:
        self.invoker = invoker

    async def generate_recipes(self, query: IngredientQuery) -> Result[list[Recipe]]:
        """Generate recipes for a validated query.

        Returns:
            Ok(list of Recipe) or Err with kind GENERATION or PARSING.
        """
        started = time.perf_counter()
        logger.info(
            f"Generating recipes: ingredients={list(query.ingredients)}, "
            f"filters={[f.value for f in query.dietary_filters]}, servings={query.servings}"
        )

        prompt = build_recipe_prompt(query.ingredients, query.dietary_filters, query.servings)
        completion = await self.invoker.generate(prompt)
        if not completion.ok:
            return _user_facing(completion, RECIPE_MESSAGES)

        parsed = parse_recipe_response(completion.value)
        if not parsed.ok:
            logger.error(f"Failed to parse recipe response: {parsed.message}")
            return _user_facing(parsed, RECIPE_MESSAGES)

        mapped = map_recipes(parsed.value)
        if not mapped.ok:
            logger.error(f"Recipe output failed validation: {mapped.message}")
            return _user_facing(mapped, RECIPE_MESSAGES)

        recipes = mapped.value.recipes
        logger.info(f"Generated {len(recipes)} recipe(s) in {(time.perf_counter() - started) * 1000:.0f}ms")
        return Ok(recipes)

    async def generate_substitutions(self, request: SubstitutionRequest) -> Result[SubstitutionResult]:
        """Suggest substitutions for the requested ingredients."""
        logger.info(
            f"Generating substitutions: ingredients={list(request.ingredients)}, "
            f"recipe={request.recipe_name!r}, type={request.recipe_type!r}"
        )

        prompt = build_substitution_prompt(
            request.ingredients,
            request.dietary_filters,
            request.recipe_name,
            request.recipe_type,
        )
        completion = await self.invoker.generate(prompt)
        if not completion.ok:
            return _user_facing(completion, SUBSTITUTION_MESSAGES)

        parsed = parse_substitution_response(completion.value)
        if not parsed.ok:
            logger.error(f"Failed to parse substitution response: {parsed.message}")
            return _user_facing(parsed, SUBSTITUTION_MESSAGES)

        mapped = map_substitutions(parsed.value)
        if not mapped.ok:
            logger.error(f"Substitution output failed validation: {mapped.message}")
            return _user_facing(mapped, SUBSTITUTION_MESSAGES)

        logger.info(f"Generated substitutions for {len(mapped.value.substitutions)} ingredient(s)")
        return mapped


def initialize_recipe_service(settings: Config = config) -> RecipeService:
    """Factory: validate configuration, build the Gemini client and invoker.

    Raises:
        ValueError: If configuration is invalid (e.g. GEMINI_API_KEY missing).
    """
    logger.info("=== Initializing Recipe Service ===")
    settings.validate()

    client = create_gemini_client(settings.GEMINI_API_KEY)
    invoker = GeminiInvoker(
        client=client,
        model=settings.GEMINI_MODEL,
        temperature=settings.TEMPERATURE,
        top_p=settings.TOP_P,
        max_output_tokens=settings.MAX_OUTPUT_TOKENS,
    )
    logger.info(
        f"✓ Gemini invoker configured (model={settings.GEMINI_MODEL}, temperature={settings.TEMPERATURE}, "
        f"top_p={settings.TOP_P}, max_output_tokens={settings.MAX_OUTPUT_TOKENS})"
    )
    return RecipeService(invoker)
