"""Unit tests for per-client recipe state and stale-response handling."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from recipe_assistant.services.recipe_service import RECIPE_MESSAGES, RecipeService
from recipe_assistant.services.session import UNEXPECTED_ERROR_MESSAGE, RecipeSession
from recipe_assistant.utils.result import Err, ErrorKind, Ok


class TestRecipeSession:
    """Test submission state transitions."""

    @pytest.mark.asyncio
    async def test_successful_submission(self, sample_recipe):
        service = AsyncMock()
        service.generate_recipes.return_value = Ok([sample_recipe])
        session = RecipeSession(service)

        applied = await session.submit({"ingredients": ["chicken", "rice"]})

        assert applied
        assert session.recipes == [sample_recipe]
        assert session.error is None
        assert not session.loading

    @pytest.mark.asyncio
    async def test_validation_error_skips_service(self):
        service = AsyncMock()
        session = RecipeSession(service)

        await session.submit({"ingredients": ["chicken"]})

        assert session.error == "Please enter at least 2 ingredients"
        service.generate_recipes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_service_error_sets_message(self):
        service = AsyncMock()
        service.generate_recipes.return_value = Err(
            kind=ErrorKind.GENERATION, message="Failed to generate recipes. Please try again."
        )
        session = RecipeSession(service)

        await session.submit({"ingredients": ["chicken", "rice"]})

        assert session.error == "Failed to generate recipes. Please try again."
        assert session.recipes == []

    @pytest.mark.asyncio
    async def test_service_exception_resets_loading(self):
        """An exception from the service leaves the form usable with an error shown."""
        service = AsyncMock()
        service.generate_recipes.side_effect = RuntimeError("connection reset")
        session = RecipeSession(service)

        applied = await session.submit({"ingredients": ["chicken", "rice"]})

        assert applied
        assert not session.loading
        assert session.error == UNEXPECTED_ERROR_MESSAGE
        assert "connection reset" not in session.error

    @pytest.mark.asyncio
    async def test_undecodable_model_output_reports_parsing_error(self, fake_invoker):
        """The real pipeline turns undecodable output into an error, never a stuck form."""
        fake_invoker.generate.return_value = Ok('{"recipes": [{"servings": ' + "1" * 5000 + "}]}")
        session = RecipeSession(RecipeService(fake_invoker))

        await session.submit({"ingredients": ["chicken", "rice"]})

        assert not session.loading
        assert session.error == RECIPE_MESSAGES[ErrorKind.PARSING]

    @pytest.mark.asyncio
    async def test_stale_exception_discarded(self, sample_recipe):
        first_release = asyncio.Event()
        calls = []

        async def generate(query):
            calls.append(query)
            if len(calls) == 1:
                await first_release.wait()
                raise RuntimeError("late failure")
            return Ok([sample_recipe])

        service = AsyncMock()
        service.generate_recipes.side_effect = generate
        session = RecipeSession(service)

        first = asyncio.create_task(session.submit({"ingredients": ["chicken", "rice"]}))
        while not calls:
            await asyncio.sleep(0)
        await session.submit({"ingredients": ["tofu", "rice"]})
        first_release.set()

        assert not await first
        assert session.error is None
        assert session.recipes == [sample_recipe]

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self, sample_recipe):
        """A slow earlier response never overwrites a newer one."""
        first_release = asyncio.Event()
        newer = sample_recipe.model_copy(update={"name": "Newer"})
        calls = []

        async def generate(query):
            calls.append(query)
            if len(calls) == 1:
                await first_release.wait()
                return Ok([sample_recipe])
            return Ok([newer])

        service = AsyncMock()
        service.generate_recipes.side_effect = generate
        session = RecipeSession(service)

        first = asyncio.create_task(session.submit({"ingredients": ["chicken", "rice"]}))
        while not calls:
            await asyncio.sleep(0)
        second_applied = await session.submit({"ingredients": ["tofu", "rice"]})
        first_release.set()
        first_applied = await first

        assert second_applied
        assert not first_applied
        assert [recipe.name for recipe in session.recipes] == ["Newer"]
        assert session.latest_token == 2

    def test_select_and_clear(self, sample_recipe):
        session = RecipeSession(AsyncMock())
        session.recipes = [sample_recipe]
        session.error = "boom"

        session.select_recipe(sample_recipe)
        assert session.selected_recipe is sample_recipe

        session.clear_recipes()
        session.clear_error()
        assert session.recipes == []
        assert session.selected_recipe is None
        assert session.error is None
