#!/usr/bin/env python3
"""Ad hoc query runner for the Smart Recipe Assistant.

Generate recipes directly without starting the API server.

Usage:
    python query.py "chicken, rice, broccoli"
    python query.py --diet vegetarian --servings 2 "tomato, basil, pasta"
    python query.py --debug "eggs, spinach"            # Show full JSON response
    python query.py --substitutions "butter, milk"     # Ask for substitutions instead

Features:
- Same validation and pipeline as the HTTP service
- Recipes rendered as formatted markdown cards
- Debug mode to display the full JSON envelope
"""

import asyncio
import sys
import time

from rich.console import Console
from rich.markdown import Markdown

from recipe_assistant.models.models import RecipeGenerationResponse, SubstitutionResponse, SubstitutionResult
from recipe_assistant.presentation.sharing import share_text
from recipe_assistant.services.recipe_service import RecipeService, initialize_recipe_service
from recipe_assistant.utils.logger import logger
from recipe_assistant.validation.ingredients import validate_query, validate_substitution_request

console = Console()

USAGE = 'Usage: python query.py [--debug] [--diet NAME]... [--servings N] [--substitutions] "<ingredient, ingredient, ...>"'


def split_ingredients(text: str) -> list[str]:
    """Split comma-separated input into ingredient names."""
    return [part.strip() for part in text.split(",") if part.strip()]


def render_substitutions(result: SubstitutionResult) -> str:
    """Format substitution suggestions as markdown."""
    lines = []
    for substitution in result.substitutions:
        lines.append(f"## {substitution.original}")
        for alt in substitution.alternatives:
            tags = f" ({', '.join(alt.dietary_tags)})" if alt.dietary_tags else ""
            lines.append(f"- **{alt.substitute}** {alt.ratio}, {alt.availability}{tags}: {alt.notes}")
        lines.append("")
    if result.general_tips:
        lines.append("## Tips")
        lines.extend(f"- {tip}" for tip in result.general_tips)
    return "\n".join(lines)


async def _run(service: RecipeService, payload: dict, substitutions: bool):
    if substitutions:
        request = validate_substitution_request(payload)
        if not request.ok:
            return request
        return await service.generate_substitutions(request.value)

    query = validate_query(payload)
    if not query.ok:
        return query
    return await service.generate_recipes(query.value)


def run_query(
    ingredients: list[str],
    dietary_filters: list[str],
    servings: int = None,
    debug: bool = False,
    substitutions: bool = False,
) -> None:
    """Execute a single ad hoc request and print the result.

    Args:
        ingredients: Ingredient names as typed by the user.
        dietary_filters: Dietary filter values (e.g. "vegan").
        servings: Desired servings; the service default applies when None.
        debug: If True, display the full JSON envelope.
        substitutions: If True, ask for substitutions instead of recipes.
    """
    try:
        payload = {"ingredients": ingredients, "dietaryFilters": dietary_filters}
        if servings is not None:
            payload["servings"] = servings

        logger.info("Initializing recipe service...")
        service = initialize_recipe_service()

        logger.info(f"Running {'substitution' if substitutions else 'recipe'} request: {ingredients}")
        started = time.perf_counter()
        result = asyncio.run(_run(service, payload, substitutions))
        elapsed = int((time.perf_counter() - started) * 1000)

        console.print()
        if not result.ok:
            console.print(f"[red]✗ {result.kind.label}: {result.message}[/red]")
            for detail in result.details:
                console.print(f"[dim]  {detail.get('field', '')}: {detail.get('message', '')}[/dim]")
            sys.exit(1)

        if substitutions:
            envelope = SubstitutionResponse(
                substitutions=list(result.value.substitutions),
                general_tips=list(result.value.general_tips),
                processing_time=elapsed,
            )
        else:
            envelope = RecipeGenerationResponse(
                recipes=result.value, total_count=len(result.value), processing_time=elapsed
            )

        if debug:
            console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=envelope.model_dump(by_alias=True, mode="json", exclude_none=True))
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        if substitutions:
            console.print(Markdown(render_substitutions(result.value)))
        elif not result.value:
            console.print("[yellow]No recipes returned[/yellow]")
        else:
            for recipe in result.value:
                console.print(Markdown(share_text(recipe).replace("\n", "  \n")))
                console.print("[dim]" + "-" * 60 + "[/dim]")

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print('  python query.py "chicken, rice, broccoli"')
        print('  python query.py --diet vegetarian --servings 2 "tomato, basil, pasta"')
        print('  python query.py --substitutions "butter, milk"')
        sys.exit(1)

    debug_mode = False
    substitution_mode = False
    diets: list[str] = []
    servings = None
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag == "--substitutions":
            substitution_mode = True
            argv_start += 1
        elif flag in ("--diet", "--servings"):
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            value = sys.argv[argv_start]
            if flag == "--diet":
                diets.append(value)
            elif value.isdigit():
                servings = int(value)
            else:
                print("Error: --servings must be a whole number")
                sys.exit(1)
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No ingredients provided")
        print(USAGE)
        sys.exit(1)

    run_query(
        split_ingredients(" ".join(sys.argv[argv_start:])),
        diets,
        servings=servings,
        debug=debug_mode,
        substitutions=substitution_mode,
    )
