"""Prompt templates for recipe generation and ingredient substitutions.

Both builders are pure functions: identical inputs always produce the identical
prompt string (no randomness, no timestamps), so prompts can be used as test
fixtures independently of the model call.

The literal JSON shapes embedded in the prompts are the contract the domain
mapper validates against. Keep the keys in RECIPE_JSON_SHAPE in step with
recipe_assistant.models.models.Recipe, and SUBSTITUTION_JSON_SHAPE in step with
SubstitutionResult.
"""

from typing import Iterable, Optional

from recipe_assistant.models.models import DEFAULT_SERVINGS, DietaryFilter


# Number of recipe variants requested per submission
RECIPE_COUNT = 3

# Minimum share of the provided ingredients each recipe should use
INGREDIENT_UTILIZATION = "80%+"

RECIPE_JSON_SHAPE = """{{
  "recipes": [
    {{
      "name": "Recipe Name",
      "description": "Brief appetizing description (max 100 chars)",
      "cuisine": "cuisine type",
      "prepTime": "15 minutes",
      "cookTime": "30 minutes",
      "totalTime": "45 minutes",
      "difficulty": "Easy|Medium|Hard",
      "servings": {servings},
      "ingredients": [
        {{
          "name": "ingredient name",
          "amount": "1 cup",
          "notes": "optional preparation notes"
        }}
      ],
      "instructions": [
        "Detailed step 1",
        "Detailed step 2"
      ],
      "nutrition": {{
        "calories": 350,
        "protein": "25g",
        "carbs": "30g",
        "fat": "15g",
        "fiber": "5g",
        "sugar": "8g"
      }},
      "substitutions": {{
        "ingredient name": "substitute option"
      }},
      "tags": ["quick", "healthy"],
      "tips": "Optional cooking tips or variations"
    }}
  ]
}}"""

SUBSTITUTION_JSON_SHAPE = """{
  "substitutions": [
    {
      "original": "ingredient name",
      "alternatives": [
        {
          "substitute": "substitute ingredient",
          "ratio": "1:1",
          "notes": "How it affects flavor/texture",
          "availability": "common|specialty",
          "dietaryTags": ["vegan", "gluten-free"]
        }
      ]
    }
  ],
  "generalTips": [
    "General substitution tip 1",
    "General substitution tip 2"
  ]
}"""

NO_PROSE_CLAUSE = (
    "Ensure all JSON is properly formatted and parseable. "
    "Do not include any text outside the JSON structure."
)


def _filter_names(dietary_filters: Iterable) -> list[str]:
    """Render filters by value, whether given as DietaryFilter members or plain strings."""
    return [f.value if isinstance(f, DietaryFilter) else str(f) for f in dietary_filters]


def build_recipe_prompt(
    ingredients: Iterable[str],
    dietary_filters: Iterable = (),
    servings: int = DEFAULT_SERVINGS,
) -> str:
    """Render the recipe-generation instruction.

    The prompt lists the ingredients verbatim, asks for RECIPE_COUNT diverse
    recipes that use mostly those ingredients, adds a dietary-compliance line
    only when filters are given, embeds the exact JSON shape expected back, and
    forbids any prose outside the JSON.

    Args:
        ingredients: Validated ingredient names, in the order the user entered them.
        dietary_filters: Dietary restrictions (DietaryFilter members or their values).
        servings: Servings per recipe; also embedded in the JSON example.

    Returns:
        The complete prompt string.
    """
    filters = _filter_names(dietary_filters)

    requirements = [
        f"- Use primarily the provided ingredients ({INGREDIENT_UTILIZATION} utilization)",
        "- Each recipe should be unique in cooking style and cuisine",
        "- Include accurate prep time, cook time, and difficulty level",
        "- Provide detailed step-by-step cooking instructions",
        f"- Include complete nutritional information per serving ({servings} servings total)",
        "- Suggest 2-3 ingredient substitutions for dietary flexibility",
    ]
    if filters:
        requirements.append(f"- Must comply with: {', '.join(filters)} dietary requirements")

    sections = [
        "You are a creative and experienced chef assistant. "
        f"Generate {RECIPE_COUNT} diverse recipe suggestions based on these available ingredients: "
        f"{', '.join(ingredients)}.",
        "Requirements:\n" + "\n".join(requirements),
        "Return response as valid JSON with this exact structure:\n"
        + RECIPE_JSON_SHAPE.format(servings=servings),
        NO_PROSE_CLAUSE,
    ]
    return "\n\n".join(sections)


def build_substitution_prompt(
    ingredients: Iterable[str],
    dietary_filters: Iterable = (),
    recipe_name: Optional[str] = None,
    recipe_type: Optional[str] = None,
) -> str:
    """Render the ingredient-substitution instruction.

    Same structure as the recipe prompt: ingredient list, optional context
    (recipe name, recipe type, dietary requirements), the literal JSON shape,
    and the no-prose clause.
    """
    filters = _filter_names(dietary_filters)

    context = []
    if recipe_name:
        context.append(f"- Recipe: {recipe_name}")
    if recipe_type:
        context.append(f"- Recipe Type: {recipe_type}")
    if filters:
        context.append(f"- Dietary Requirements: {', '.join(filters)}")

    sections = [
        "You are a culinary expert specializing in ingredient substitutions. "
        "Provide smart substitution suggestions for the following ingredients: "
        f"{', '.join(ingredients)}.",
    ]
    if context:
        sections.append("Context:\n" + "\n".join(context))
    sections.extend(
        [
            "For each ingredient, provide:\n"
            "1. 2-3 suitable substitutions\n"
            "2. Brief explanation of how it affects the recipe\n"
            "3. Quantity conversion if different (for example \"1 cup = 3/4 cup substitute\")\n"
            "4. Any preparation notes",
            "Return response as valid JSON with this exact structure:\n" + SUBSTITUTION_JSON_SHAPE,
            "Focus on practical, readily available substitutions that maintain recipe quality. "
            + NO_PROSE_CLAUSE,
        ]
    )
    return "\n\n".join(sections)
