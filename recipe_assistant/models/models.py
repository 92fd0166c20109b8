"""Data models and schemas for the recipe assistant.

Defines Pydantic models for request validation, the recipe domain records built
from model output, and the HTTP response envelopes.
All models use Pydantic v2; wire names are camelCase, attributes are snake_case.
"""

import re
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictFloat, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


MIN_INGREDIENTS = 2
MAX_INGREDIENTS = 15
MAX_INGREDIENT_LENGTH = 50
MIN_SERVINGS = 1
MAX_SERVINGS = 12
DEFAULT_SERVINGS = 4

INGREDIENT_PATTERN = re.compile(r"^[A-Za-z -]+$")

# Domain records are immutable once built; wire format is camelCase
RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DietaryFilter(str, Enum):
    """Dietary restrictions a user can request."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"
    DAIRY_FREE = "dairy-free"
    KETO = "keto"
    PALEO = "paleo"


class Difficulty(str, Enum):
    """Recipe difficulty as reported by the model."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


def clean_ingredient_name(value: Any) -> str:
    """Trim and check a single ingredient name.

    Raises:
        PydanticCustomError: If the name is empty, too long, or has characters
            other than letters, spaces and hyphens.
    """
    if not isinstance(value, str):
        raise PydanticCustomError("ingredient_type", "Ingredient must be text")
    name = value.strip()
    if not name:
        raise PydanticCustomError("ingredient_empty", "Ingredient cannot be empty")
    if len(name) > MAX_INGREDIENT_LENGTH:
        raise PydanticCustomError("ingredient_too_long", "Ingredient name too long")
    if not INGREDIENT_PATTERN.match(name):
        raise PydanticCustomError(
            "ingredient_pattern",
            "Please enter a valid ingredient (letters, spaces, hyphens only)",
        )
    return name


class IngredientQuery(BaseModel):
    """Validated recipe request: ingredients, dietary filters and servings.

    Built once per submission and never modified.
    """

    model_config = RECORD_CONFIG

    ingredients: Annotated[
        tuple[str, ...],
        Field(description="Ingredient names, 2-15 items, letters/spaces/hyphens only"),
    ]
    dietary_filters: Annotated[
        tuple[DietaryFilter, ...],
        Field(default=(), description="Dietary restrictions the recipes must comply with"),
    ]
    servings: Annotated[
        int,
        Field(default=DEFAULT_SERVINGS, description="Number of servings (1-12)"),
    ]

    @field_validator("ingredients", mode="before")
    @classmethod
    def validate_ingredients(cls, value: Any) -> tuple[str, ...]:
        """Enforce count bounds, per-item rules and case-insensitive uniqueness."""
        if not isinstance(value, (list, tuple)):
            raise PydanticCustomError("ingredients_type", "Ingredients must be a list of names")
        if len(value) < MIN_INGREDIENTS:
            raise PydanticCustomError("ingredients_too_few", "Please enter at least 2 ingredients")
        if len(value) > MAX_INGREDIENTS:
            raise PydanticCustomError("ingredients_too_many", "Maximum 15 ingredients allowed")

        cleaned: list[str] = []
        seen: set[str] = set()
        for item in value:
            name = clean_ingredient_name(item)
            if name.lower() in seen:
                raise PydanticCustomError("ingredient_duplicate", "This ingredient is already added")
            seen.add(name.lower())
            cleaned.append(name)
        return tuple(cleaned)

    @field_validator("dietary_filters", mode="before")
    @classmethod
    def validate_dietary_filters(cls, value: Any) -> tuple[DietaryFilter, ...]:
        """Reject unknown filters and collapse duplicates, keeping first-seen order."""
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            raise PydanticCustomError("dietary_filters_type", "Dietary filters must be a list")

        allowed = {option.value: option for option in DietaryFilter}
        filters: list[DietaryFilter] = []
        for item in value:
            if isinstance(item, DietaryFilter):
                item = item.value
            if not isinstance(item, str) or item not in allowed:
                raise PydanticCustomError(
                    "dietary_filter_unknown",
                    "Unknown dietary filter: {value}",
                    {"value": str(item)},
                )
            if allowed[item] not in filters:
                filters.append(allowed[item])
        return tuple(filters)

    @field_validator("servings", mode="before")
    @classmethod
    def validate_servings(cls, value: Any) -> int:
        """Servings must be a whole number in [1, 12]; null means the default."""
        if value is None:
            return DEFAULT_SERVINGS
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise PydanticCustomError("servings_type", "Servings must be a whole number")
        if value < MIN_SERVINGS:
            raise PydanticCustomError("servings_too_few", "At least 1 serving required")
        if value > MAX_SERVINGS:
            raise PydanticCustomError("servings_too_many", "Maximum 12 servings allowed")
        return value


class Ingredient(BaseModel):
    """One ingredient line of a recipe; amount is free text ("1 cup")."""

    model_config = RECORD_CONFIG

    name: StrictStr
    amount: StrictStr
    notes: Optional[StrictStr] = None


class NutritionInfo(BaseModel):
    """Per-serving nutrition. Macros keep their embedded units ("25g")."""

    model_config = RECORD_CONFIG

    calories: Union[StrictInt, StrictFloat]
    protein: StrictStr
    carbs: StrictStr
    fat: StrictStr
    fiber: StrictStr
    sugar: StrictStr


class Recipe(BaseModel):
    """Canonical recipe record built from model output.

    The id is generated locally by the domain mapper; every other field is
    taken from the model verbatim. Scalars are strict so that a string where a
    number belongs (or vice versa) rejects the recipe instead of being coerced.
    """

    model_config = RECORD_CONFIG

    id: Annotated[StrictStr, Field(min_length=1, description="Locally generated identifier")]
    name: Annotated[StrictStr, Field(min_length=1, description="Recipe name")]
    description: StrictStr
    cuisine: StrictStr
    prep_time: Annotated[StrictStr, Field(description="Free-text duration, e.g. '15 minutes'")]
    cook_time: StrictStr
    total_time: StrictStr
    difficulty: Difficulty
    servings: Annotated[StrictInt, Field(gt=0)]
    ingredients: Annotated[tuple[Ingredient, ...], Field(min_length=1)]
    instructions: Annotated[tuple[StrictStr, ...], Field(min_length=1)]
    nutrition: NutritionInfo
    substitutions: Annotated[
        dict[StrictStr, StrictStr],
        Field(description="Ingredient name -> substitute suggestion"),
    ]
    tags: tuple[StrictStr, ...]
    tips: Optional[StrictStr] = None
    image: Optional[StrictStr] = None


class SubstitutionRequest(BaseModel):
    """Validated request for ingredient substitution suggestions."""

    model_config = RECORD_CONFIG

    ingredients: Annotated[tuple[str, ...], Field(description="Ingredients to substitute (at least one)")]
    dietary_filters: tuple[StrictStr, ...] = ()
    recipe_name: Optional[StrictStr] = None
    recipe_type: Optional[StrictStr] = None

    @field_validator("ingredients", mode="before")
    @classmethod
    def validate_ingredients(cls, value: Any) -> tuple[str, ...]:
        """At least one non-empty ingredient name is required."""
        if not isinstance(value, (list, tuple)):
            raise PydanticCustomError("ingredients_type", "Ingredients must be a list of names")
        if not value:
            raise PydanticCustomError("ingredients_too_few", "At least one ingredient required")
        names = []
        for item in value:
            if not isinstance(item, str) or not item.strip():
                raise PydanticCustomError("ingredient_empty", "Ingredient cannot be empty")
            names.append(item.strip())
        return tuple(names)

    @field_validator("dietary_filters", mode="before")
    @classmethod
    def default_dietary_filters(cls, value: Any) -> Any:
        return () if value is None else value


class SubstitutionAlternative(BaseModel):
    """One replacement option for an ingredient."""

    model_config = RECORD_CONFIG

    substitute: Annotated[StrictStr, Field(min_length=1)]
    ratio: StrictStr
    notes: StrictStr
    availability: Literal["common", "specialty"]
    dietary_tags: tuple[StrictStr, ...]


class IngredientSubstitution(BaseModel):
    """Alternatives suggested for a single original ingredient."""

    model_config = RECORD_CONFIG

    original: Annotated[StrictStr, Field(min_length=1)]
    alternatives: tuple[SubstitutionAlternative, ...]


class SubstitutionResult(BaseModel):
    """Validated substitution answer."""

    model_config = RECORD_CONFIG

    substitutions: tuple[IngredientSubstitution, ...]
    general_tips: tuple[StrictStr, ...] = ()


class RecipeGenerationResponse(BaseModel):
    """Success envelope for POST /recipes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    recipes: List[Recipe]
    total_count: Annotated[int, Field(ge=0)]
    processing_time: Annotated[int, Field(ge=0, description="Elapsed milliseconds")]


class SubstitutionResponse(BaseModel):
    """Success envelope for POST /substitutions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    substitutions: List[IngredientSubstitution]
    general_tips: List[str] = Field(default_factory=list)
    processing_time: Annotated[int, Field(ge=0, description="Elapsed milliseconds")]


class ErrorResponse(BaseModel):
    """Failure envelope shared by both endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = False
    error: str
    message: str
    details: Optional[List[dict[str, Any]]] = None
