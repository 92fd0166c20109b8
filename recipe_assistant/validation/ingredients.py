"""Input validation for recipe and substitution requests.

Two entry points mirror how input arrives:
- IngredientList: entry-time checks as the user adds ingredients one by one
  (pattern, length, case-insensitive duplicates, 15-item cap).
- validate_query / validate_substitution_request: submission-time checks on a
  raw JSON payload, producing a validated model or a field-level validation error.

Nothing in this module talks to the model; a failed validation never builds a prompt.
"""

from typing import Any, Iterable, Optional

from pydantic import ValidationError
from pydantic_core import PydanticCustomError

from recipe_assistant.models.models import (
    DEFAULT_SERVINGS,
    MAX_INGREDIENTS,
    MIN_INGREDIENTS,
    IngredientQuery,
    SubstitutionRequest,
    clean_ingredient_name,
)
from recipe_assistant.utils.logger import logger
from recipe_assistant.utils.result import Err, ErrorKind, Ok, Result


def format_validation_errors(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic ValidationError into ``{field, message, type}`` entries."""
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        details.append({"field": field, "message": error["msg"], "type": error["type"]})
    return details


def _validation_err(details: list[dict[str, Any]], cause: Optional[BaseException] = None) -> Err:
    first = details[0]
    logger.info(f"Validation failed on '{first['field']}': {first['message']}")
    return Err(kind=ErrorKind.VALIDATION, message=first["message"], details=details, cause=cause)


def validate_ingredient_name(name: Any) -> Result[str]:
    """Check a single ingredient name as typed by the user.

    Returns:
        Ok with the trimmed name, or Err(VALIDATION) with the rule it broke.
    """
    try:
        return Ok(clean_ingredient_name(name))
    except PydanticCustomError as e:
        return _validation_err([{"field": "ingredient", "message": e.message(), "type": e.type}], e)


def _validate_payload(model: type, payload: Any) -> Result:
    if not isinstance(payload, dict):
        return _validation_err(
            [{"field": "body", "message": "Request body must be a JSON object", "type": "body_type"}]
        )
    try:
        return Ok(model.model_validate(payload))
    except ValidationError as e:
        return _validation_err(format_validation_errors(e), e)


def validate_query(payload: Any) -> Result[IngredientQuery]:
    """Validate a raw recipe request body into an IngredientQuery.

    Args:
        payload: Decoded JSON body with ``ingredients``, optional ``dietaryFilters``
            and optional ``servings`` (defaults to 4).

    Returns:
        Ok(IngredientQuery) or Err(VALIDATION) whose message is the first
        offending field's message and whose details list every field error.
    """
    return _validate_payload(IngredientQuery, payload)


def validate_substitution_request(payload: Any) -> Result[SubstitutionRequest]:
    """Validate a raw substitution request body."""
    return _validate_payload(SubstitutionRequest, payload)


class IngredientList:
    """Ingredients entered one at a time, checked as they are added.

    A single ingredient is allowed while typing; submission needs at least two.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._items: list[str] = []
        for name in names:
            result = self.add(name)
            if not result.ok:
                raise ValueError(f"Cannot add ingredient {name!r}: {result.message}")

    def add(self, name: Any) -> Result[str]:
        """Add an ingredient after pattern, duplicate and capacity checks."""
        result = validate_ingredient_name(name)
        if not result.ok:
            return result

        cleaned = result.value
        if cleaned.lower() in (item.lower() for item in self._items):
            return _validation_err(
                [{"field": "ingredient", "message": "This ingredient is already added", "type": "ingredient_duplicate"}]
            )
        if len(self._items) >= MAX_INGREDIENTS:
            return _validation_err(
                [{"field": "ingredients", "message": "Maximum 15 ingredients allowed", "type": "ingredients_too_many"}]
            )

        self._items.append(cleaned)
        return Ok(cleaned)

    def remove(self, index: int) -> str:
        """Remove and return the ingredient at ``index``."""
        return self._items.pop(index)

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(self._items)

    @property
    def can_submit(self) -> bool:
        return len(self._items) >= MIN_INGREDIENTS

    def __len__(self) -> int:
        return len(self._items)

    def to_query(self, dietary_filters: Iterable[str] = (), servings: int = DEFAULT_SERVINGS) -> Result[IngredientQuery]:
        """Build the submission payload and validate it like the HTTP endpoint does."""
        return validate_query(
            {
                "ingredients": list(self._items),
                "dietaryFilters": list(dietary_filters),
                "servings": servings,
            }
        )
