"""Domain mapping from parsed model output to validated records.

Each raw recipe object gets a locally generated id and is validated against the
full Recipe schema. The outcome per recipe is a tagged variant:
MappedRecipe (valid) or RejectedRecipe (field-level errors). Rejected recipes
are dropped whole; nothing is patched or defaulted.

Batch policy:
- empty batch -> Ok with no recipes
- some valid  -> Ok with the valid recipes (rejections reported and logged)
- none valid  -> Err(PARSING)
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from recipe_assistant.models.models import IngredientSubstitution, Recipe, SubstitutionResult
from recipe_assistant.utils.logger import logger
from recipe_assistant.utils.result import Err, ErrorKind, Ok, Result


def generate_recipe_id() -> str:
    """Short random identifier; unique enough within a session, not globally."""
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class MappedRecipe:
    recipe: Recipe


@dataclass(frozen=True)
class RejectedRecipe:
    """A raw recipe that failed structural validation."""

    index: int
    errors: list[dict[str, Any]]
    name: Optional[str] = None


RecipeMapping = Union[MappedRecipe, RejectedRecipe]


@dataclass(frozen=True)
class MappingReport:
    """Valid recipes of a batch plus what was rejected."""

    recipes: list[Recipe] = field(default_factory=list)
    rejected: list[RejectedRecipe] = field(default_factory=list)


def _field_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]


def map_recipe(raw: Any, recipe_id: str, index: int = 0) -> RecipeMapping:
    """Validate one raw recipe object and attach ``recipe_id``.

    Any ``id`` supplied by the model is ignored.
    """
    if not isinstance(raw, dict):
        return RejectedRecipe(
            index=index,
            errors=[{"field": "", "message": f"Recipe must be an object, got {type(raw).__name__}"}],
        )

    data = {key: value for key, value in raw.items() if key != "id"}
    data["id"] = recipe_id
    try:
        return MappedRecipe(recipe=Recipe.model_validate(data))
    except ValidationError as e:
        name = raw.get("name") if isinstance(raw.get("name"), str) else None
        return RejectedRecipe(index=index, errors=_field_errors(e), name=name)


def _unique_ids(count: int) -> list[str]:
    ids: list[str] = []
    seen: set[str] = set()
    while len(ids) < count:
        candidate = generate_recipe_id()
        if candidate not in seen:
            seen.add(candidate)
            ids.append(candidate)
    return ids


def map_recipes(raw_recipes: Iterable[Any]) -> Result[MappingReport]:
    """Map a parsed ``recipes`` array into validated Recipe records.

    Identifiers are distinct within the batch.
    """
    raw_list = list(raw_recipes)
    report = MappingReport()

    for index, (raw, recipe_id) in enumerate(zip(raw_list, _unique_ids(len(raw_list)))):
        outcome = map_recipe(raw, recipe_id, index)
        if isinstance(outcome, MappedRecipe):
            report.recipes.append(outcome.recipe)
        else:
            report.rejected.append(outcome)
            summary = "; ".join(f"{err['field']}: {err['message']}" for err in outcome.errors[:5])
            logger.warning(f"Rejected recipe #{index + 1} ({outcome.name or 'unnamed'}): {summary}")

    if raw_list and not report.recipes:
        return Err(
            kind=ErrorKind.PARSING,
            message="No recipe in the model output matched the expected structure",
            details=[{"index": r.index, "errors": r.errors} for r in report.rejected],
        )

    logger.info(f"Mapped {len(report.recipes)} recipe(s), rejected {len(report.rejected)}")
    return Ok(report)


def map_substitutions(payload: dict) -> Result[SubstitutionResult]:
    """Validate a parsed substitution answer with the same drop-invalid policy."""
    valid: list[IngredientSubstitution] = []
    rejected: list[dict[str, Any]] = []
    entries = payload.get("substitutions", [])

    for index, raw in enumerate(entries):
        try:
            valid.append(IngredientSubstitution.model_validate(raw))
        except ValidationError as e:
            rejected.append({"index": index, "errors": _field_errors(e)})
            logger.warning(f"Rejected substitution #{index + 1}: {len(e.errors())} field error(s)")

    if entries and not valid:
        return Err(
            kind=ErrorKind.PARSING,
            message="No substitution in the model output matched the expected structure",
            details=rejected,
        )

    tips = payload.get("generalTips") or []
    if not isinstance(tips, list) or not all(isinstance(tip, str) for tip in tips):
        logger.warning("Ignoring malformed generalTips in substitution output")
        tips = []

    return Ok(SubstitutionResult(substitutions=tuple(valid), general_tips=tuple(tips)))
