"""Shape-level parsing of raw model completions.

Steps, in order:
1. Strip Markdown code fences (```json ... ```) and surrounding whitespace.
2. json.loads the rest. A syntax error is terminal: no regex salvage.
3. Require the top-level array field ("recipes" or "substitutions").

Per-field validation is left to recipe_assistant.mapping.recipes.
"""

import json
import re
from typing import Any

from recipe_assistant.utils.logger import logger, preview
from recipe_assistant.utils.result import Err, ErrorKind, Ok, Result


# Opening fence with optional language tag, and closing fence
_OPENING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a leading/trailing Markdown code fence and trim whitespace.

    Text without fences is only trimmed, so stripping is idempotent.
    """
    cleaned = _OPENING_FENCE.sub("", text, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json_payload(text: str) -> Result[Any]:
    """Strip fences and decode JSON.

    Returns:
        Ok with the decoded value, or Err(PARSING) on a syntax error or on
        input the decoder refuses (oversized integers, excessive nesting).
    """
    cleaned = strip_code_fences(text or "")
    try:
        return Ok(json.loads(cleaned))
    except json.JSONDecodeError as e:
        logger.warning(f"Model output is not valid JSON ({e.msg} at line {e.lineno}, column {e.colno})")
        logger.warning(f"Raw model output: {preview(text)}")
        return Err(kind=ErrorKind.PARSING, message="Model output is not valid JSON", cause=e)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Model output could not be decoded: {type(e).__name__}: {e}")
        logger.warning(f"Raw model output: {preview(text)}")
        return Err(kind=ErrorKind.PARSING, message="Model output is not valid JSON", cause=e)


def _require_array_field(text: str, field: str) -> Result[dict]:
    decoded = parse_json_payload(text)
    if not decoded.ok:
        return decoded

    payload = decoded.value
    if not isinstance(payload, dict) or not isinstance(payload.get(field), list):
        logger.warning(f"Invalid response format: missing {field} array")
        logger.warning(f"Raw model output: {preview(text)}")
        return Err(kind=ErrorKind.PARSING, message=f"Invalid response format: missing {field} array")
    return Ok(payload)


def parse_recipe_response(text: str) -> Result[list]:
    """Parse a recipe completion into the raw list under ``recipes``.

    An empty ``recipes`` array is valid and yields an empty list.
    """
    result = _require_array_field(text, "recipes")
    if not result.ok:
        return result
    recipes = result.value["recipes"]
    logger.debug(f"Parsed {len(recipes)} raw recipe(s) from model output")
    return Ok(recipes)


def parse_substitution_response(text: str) -> Result[dict]:
    """Parse a substitution completion; returns the whole top-level object."""
    return _require_array_field(text, "substitutions")
