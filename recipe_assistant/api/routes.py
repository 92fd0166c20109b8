"""HTTP routes: POST /recipes, POST /substitutions, CORS preflight and health.

Every pipeline failure arrives here as an Err and is rendered as the shared
error envelope. Validation errors are 400s; generation, parsing and anything
unexpected are 500s with generic messages.
"""

import json
import time
import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from recipe_assistant.models.models import ErrorResponse, RecipeGenerationResponse, SubstitutionResponse
from recipe_assistant.services.recipe_service import RecipeService
from recipe_assistant.utils.config import config
from recipe_assistant.utils.logger import logger
from recipe_assistant.utils.result import Err, ErrorKind, Ok, Result
from recipe_assistant.validation.ingredients import validate_query, validate_substitution_request


router = APIRouter()

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_recipe_service(request: Request) -> RecipeService:
    """Dependency returning the service built at application start-up."""
    service = getattr(request.app.state, "recipe_service", None)
    if service is None:
        raise RuntimeError("Recipe service not initialized")
    return service


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def error_response(err: Err) -> JSONResponse:
    """Render an Err as the failure envelope with the matching status code."""
    is_validation = err.kind == ErrorKind.VALIDATION
    body = ErrorResponse(
        error=err.kind.label,
        message=err.message,
        details=err.details if is_validation else None,
    )
    return JSONResponse(
        status_code=400 if is_validation else 500,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _log_fields(endpoint: str) -> dict[str, str]:
    """Correlation fields attached to every log record of one request."""
    return {"request_id": uuid.uuid4().hex[:8], "endpoint": endpoint}


def _failed(err: Err, fields: dict[str, str], started: float) -> JSONResponse:
    logger.warning(f"{err.kind.label} after {_elapsed_ms(started)}ms: {err.message}", extra=fields)
    return error_response(err)


def _unexpected(exc: Exception, fields: dict[str, str]) -> JSONResponse:
    logger.exception(f"Unhandled error in {fields['endpoint']}: {exc}", extra=fields)
    return error_response(Err(kind=ErrorKind.UNKNOWN, message="An unexpected error occurred", cause=exc))


async def _read_json(request: Request) -> Result[Any]:
    try:
        return Ok(await request.json())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(
            kind=ErrorKind.VALIDATION,
            message="Request body must be valid JSON",
            details=[{"field": "body", "message": "Request body must be valid JSON", "type": "json_invalid"}],
            cause=e,
        )


@router.post("/recipes", summary="Generate recipes from ingredients")
async def create_recipes(request: Request, service: RecipeService = Depends(get_recipe_service)) -> JSONResponse:
    """Validate the submission, run the pipeline once and return the recipes."""
    started = time.perf_counter()
    fields = _log_fields("POST /recipes")
    try:
        body = await _read_json(request)
        if not body.ok:
            return _failed(body, fields, started)

        query = validate_query(body.value)
        if not query.ok:
            return _failed(query, fields, started)

        result = await service.generate_recipes(query.value)
        if not result.ok:
            return _failed(result, fields, started)

        response = RecipeGenerationResponse(
            recipes=result.value,
            total_count=len(result.value),
            processing_time=_elapsed_ms(started),
        )
        logger.info(f"Returned {response.total_count} recipes in {response.processing_time}ms", extra=fields)
        return JSONResponse(content=response.model_dump(by_alias=True, mode="json", exclude_none=True))
    except Exception as e:
        return _unexpected(e, fields)


@router.post("/substitutions", summary="Suggest ingredient substitutions")
async def create_substitutions(
    request: Request, service: RecipeService = Depends(get_recipe_service)
) -> JSONResponse:
    """Validate the request and ask the model for substitution alternatives."""
    started = time.perf_counter()
    fields = _log_fields("POST /substitutions")
    try:
        body = await _read_json(request)
        if not body.ok:
            return _failed(body, fields, started)

        substitution_request = validate_substitution_request(body.value)
        if not substitution_request.ok:
            return _failed(substitution_request, fields, started)

        result = await service.generate_substitutions(substitution_request.value)
        if not result.ok:
            return _failed(result, fields, started)

        response = SubstitutionResponse(
            substitutions=list(result.value.substitutions),
            general_tips=list(result.value.general_tips),
            processing_time=_elapsed_ms(started),
        )
        logger.info(
            f"Returned {len(response.substitutions)} substitutions in {response.processing_time}ms", extra=fields
        )
        return JSONResponse(content=response.model_dump(by_alias=True, mode="json", exclude_none=True))
    except Exception as e:
        return _unexpected(e, fields)


@router.options("/recipes", include_in_schema=False)
@router.options("/substitutions", include_in_schema=False)
async def preflight(request: Request) -> Response:
    """Answer bare OPTIONS requests (full CORS preflights are handled by the middleware)."""
    headers = dict(PREFLIGHT_HEADERS)
    origin = request.headers.get("origin")
    if "*" in config.CORS_ALLOW_ORIGINS:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin in config.CORS_ALLOW_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
    return Response(status_code=200, headers=headers)


@router.get("/health", summary="Liveness check")
async def health() -> dict:
    return {"status": "healthy"}
