"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_assistant.api.routes import router
from recipe_assistant.services.recipe_service import RecipeService, initialize_recipe_service
from recipe_assistant.utils.config import config
from recipe_assistant.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the recipe service on start-up unless one was injected (fail-fast on bad config)."""
    if getattr(app.state, "recipe_service", None) is None:
        app.state.recipe_service = initialize_recipe_service()
    logger.info("Recipe Assistant ready")
    yield
    logger.info("Recipe Assistant shutting down")


def create_app(service: Optional[RecipeService] = None) -> FastAPI:
    """Create the application.

    Args:
        service: Pre-built RecipeService (tests pass one backed by a fake model).
            When None, the lifespan handler builds it from configuration.
    """
    app = FastAPI(
        title="Smart Recipe Assistant",
        description="Turns a list of ingredients into AI-generated recipes",
        lifespan=lifespan,
    )
    app.state.recipe_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(router)
    return app
