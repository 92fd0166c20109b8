"""Smart Recipe Assistant - HTTP service.

Single entry point for the recipe API:
- Validates configuration and builds the Gemini-backed recipe service on start-up
- Serves POST /recipes, POST /substitutions and GET /health
- Interactive API docs at /docs

Run with: python app.py
"""

import uvicorn

from recipe_assistant.api.app import create_app
from recipe_assistant.utils.config import config
from recipe_assistant.utils.logger import logger


app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting Smart Recipe Assistant on port {config.PORT}")
    logger.info(f"Model: {config.GEMINI_MODEL}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT, log_config=None)
