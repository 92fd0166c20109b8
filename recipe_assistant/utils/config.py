"""Configuration management for Recipe Assistant.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Default: gemini-2.5-flash (fast, reliable JSON output for recipe generation)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Server Port
        self.PORT: int = int(os.getenv("PORT", "7777"))
        # LLM Sampling Parameters
        # Temperature: Controls randomness (0.0 = deterministic, 1.0 = max randomness)
        # For recipes: 0.7 gives variety across the three suggestions
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Top P: nucleus sampling threshold
        self.TOP_P: float = float(os.getenv("TOP_P", "0.8"))
        # Max Output Tokens: three full recipes with instructions and nutrition fit in 8192
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "8192"))
        # Base URL used for share links and JSON-LD (falls back to localhost)
        self.APP_BASE_URL: Optional[str] = os.getenv("APP_BASE_URL") or None
        # Comma-separated list of allowed CORS origins
        self.CORS_ALLOW_ORIGINS: list[str] = [
            origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
        ]

    @property
    def base_url(self) -> str:
        """Public base URL of the deployment, without trailing slash."""
        return (self.APP_BASE_URL or f"http://localhost:{self.PORT}").rstrip("/")

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if not (0.0 < self.TOP_P <= 1.0):
            raise ValueError(
                f"TOP_P must be greater than 0.0 and at most 1.0, got: {self.TOP_P}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")
        if not self.CORS_ALLOW_ORIGINS:
            raise ValueError("CORS_ALLOW_ORIGINS must list at least one origin")


# Module-level config instance; validated at start-up by app.py and query.py
config = Config()
