"""Pytest configuration and fixtures for integration tests.

Loads .env from the project root and skips the whole directory when no
Gemini API key is available.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env before collection so GEMINI_API_KEY is visible to the config module."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)
    config.addinivalue_line("markers", "integration: tests that call the real Gemini API")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if GEMINI_API_KEY is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
