"""Environment configuration setup utilities.

This module provides functions for loading environment variables from .env files
and configuring the SDK for local development and sandbox testing.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from gemini_api.helpers import DEFAULT_API_URL, SANDBOX_API_URL

log = logging.getLogger(__name__)


def _lookup(name: str, environment: str, default: str) -> str:
    """Read NAME_<ENVIRONMENT>, then NAME, then fall back to the default."""
    return os.environ.get(
        f"{name}_{environment.upper()}", os.environ.get(name, default)
    )


def setup_environment() -> tuple[str, str, str]:
    """Load and return environment variables for Gemini API configuration.

    Loads environment variables from a .env file if present, otherwise falls
    back to system environment variables. Reads environment-specific variables
    based on the ENVIRONMENT variable (defaults to 'production'), falling back
    to the unsuffixed names.

    Returns:
        Tuple:
            - api_url: The API base URL (GEMINI_URL)
            - api_key: The API key (GEMINI_API_KEY)
            - api_secret: The API secret (GEMINI_API_SECRET)

    """
    # Load the .env file if it exists
    env_file_path = Path(".env")
    if env_file_path.exists():
        log.info("Loading environment variables from .env file")
        load_dotenv(env_file_path)
    else:
        log.info(".env file not found. Falling back to Bash Environment variables.")

    environment = os.getenv("ENVIRONMENT", "production").lower()
    log.info("Using %s environment", environment)

    default_url = SANDBOX_API_URL if environment == "sandbox" else DEFAULT_API_URL
    api_url = _lookup("GEMINI_URL", environment, default_url) or default_url
    api_key = _lookup("GEMINI_API_KEY", environment, "")
    api_secret = _lookup("GEMINI_API_SECRET", environment, "")

    return api_url, api_key, api_secret
