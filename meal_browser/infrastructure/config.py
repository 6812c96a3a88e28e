"""Configuration utilities for infrastructure layer.

Values come from environment variables; scripts load a .env file
first (python-dotenv). Only the gateway and the entry points read
these, the meal list itself never does.
"""

import os

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_S = 10.0


def get_api_url() -> str:
    """
    Get meal API base URL.

    Returns:
        MEAL_API_URL without trailing slash, defaults to http://localhost:8080
    """
    url = os.getenv("MEAL_API_URL") or DEFAULT_API_URL
    return url.rstrip("/")


def get_api_key() -> str:
    """
    Get the static API key sent as X-API-Key.

    Returns:
        MEAL_API_KEY, empty string if not set
    """
    return os.getenv("MEAL_API_KEY", "")


def get_request_timeout() -> float:
    """
    Get HTTP request timeout in seconds.

    Falls back to the default when MEAL_API_TIMEOUT_S is missing
    or not a positive number.
    """
    raw = os.getenv("MEAL_API_TIMEOUT_S")
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_S
    return value if value > 0 else DEFAULT_TIMEOUT_S


def get_log_level() -> str:
    """Get LOG_LEVEL (upper-cased), defaults to INFO."""
    return os.getenv("LOG_LEVEL", "INFO").upper()
