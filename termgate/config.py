"""Configuration helpers for termgate."""

from __future__ import annotations

from .constants import BASE_URL, TIMEOUT_SECONDS

DEFAULT_BASE_URL = BASE_URL
DEFAULT_TIMEOUT_SECONDS = TIMEOUT_SECONDS


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.rstrip("/")


def build_api_url(base_url: str, path: str) -> str:
    """Join a sanitized base URL and an endpoint path."""
    return f"{sanitize_base_url(base_url)}{path}"
