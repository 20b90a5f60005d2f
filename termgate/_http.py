"""Shared HTTP request utilities for the auth client."""

from __future__ import annotations

from typing import Any

import httpx

from .exceptions import APIError


def build_headers(api_token: str | None = None) -> dict[str, str]:
    """Build request headers, with bearer authentication when a token is set."""
    headers = {"Content-Type": "application/json", "Accept": "application/json"}

    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"

    return headers


def decode_body(response: httpx.Response) -> Any:
    """Decode a JSON body regardless of status. Raises ValueError on bad JSON."""
    if response.content:
        return response.json()
    return {}


def handle_response(response: httpx.Response) -> Any:
    """Process HTTP response, raising APIError for failures."""
    if response.status_code >= 400:
        raise APIError(
            message=response.text or "Terminal server call failed",
            status_code=response.status_code,
            response=response,
        )

    return decode_body(response)
