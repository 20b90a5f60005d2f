"""Custom exceptions raised by termgate."""

from __future__ import annotations

from typing import Any, Optional


class TermgateError(Exception):
    """Base exception for all termgate specific failures."""


class APIError(TermgateError):
    """Raised when the terminal server returns a non-successful response."""

    def __init__(self, message: str, status_code: int, response: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class ConfigLoadError(TermgateError):
    """Raised when the auth configuration cannot be fetched or decoded."""


class UserInfoLoadError(TermgateError):
    """Raised when the current system user cannot be resolved."""


class AvatarLoadError(TermgateError):
    """Raised when the avatar for a user cannot be fetched."""


class PasswordAuthError(TermgateError):
    """Raised when a password authentication call fails below the protocol level."""


class KeyAuthError(TermgateError):
    """Raised when the SSH key challenge/response exchange fails."""
