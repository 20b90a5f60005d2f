"""Interfaces of the collaborators the login core calls.

The loader and orchestrator only depend on these protocols, so tests and
hosts can swap in any implementation. ``AsyncAuthClient`` implements all
three service protocols over HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import AuthConfig, AuthResult


@runtime_checkable
class ConfigService(Protocol):
    async def get_auth_config(self) -> AuthConfig:
        """Fetch the server's auth config. Raises ConfigLoadError on failure."""
        ...


@runtime_checkable
class IdentityService(Protocol):
    async def get_current_system_user(self) -> str:
        """Return the current user id. Raises UserInfoLoadError on failure."""
        ...

    async def get_user_avatar(self, user_id: str) -> str:
        """Return an avatar URL, or "" when the user has none."""
        ...


@runtime_checkable
class AuthService(Protocol):
    async def authenticate_with_password(self, user_id: str, password: str) -> AuthResult:
        ...

    async def authenticate(self, user_id: str) -> AuthResult:
        """Authenticate with an enrolled SSH key."""
        ...


@runtime_checkable
class KeySigner(Protocol):
    """Signs server challenges with a private key the host holds."""

    public_key: str

    async def sign(self, challenge: str) -> str:
        """Return the base64 signature of a base64 challenge."""
        ...
