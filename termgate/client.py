"""Asynchronous HTTP client for the terminal server's auth API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ._http import build_headers, decode_body, handle_response
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, build_api_url, sanitize_base_url
from .constants import (
    API_TOKEN,
    AUTH_CONFIG_ENDPOINT,
    AVATAR_ENDPOINT,
    CHALLENGE_ENDPOINT,
    CURRENT_USER_ENDPOINT,
    ERROR_NO_KEYS,
    PASSWORD_ENDPOINT,
    SSH_KEY_ENDPOINT,
)
from .exceptions import (
    APIError,
    AvatarLoadError,
    ConfigLoadError,
    KeyAuthError,
    PasswordAuthError,
    UserInfoLoadError,
)
from .services import KeySigner
from .types import AuthConfig, AuthResult

logger = logging.getLogger(__name__)


class AsyncAuthClient:
    """Asynchronous client for the terminal server's auth endpoints.

    Implements ``ConfigService``, ``IdentityService`` and ``AuthService``,
    so one instance can back a whole login session.

    Example:
        >>> import asyncio
        >>> from termgate import AsyncAuthClient, LoginOrchestrator
        >>>
        >>> async def main():
        ...     async with AsyncAuthClient(base_url="http://localhost:4020") as client:
        ...         login = LoginOrchestrator.from_client(client)
        ...         await login.activate()
        ...         print(await login.attempt_password_login("hunter2"))
        >>>
        >>> asyncio.run(main())
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        api_token: str | None = None,
        key_signer: KeySigner | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the auth client.

        Args:
            base_url: Terminal server URL. Defaults to TERMGATE_BASE_URL or
                http://localhost:4020.
            api_token: Optional bearer token sent with every request. Falls
                back to the TERMGATE_API_TOKEN environment variable.
            key_signer: Signs SSH key challenges. Without one, key-based
                authentication always reports that no keys are available.
            timeout: Request timeout in seconds (default: 30).
        """
        self._base_url = sanitize_base_url(base_url)
        self._api_token = api_token or API_TOKEN
        self._key_signer = key_signer
        self._client = httpx.AsyncClient(timeout=timeout)

    def _url(self, path: str) -> str:
        return build_api_url(self._base_url, path)

    async def _get(self, path: str) -> httpx.Response:
        return await self._client.get(self._url(path), headers=build_headers(self._api_token))

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        return await self._client.post(
            self._url(path),
            headers=build_headers(self._api_token),
            json=payload,
        )

    async def get_auth_config(self) -> AuthConfig:
        """Fetch the server's authentication settings.

        Raises:
            ConfigLoadError: On a non-success response, a transport error or
                an undecodable body.
        """
        try:
            data = handle_response(await self._get(AUTH_CONFIG_ENDPOINT))
        except APIError as e:
            raise ConfigLoadError(f"Auth config request failed ({e.status_code})") from e
        except (httpx.HTTPError, ValueError) as e:
            raise ConfigLoadError(f"Auth config request failed: {e}") from e
        return AuthConfig.from_dict(data)

    async def get_current_system_user(self) -> str:
        """Return the user id of the system user the server runs as.

        Raises:
            UserInfoLoadError: If the user cannot be resolved.
        """
        try:
            data = handle_response(await self._get(CURRENT_USER_ENDPOINT))
        except (APIError, httpx.HTTPError, ValueError) as e:
            raise UserInfoLoadError("Could not resolve current user") from e

        user_id = data.get("userId") if isinstance(data, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise UserInfoLoadError("Server response did not include a userId")
        return user_id

    async def get_user_avatar(self, user_id: str) -> str:
        """Return the avatar URL (often a data: URL) for ``user_id``, or ""."""
        path = AVATAR_ENDPOINT.format(user_id=quote(user_id, safe=""))
        try:
            data = handle_response(await self._get(path))
        except (APIError, httpx.HTTPError, ValueError) as e:
            raise AvatarLoadError(f"Could not load avatar for {user_id}") from e

        avatar = data.get("avatar") if isinstance(data, dict) else None
        return avatar if isinstance(avatar, str) else ""

    async def authenticate_with_password(self, user_id: str, password: str) -> AuthResult:
        """Verify a system password.

        A rejected credential comes back as ``AuthResult(success=False)``;
        the server answers those with a 401 and a JSON error body.

        Raises:
            PasswordAuthError: On transport failure or an undecodable reply.
        """
        try:
            response = await self._post(PASSWORD_ENDPOINT, {"userId": user_id, "password": password})
            data = decode_body(response)
        except (httpx.HTTPError, ValueError) as e:
            raise PasswordAuthError("Password authentication request failed") from e

        result = AuthResult.from_dict(data)
        if response.status_code >= 400 and result.success:
            # A success flag on an error status is not trusted
            return AuthResult(success=False, error=result.error)
        return result

    async def authenticate(self, user_id: str) -> AuthResult:
        """Authenticate with an SSH key through a challenge/response exchange."""
        if self._key_signer is None:
            return AuthResult(success=False, error=ERROR_NO_KEYS)

        try:
            challenge = handle_response(await self._post(CHALLENGE_ENDPOINT, {"userId": user_id}))
            if not isinstance(challenge, dict) or "challenge" not in challenge:
                raise KeyAuthError("Server did not issue a challenge")

            signature = await self._key_signer.sign(challenge["challenge"])
            response = await self._post(
                SSH_KEY_ENDPOINT,
                {
                    "challengeId": challenge.get("challengeId"),
                    "publicKey": self._key_signer.public_key,
                    "signature": signature,
                    "userId": user_id,
                },
            )
            data = decode_body(response)
        except APIError as e:
            raise KeyAuthError(f"Challenge request failed ({e.status_code})") from e
        except (httpx.HTTPError, ValueError) as e:
            raise KeyAuthError("SSH key authentication request failed") from e

        result = AuthResult.from_dict(data)
        if response.status_code >= 400 and result.success:
            return AuthResult(success=False, error=result.error)
        logger.debug("SSH key auth for %s: success=%s", user_id, result.success)
        return result

    async def close(self) -> None:
        """Release the underlying HTTP client resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncAuthClient:
        return self

    async def __aexit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        await self.close()
