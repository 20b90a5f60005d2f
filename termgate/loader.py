"""Loads auth config and the current identity when a login session starts."""

from __future__ import annotations

import logging

from .constants import METHOD_NO_AUTH
from .exceptions import UserInfoLoadError
from .services import ConfigService, IdentityService
from .types import AuthConfig, AuthOutcome, Identity, LoadResult

logger = logging.getLogger(__name__)


class AuthLoader:
    """Config & identity loader.

    Each step awaits the previous one: config, then user id, then avatar.
    Only a failure to resolve the user id fails the load.
    """

    def __init__(self, config_service: ConfigService, identity_service: IdentityService) -> None:
        self._config_service = config_service
        self._identity_service = identity_service

    async def load(self) -> LoadResult:
        """Run the load sequence once. Never retries.

        Raises:
            UserInfoLoadError: If the current user id cannot be resolved.
        """
        config = await self._load_config()

        try:
            user_id = await self._identity_service.get_current_system_user()
        except UserInfoLoadError:
            raise
        except Exception as e:
            raise UserInfoLoadError("Could not resolve current user") from e
        if not isinstance(user_id, str) or not user_id:
            raise UserInfoLoadError("Identity service returned no user id")
        logger.info("Current user: %s", user_id)

        identity = Identity(user_id=user_id, avatar_url=await self._load_avatar(user_id))

        if config.no_auth:
            logger.info("No authentication required, logging in as %s", user_id)
            outcome = AuthOutcome(success=True, user_id=user_id, auth_method=METHOD_NO_AUTH)
            return LoadResult(config=config, identity=identity, outcome=outcome)

        return LoadResult(config=config, identity=identity)

    async def _load_config(self) -> AuthConfig:
        try:
            config = await self._config_service.get_auth_config()
        except Exception as e:
            logger.warning("Failed to load auth config, using defaults: %s", e)
            return AuthConfig()
        logger.debug("Auth config loaded: %s", config)
        return config

    async def _load_avatar(self, user_id: str) -> str:
        try:
            avatar = await self._identity_service.get_user_avatar(user_id)
        except Exception as e:
            logger.debug("No avatar for %s: %s", user_id, e)
            return ""
        return avatar or ""
