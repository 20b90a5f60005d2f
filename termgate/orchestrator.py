"""Login orchestration: method selection, attempts and outcome signaling.

``LoginOrchestrator`` owns a ``LoginUiState`` and drives one login session:

1. ``activate()`` runs the loader once. A server that needs no auth logs the
   user in right away with an ``auth-success`` event.
2. Otherwise the host calls ``attempt_password_login`` or
   ``attempt_key_login`` in response to user input. At most one attempt runs
   at a time; a trigger while ``state.loading`` is set is ignored.
3. Success emits ``auth-success`` with an ``AuthOutcome``. Failure sets
   ``state.error_message`` and emits nothing.

All collaborator failures are caught here. The host never sees an exception
from an attempt, only state changes and events.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from .constants import (
    ERROR_KEY_FAILED,
    ERROR_NO_LOGIN_METHOD,
    ERROR_PASSWORD_FAILED,
    ERROR_USER_INFO,
    EVENT_AUTH_SUCCESS,
    EVENT_SHOW_KEY_MANAGER,
    EVENT_STATE_CHANGED,
    METHOD_PASSWORD,
    METHOD_SSH_KEY,
)
from .events import EventEmitter, Listener
from .exceptions import UserInfoLoadError
from .loader import AuthLoader
from .services import AuthService
from .types import AuthConfig, AuthMethod, AuthOutcome, AuthResult, Identity, LoadResult, LoginUiState

logger = logging.getLogger(__name__)


class LoginOrchestrator:
    """Drives a single login session against an ``AuthService``.

    Args:
        auth_service: Performs password and SSH key authentication.
        loader: Resolves config and identity on activation.
        attempt_timeout: Seconds to wait for one attempt before treating it
            as failed. ``None`` (default) waits for the call to settle.
    """

    def __init__(
        self,
        auth_service: AuthService,
        loader: AuthLoader,
        *,
        attempt_timeout: Optional[float] = None,
    ) -> None:
        self._auth_service = auth_service
        self._loader = loader
        self._attempt_timeout = attempt_timeout

        self.state = LoginUiState()
        self.config = AuthConfig()
        self.identity = Identity()
        self.events = EventEmitter()

        self.load_failed = False
        self.authenticated = False
        self._activated = False
        self._load_result: Optional[LoadResult] = None

    @classmethod
    def from_client(cls, client: Any, **kwargs: Any) -> LoginOrchestrator:
        """Build an orchestrator whose collaborators are all ``client``."""
        return cls(client, AuthLoader(client, client), **kwargs)

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        return self.events.on(event, listener)

    # ------------------------------------------------------------------
    # Derived availability
    # ------------------------------------------------------------------

    @property
    def password_available(self) -> bool:
        return not self.config.disallow_user_password

    @property
    def key_available(self) -> bool:
        return self.config.enable_ssh_keys

    @property
    def available_methods(self) -> tuple[AuthMethod, ...]:
        methods: list[AuthMethod] = []
        if self.password_available:
            methods.append(METHOD_PASSWORD)
        if self.key_available:
            methods.append(METHOD_SSH_KEY)
        return tuple(methods)

    @property
    def login_unavailable(self) -> bool:
        """True when the config leaves no way to log in interactively."""
        return not self.config.no_auth and not self.available_methods

    @property
    def ready(self) -> bool:
        """True once identity is resolved and the session is not yet logged in."""
        return self._load_result is not None and bool(self.identity.user_id) and not self.authenticated

    @property
    def greeting(self) -> str:
        if self.identity.user_id:
            return f"Welcome back, {self.identity.user_id}"
        return "Please authenticate to continue"

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    async def activate(self) -> Optional[LoadResult]:
        """Load config and identity. Only the first call does any work.

        Returns the load result, or ``None`` when the user could not be
        resolved (the session then stays in the failed state).
        """
        if self._activated:
            return self._load_result
        self._activated = True

        try:
            result = await self._loader.load()
        except UserInfoLoadError as e:
            logger.error("Failed to load user information: %s", e)
            self.load_failed = True
            self._update(error_message=ERROR_USER_INFO)
            return None

        self._load_result = result
        self.config = result.config
        self.identity = result.identity

        if result.outcome is not None:
            self.authenticated = True
            self.events.emit(EVENT_AUTH_SUCCESS, result.outcome)
            return result

        if self.login_unavailable:
            logger.warning("Auth config allows neither password nor SSH key login")
            self._update(error_message=ERROR_NO_LOGIN_METHOD)
        else:
            self._notify()
        return result

    # ------------------------------------------------------------------
    # User input
    # ------------------------------------------------------------------

    def set_password_input(self, value: str) -> None:
        self._update(password_input=value)

    def dismiss_error(self) -> None:
        self._update(error_message="")

    def dismiss_success(self) -> None:
        self._update(success_message="")

    def request_key_manager(self) -> bool:
        """Ask the host to show SSH key management. Returns whether it was signaled."""
        if not self.key_available:
            return False
        self.events.emit(EVENT_SHOW_KEY_MANAGER)
        return True

    async def attempt_password_login(self, password: Optional[str] = None) -> Optional[AuthOutcome]:
        """Log in with a password (``state.password_input`` when omitted).

        Returns the attempt's outcome, or ``None`` if the attempt was not
        started (already loading, not ready, path disabled, empty password).
        """
        if password is None:
            password = self.state.password_input
        if not self._can_attempt(METHOD_PASSWORD, self.password_available):
            return None
        if not password:
            logger.debug("Ignoring password login with empty password")
            return None

        user_id = self.identity.user_id
        return await self._run_attempt(
            METHOD_PASSWORD,
            lambda: self._auth_service.authenticate_with_password(user_id, password),
            ERROR_PASSWORD_FAILED,
        )

    async def attempt_key_login(self) -> Optional[AuthOutcome]:
        """Log in with an enrolled SSH key. Same return contract as password login."""
        if not self._can_attempt(METHOD_SSH_KEY, self.key_available):
            return None

        user_id = self.identity.user_id
        return await self._run_attempt(
            METHOD_SSH_KEY,
            lambda: self._auth_service.authenticate(user_id),
            ERROR_KEY_FAILED,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _can_attempt(self, method: AuthMethod, available: bool) -> bool:
        if self.state.loading:
            logger.debug("Ignoring %s login, an attempt is already in flight", method)
            return False
        if not self.ready:
            logger.debug("Ignoring %s login, session is not ready", method)
            return False
        if not available:
            logger.debug("Ignoring %s login, method is disabled", method)
            return False
        return True

    async def _run_attempt(
        self,
        method: AuthMethod,
        call: Callable[[], Awaitable[AuthResult]],
        fallback: str,
    ) -> AuthOutcome:
        logger.info("Attempting %s authentication for %s", method, self.identity.user_id)
        self._update(loading=True, error_message="")
        outcome = None
        try:
            outcome = await self._settle(method, call, fallback)
        finally:
            if outcome is None:
                self._update(loading=False)
            else:
                self.state.loading = False

        if outcome.success:
            changes: dict[str, Any] = {"loading": False}
            if method == METHOD_PASSWORD:
                changes["password_input"] = ""
            self.authenticated = True
            self._update(**changes)
            self.events.emit(EVENT_AUTH_SUCCESS, outcome)
        else:
            self._update(loading=False, error_message=outcome.error or fallback)
        return outcome

    async def _settle(
        self,
        method: AuthMethod,
        call: Callable[[], Awaitable[AuthResult]],
        fallback: str,
    ) -> AuthOutcome:
        user_id = self.identity.user_id
        try:
            if self._attempt_timeout is None:
                result = await call()
            else:
                result = await asyncio.wait_for(call(), self._attempt_timeout)
        except asyncio.TimeoutError:
            logger.warning("%s authentication timed out after %ss", method, self._attempt_timeout)
            return AuthOutcome(success=False, user_id=user_id, auth_method=method, error=fallback)
        except Exception as e:
            logger.warning("%s authentication error: %s", method, e)
            return AuthOutcome(success=False, user_id=user_id, auth_method=method, error=fallback)

        if result.success:
            logger.info("%s authentication succeeded for %s", method, user_id)
            return AuthOutcome(
                success=True,
                user_id=result.user_id or user_id,
                auth_method=method,
                token=result.token,
            )
        return AuthOutcome(
            success=False,
            user_id=user_id,
            auth_method=method,
            error=result.error or fallback,
        )

    def _update(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self.state, name, value)
        self._notify()

    def _notify(self) -> None:
        self.events.emit(EVENT_STATE_CHANGED, self.state)
