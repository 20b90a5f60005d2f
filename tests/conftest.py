"""Test configuration for termgate tests."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest

from termgate import AuthConfig, AuthResult, LoginOrchestrator


class FakeServices:
    """In-memory stand-in for the config, identity and auth services.

    Any ``*_error`` value is raised from the matching call. When ``gate`` is
    set, auth calls wait on it so a test can observe an in-flight attempt.
    """

    def __init__(
        self,
        config: Optional[AuthConfig] = None,
        user_id: str = "alice",
        avatar: str = "",
        password_result: Any = None,
        key_result: Any = None,
        config_error: Optional[Exception] = None,
        user_error: Optional[Exception] = None,
        avatar_error: Optional[Exception] = None,
    ) -> None:
        self.config = config or AuthConfig()
        self.user_id = user_id
        self.avatar = avatar
        self.password_result = password_result or AuthResult(success=True)
        self.key_result = key_result or AuthResult(success=True)
        self.config_error = config_error
        self.user_error = user_error
        self.avatar_error = avatar_error
        self.gate: Optional[asyncio.Event] = None
        self.calls: list[tuple] = []

    async def get_auth_config(self) -> AuthConfig:
        self.calls.append(("config",))
        if self.config_error:
            raise self.config_error
        return self.config

    async def get_current_system_user(self) -> str:
        self.calls.append(("user",))
        if self.user_error:
            raise self.user_error
        return self.user_id

    async def get_user_avatar(self, user_id: str) -> str:
        self.calls.append(("avatar", user_id))
        if self.avatar_error:
            raise self.avatar_error
        return self.avatar

    async def authenticate_with_password(self, user_id: str, password: str) -> AuthResult:
        self.calls.append(("password", user_id, password))
        return await self._settle(self.password_result)

    async def authenticate(self, user_id: str) -> AuthResult:
        self.calls.append(("ssh-key", user_id))
        return await self._settle(self.key_result)

    async def _settle(self, result: Any) -> AuthResult:
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(result, BaseException):
            raise result
        return result

    def auth_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("password", "ssh-key")]

    async def __aenter__(self) -> FakeServices:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.calls.append(("close",))


class Recorder:
    """Collects emitted events."""

    def __init__(self, orchestrator: LoginOrchestrator) -> None:
        self.outcomes: list = []
        self.key_manager_requests = 0
        self.state_changes = 0
        orchestrator.on("auth-success", self.outcomes.append)
        orchestrator.on("show-key-manager", self._on_key_manager)
        orchestrator.on("state-changed", self._on_state)

    def _on_key_manager(self) -> None:
        self.key_manager_requests += 1

    def _on_state(self, state) -> None:
        self.state_changes += 1


@pytest.fixture
def make_session():
    """Factory returning (orchestrator, services, recorder)."""

    def _make(**kwargs: Any):
        timeout = kwargs.pop("attempt_timeout", None)
        services = FakeServices(**kwargs)
        orchestrator = LoginOrchestrator.from_client(services, attempt_timeout=timeout)
        return orchestrator, services, Recorder(orchestrator)

    return _make


@pytest.fixture
def fake_services():
    """The FakeServices class, for tests that wire collaborators by hand."""
    return FakeServices
