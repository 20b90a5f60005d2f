"""Typed values exchanged between the loader, the orchestrator and the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

AuthMethod = Literal["password", "ssh-key", "no-auth"]


@dataclass(frozen=True)
class AuthConfig:
    """Server-side authentication settings, fetched once per activation.

    Every flag defaults to ``False``: a missing or broken config means
    password login is required and nothing is skipped.
    """

    enable_ssh_keys: bool = False
    disallow_user_password: bool = False
    no_auth: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> AuthConfig:
        """Build from the server's JSON object.

        A flag is only enabled when the JSON value is literally ``true``.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            enable_ssh_keys=data.get("enableSSHKeys") is True,
            disallow_user_password=data.get("disallowUserPassword") is True,
            no_auth=data.get("noAuth") is True,
        )

    def to_dict(self) -> dict[str, bool]:
        return {
            "enableSSHKeys": self.enable_ssh_keys,
            "disallowUserPassword": self.disallow_user_password,
            "noAuth": self.no_auth,
        }


@dataclass(frozen=True)
class Identity:
    """The system user the session authenticates as."""

    user_id: str = ""
    avatar_url: str = ""  # "" means no avatar


@dataclass
class AuthResult:
    """Result of a call to the authentication service."""

    success: bool
    error: Optional[str] = None
    user_id: Optional[str] = None
    token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> AuthResult:
        if not isinstance(data, dict):
            return cls(success=False)
        error = data.get("error")
        user_id = data.get("userId")
        token = data.get("token")
        return cls(
            success=data.get("success") is True,
            error=error if isinstance(error, str) and error else None,
            user_id=user_id if isinstance(user_id, str) else None,
            token=token if isinstance(token, str) else None,
        )


@dataclass
class AuthOutcome:
    """The single normalized result reported to the host application."""

    success: bool
    user_id: str
    auth_method: AuthMethod
    error: Optional[str] = None
    token: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "userId": self.user_id,
            "authMethod": self.auth_method,
        }
        if self.error is not None:
            data["error"] = self.error
        if self.token is not None:
            data["token"] = self.token
        return data


@dataclass
class LoginUiState:
    """Mutable session state the rendering layer reflects."""

    loading: bool = False
    error_message: str = ""
    success_message: str = ""
    password_input: str = ""


@dataclass
class LoadResult:
    """What one activation of the loader produced.

    ``outcome`` is set only when the server needs no authentication; the
    host should treat the session as logged in without any prompt.
    """

    config: AuthConfig
    identity: Identity
    outcome: Optional[AuthOutcome] = None
