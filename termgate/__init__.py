"""termgate - login orchestration for web terminal sessions."""

from importlib.metadata import PackageNotFoundError, version

from .client import AsyncAuthClient
from .exceptions import (
    APIError,
    AvatarLoadError,
    ConfigLoadError,
    KeyAuthError,
    PasswordAuthError,
    TermgateError,
    UserInfoLoadError,
)
from .loader import AuthLoader
from .orchestrator import LoginOrchestrator
from .types import AuthConfig, AuthOutcome, AuthResult, Identity, LoadResult, LoginUiState

__all__ = [
    "AsyncAuthClient",
    "AuthLoader",
    "LoginOrchestrator",
    "AuthConfig",
    "AuthOutcome",
    "AuthResult",
    "Identity",
    "LoadResult",
    "LoginUiState",
    "TermgateError",
    "APIError",
    "ConfigLoadError",
    "UserInfoLoadError",
    "AvatarLoadError",
    "PasswordAuthError",
    "KeyAuthError",
]

try:
    __version__ = version("termgate")
except PackageNotFoundError:
    __version__ = "0.1.0"
