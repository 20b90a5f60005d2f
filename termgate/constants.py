"""Constants for termgate endpoints and user-facing messages."""

from __future__ import annotations

import os

# Server and transport
BASE_URL = os.environ.get("TERMGATE_BASE_URL", "http://localhost:4020")
API_TOKEN = os.environ.get("TERMGATE_API_TOKEN")
TIMEOUT_SECONDS = float(os.environ.get("TERMGATE_TIMEOUT", "30"))

# Auth API endpoints
AUTH_CONFIG_ENDPOINT = "/api/auth/config"
CURRENT_USER_ENDPOINT = "/api/auth/current-user"
AVATAR_ENDPOINT = "/api/auth/avatar/{user_id}"
PASSWORD_ENDPOINT = "/api/auth/password"
CHALLENGE_ENDPOINT = "/api/auth/challenge"
SSH_KEY_ENDPOINT = "/api/auth/ssh-key"

# Auth methods reported in outcomes
METHOD_PASSWORD = "password"
METHOD_SSH_KEY = "ssh-key"
METHOD_NO_AUTH = "no-auth"

# Events emitted by the orchestrator
EVENT_AUTH_SUCCESS = "auth-success"
EVENT_SHOW_KEY_MANAGER = "show-key-manager"
EVENT_STATE_CHANGED = "state-changed"

# Error messages
ERROR_USER_INFO = "Failed to load user information"
ERROR_PASSWORD_FAILED = "Password authentication failed"
ERROR_KEY_FAILED = "SSH key authentication failed. Please try password login."
ERROR_NO_KEYS = "No SSH keys available"
ERROR_NO_LOGIN_METHOD = "No login method is enabled. Contact your administrator."
