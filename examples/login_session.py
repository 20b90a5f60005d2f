#!/usr/bin/env python
"""
Drive a termgate login session from a script.

Activates a LoginOrchestrator against a running terminal server, prints every
state change, and tries SSH key login first when the server offers it, then
falls back to the password from TERMGATE_PASSWORD.

Usage:
    export TERMGATE_PASSWORD=...
    python examples/login_session.py --url http://localhost:4020
"""

import argparse
import asyncio
import os
import sys

from loguru import logger

from termgate import AsyncAuthClient, LoginOrchestrator


async def main(url: str) -> int:
    async with AsyncAuthClient(base_url=url) as client:
        login = LoginOrchestrator.from_client(client, attempt_timeout=60)
        login.on(
            "state-changed",
            lambda state: logger.debug("loading={} error={!r}", state.loading, state.error_message),
        )
        login.on("auth-success", lambda outcome: logger.success("Logged in: {}", outcome.to_dict()))

        result = await login.activate()
        if result is None or login.login_unavailable:
            logger.error(login.state.error_message)
            return 1
        if result.outcome is not None:
            return 0

        logger.info("{} (methods: {})", login.greeting, ", ".join(login.available_methods))

        if login.key_available:
            outcome = await login.attempt_key_login()
            if outcome and outcome.success:
                return 0
            logger.warning(login.state.error_message)

        password = os.getenv("TERMGATE_PASSWORD", "")
        if not login.password_available or not password:
            logger.error("No usable login method left")
            return 1

        outcome = await login.attempt_password_login(password)
        if outcome and outcome.success:
            return 0
        logger.error(login.state.error_message)
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="termgate login session example")
    parser.add_argument("--url", default="http://localhost:4020", help="Terminal server URL")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.url)))
