"""CLI command modules."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console

from termgate.config import DEFAULT_BASE_URL

_console = Console()

URL_OPTION = typer.Option(DEFAULT_BASE_URL, "--url", help="Terminal server URL")


def get_client(url: str) -> Any:
    """Build an AsyncAuthClient for ``url``, or exit with an error message."""
    from termgate.client import AsyncAuthClient

    if not url.startswith(("http://", "https://")):
        _console.print(f"[red]Invalid server URL: {url}[/red]")
        raise typer.Exit(1)

    return AsyncAuthClient(base_url=url)
