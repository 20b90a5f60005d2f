"""Authentication commands for the termgate CLI."""

from __future__ import annotations

import asyncio
import sys

import typer
from rich.console import Console
from rich.table import Table

from termgate.constants import ERROR_USER_INFO
from termgate.exceptions import TermgateError
from termgate.orchestrator import LoginOrchestrator
from termgate.types import AuthOutcome

from . import URL_OPTION, get_client

app = typer.Typer(help="Inspect and perform terminal server authentication")
console = Console()


@app.command()
def config(url: str = URL_OPTION) -> None:
    """Show the server's authentication settings."""

    async def _fetch():
        async with get_client(url) as client:
            return await client.get_auth_config()

    try:
        auth_config = asyncio.run(_fetch())
    except TermgateError as e:
        console.print(f"[red]Could not load auth config: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Auth Config")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in auth_config.to_dict().items():
        table.add_row(key, "[green]yes[/green]" if value else "no")
    console.print(table)


@app.command()
def whoami(url: str = URL_OPTION) -> None:
    """Show the system user the server runs as."""

    async def _resolve():
        async with get_client(url) as client:
            user_id = await client.get_current_system_user()
            try:
                avatar = await client.get_user_avatar(user_id)
            except TermgateError:
                avatar = ""
            return user_id, avatar

    try:
        user_id, avatar = asyncio.run(_resolve())
    except TermgateError:
        console.print(f"[red]{ERROR_USER_INFO}[/red]")
        raise typer.Exit(1)

    console.print(f"  User ID: {user_id}")
    if avatar:
        label = "data URL" if avatar.startswith("data:") else avatar
        console.print(f"  Avatar: {label}")


async def _login(url: str, password_stdin: bool) -> AuthOutcome:
    async with get_client(url) as client:
        login = LoginOrchestrator.from_client(client)
        result = await login.activate()

        if result is None:
            console.print(f"[red]{login.state.error_message}[/red]")
            raise typer.Exit(1)

        if result.outcome is not None:
            console.print("[dim]No authentication required.[/dim]")
            return result.outcome

        if login.login_unavailable:
            console.print(f"[red]{login.state.error_message}[/red]")
            raise typer.Exit(1)

        if not login.password_available:
            console.print("[yellow]This server only accepts SSH key authentication.[/yellow]")
            console.print("Log in from the web interface with an enrolled key.")
            raise typer.Exit(1)

        console.print(f"[bold]{login.greeting}[/bold]")
        if password_stdin:
            password = (await asyncio.to_thread(sys.stdin.readline)).rstrip("\n")
        else:
            password = await asyncio.to_thread(typer.prompt, "Password", hide_input=True)

        outcome = await login.attempt_password_login(password)
        if outcome is None or not outcome.success:
            console.print(f"[red]{login.state.error_message or 'Password is required'}[/red]")
            raise typer.Exit(1)
        return outcome


@app.command()
def login(
    url: str = URL_OPTION,
    password_stdin: bool = typer.Option(False, "--password-stdin", help="Read the password from stdin"),
    print_token: bool = typer.Option(False, "--print-token", help="Print the issued session token"),
) -> None:
    """Log in to the terminal server with a system password."""
    outcome = asyncio.run(_login(url, password_stdin))

    console.print(f"[green]Authenticated as {outcome.user_id} ({outcome.auth_method})[/green]")
    if print_token and outcome.token:
        typer.echo(outcome.token)
