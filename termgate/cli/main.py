"""Main entry point for the termgate CLI."""

from __future__ import annotations

import logging

try:
    import typer
except ImportError:
    import sys

    print("termgate CLI requires extras: pip install termgate[cli]")
    sys.exit(1)

from .commands import auth

app = typer.Typer(
    name="termgate",
    help="termgate CLI - Log in to a web terminal server",
    no_args_is_help=True,
)

app.add_typer(auth.app, name="auth")


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from termgate import __version__

        typer.echo(f"termgate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log auth steps to stderr."),
) -> None:
    """termgate CLI root callback."""
    _ = version
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Show the CLI version."""
    from termgate import __version__

    typer.echo(f"termgate {__version__}")


if __name__ == "__main__":
    app()
