#!/usr/bin/env python3
"""
Menu Planner CLI.

    python cli.py server start --reload
    python cli.py db init
    python cli.py db url
    python cli.py db verify-user cook@example.com

    python cli.py health status          # needs a running server
    python cli.py health ping

    python cli.py local dish add --en Paella --es Paella --ca Paella --type second
    python cli.py local dish list --type second
    python cli.py local dish edit <dish-id> --es "Arroz negro"
    python cli.py local menu list --search summer
    python cli.py local plan save 2024-06-01 --menu <menu-id> --first <dish-id>
    python cli.py local plan show 2024-06-01

    python cli.py system info
    python cli.py system config database

Logging stays at WARNING unless --verbose (INFO) or --debug (DEBUG) is given.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Run from a checkout without installing the package
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from menu_planner.cli.commands import db_app, health_app, local_app, server_app, system_app

app = typer.Typer(
    name="cli",
    help="Menu Planner CLI - Server, database, local store and system info.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

for group, name in (
    (server_app, "server"),
    (db_app, "db"),
    (health_app, "health"),
    (local_app, "local"),
    (system_app, "system"),
):
    app.add_typer(group, name=name)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Log at DEBUG level"),
) -> None:
    """
    Menu Planner CLI.

    Server management, database setup, the local JSON store and system info.
    """
    from menu_planner.backend.core.config import validate_project_root
    from menu_planner.backend.core.logging import setup_logging

    validate_project_root()

    level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=level, format_type="console")
    if debug:
        console.print("[dim]Debug mode enabled[/dim]")


if __name__ == "__main__":
    app()
