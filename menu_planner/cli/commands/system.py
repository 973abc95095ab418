"""
System commands: what is configured, without touching the database.

Secrets from config/.env are never printed.
"""

from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

app = typer.Typer(help="Application info and configuration")
console = Console()

CONFIG_SECTIONS = ("application", "database", "logging", "features", "security", "storage")


def _load_config() -> Any:
    from menu_planner.backend.core.config import get_app_config

    try:
        return get_app_config()
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)


def _add_branch(parent: Tree, items: dict[str, Any]) -> None:
    for key, value in items.items():
        if isinstance(value, dict):
            _add_branch(parent.add(f"[cyan]{key}[/cyan]"), value)
        else:
            parent.add(f"[cyan]{key}[/cyan]: {value}")


@app.command()
def info() -> None:
    """Name, version, environment and where the API is served."""
    application = _load_config().application
    console.print(Panel(
        f"[bold]{application.name}[/bold]\n"
        f"Version: {application.version}\n"
        f"Environment: {application.environment}\n"
        f"API: http://{application.server.host}:{application.server.port}{application.api_prefix}\n"
        f"{application.description}",
        title="Application Info",
    ))


@app.command()
def config(
    section: Optional[str] = typer.Argument(None, help=f"One of: {', '.join(CONFIG_SECTIONS)}"),
) -> None:
    """Print the validated YAML settings, all sections or one."""
    if section is not None and section not in CONFIG_SECTIONS:
        console.print(f"[red]Unknown section: {section}[/red]")
        console.print(f"Available sections: {', '.join(CONFIG_SECTIONS)}")
        raise typer.Exit(1)

    app_config = _load_config()
    for name in (section,) if section else CONFIG_SECTIONS:
        tree = Tree(f"[bold cyan]{name}[/bold cyan]")
        _add_branch(tree, getattr(app_config, name).model_dump())
        console.print(tree)
        console.print()


@app.command()
def version() -> None:
    """Print the application version."""
    console.print(f"[bold]{_load_config().application.version}[/bold]")
