"""
Health commands. Both need a running API server.

    cli.py health ping     is the process answering?
    cli.py health status   is the database reachable? (exit 1 if not)
"""

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from menu_planner.cli.client import APIClient

app = typer.Typer(help="Check a running API server")
console = Console()


async def _fetch(path: str) -> httpx.Response | None:
    async with APIClient() as client:
        try:
            return await client.get(path)
        except httpx.HTTPError:
            return None


def _check_row(component: str, check: dict) -> tuple[str, str, str]:
    state = check.get("status", "unknown")
    color = "green" if state == "healthy" else "red"
    if "latency_ms" in check:
        details = f"latency: {check['latency_ms']}ms"
    else:
        details = check.get("error", "-")
    return component, f"[{color}]{state}[/{color}]", details


@app.command()
def status() -> None:
    """Show each readiness check of the server."""
    response = asyncio.run(_fetch("/health/ready"))
    if response is None:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: cli.py server start[/dim]")
        raise typer.Exit(1)

    body = response.json()
    # a 503 report arrives under "detail"
    report = body if "checks" in body else body.get("detail", {})

    table = Table(title="Health Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    for component, check in report.get("checks", {}).items():
        table.add_row(*_check_row(component, check))
    console.print(table)

    if response.status_code != 200:
        raise typer.Exit(1)


@app.command()
def ping() -> None:
    """Report whether the server answers /health."""
    response = asyncio.run(_fetch("/health"))
    if response is None:
        console.print("[red]✗ Backend is not reachable[/red]")
        raise typer.Exit(1)
    if response.status_code == 200:
        console.print("[green]✓ Backend is reachable[/green]")
    else:
        console.print(f"[yellow]Backend responded with status {response.status_code}[/yellow]")
