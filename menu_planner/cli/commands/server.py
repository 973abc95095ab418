"""
Server commands: run the API under uvicorn.
"""

import subprocess
import sys

import typer
from rich.console import Console

app = typer.Typer(help="Run the API server")
console = Console()

APP_PATH = "menu_planner.backend.main:app"


def uvicorn_command(host: str, port: int, reload: bool) -> list[str]:
    command = [sys.executable, "-m", "uvicorn", APP_PATH, "--host", host, "--port", str(port)]
    if reload:
        command.append("--reload")
    return command


@app.command()
def start(
    host: str = typer.Option(None, "--host", "-h", help="Bind address (default: application.yaml)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default: application.yaml)"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Restart on code changes"),
) -> None:
    """
    Start the API in the foreground until Ctrl+C.

    Examples:
        cli.py server start --reload
        cli.py server start --host 0.0.0.0 --port 8080
    """
    from menu_planner.backend.core.config import get_server_address

    try:
        default_host, default_port = get_server_address()
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: Could not load application.yaml ({e})[/red]")
        raise typer.Exit(1)

    host = host or default_host
    port = port or default_port
    console.print(f"[bold]Serving menu planner API on http://{host}:{port}[/bold]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    try:
        subprocess.run(uvicorn_command(host, port, reload), check=True)
    except KeyboardInterrupt:
        console.print("\n[dim]Server stopped[/dim]")
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Server exited with code {e.returncode}[/red]")
        raise typer.Exit(e.returncode)
