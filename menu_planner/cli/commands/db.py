"""
Database Commands.

Create the schema, inspect the connection target and verify accounts.
"""

import asyncio

import typer
from rich.console import Console
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

app = typer.Typer(help="Database commands")
console = Console()


@app.command()
def init() -> None:
    """
    Create all tables that do not exist yet.

    Examples:
        cli.py db init
    """
    asyncio.run(_init())


async def _init() -> None:
    from menu_planner.backend.core.database import create_tables, dispose_engine

    try:
        await create_tables()
    except SQLAlchemyError as e:
        console.print(f"[red]Database initialisation failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await dispose_engine()
    console.print("[green]Tables created[/green]")


@app.command()
def url() -> None:
    """
    Show the database URL with the password hidden.

    Examples:
        cli.py db url
    """
    from menu_planner.backend.core.config import get_database_url

    console.print(make_url(get_database_url()).render_as_string(hide_password=True))


@app.command("verify-user")
def verify_user(
    email: str = typer.Argument(..., help="Account email"),
) -> None:
    """
    Mark an account as verified so it can sign in.

    Needed for sign-ups made while auth_require_email_verification is on.

    Examples:
        cli.py db verify-user cook@example.com
    """
    asyncio.run(_verify_user(email))


async def _verify_user(email: str) -> None:
    from menu_planner.backend.core.database import dispose_engine, get_session_factory
    from menu_planner.backend.core.exceptions import ApplicationError
    from menu_planner.backend.services.auth import AuthService

    try:
        async with get_session_factory()() as session:
            user = await AuthService(session).verify_user(email)
            await session.commit()
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        await dispose_engine()
    console.print(f"[green]User verified[/green] {user.email}")
