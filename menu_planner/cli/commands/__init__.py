# One Typer sub-app per command group, mounted by cli.py.
from menu_planner.cli.commands.db import app as db_app
from menu_planner.cli.commands.health import app as health_app
from menu_planner.cli.commands.local import app as local_app
from menu_planner.cli.commands.server import app as server_app
from menu_planner.cli.commands.system import app as system_app

__all__ = ["db_app", "health_app", "local_app", "server_app", "system_app"]
