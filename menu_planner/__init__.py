"""
Menu Planner.

- backend/: API, services, database, local JSON store, configuration
- cli/: Command line client (Typer + Rich)
"""
