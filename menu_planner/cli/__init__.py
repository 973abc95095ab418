"""
CLI Module.

Typer command groups behind the root cli.py entry point.

- server, db, system: operate on the backend installation
- health: call a running backend over HTTP (httpx), sending
  X-Frontend-ID: cli for log routing
- local: manage the local JSON store directly
"""
