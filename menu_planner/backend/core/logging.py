"""
Structured Logging.

Every module logs through structlog loggers obtained from ``get_logger``.
Settings come from config/settings/logging.yaml; ``setup_logging`` may
override any of them (the CLI does, to stay quiet unless asked).

A JSON record carries:
    timestamp   - ISO 8601 UTC
    level       - debug, info, warning, error, critical
    logger      - module path, e.g. menu_planner.backend.storage.local
    event       - the message
    func_name   - emitting function
    lineno      - emitting line
    source      - where the work came from (web, cli, storage, ...)
    request_id  - correlation id, inside an HTTP request

Usage:
    from menu_planner.backend.core.logging import get_logger, log_with_source

    logger = get_logger(__name__)
    logger.info("Dish created", extra={"dish_id": dish.id})

    # outside a request, name the source yourself
    log_with_source(logger, "storage", "warning", "Collection unreadable", key="dishes")

Log file:
    logs/system.jsonl when the file handler is enabled
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from menu_planner.backend.core.config import find_project_root, load_yaml_config

VALID_SOURCES = frozenset({
    "web",
    "cli",
    "api",
    "storage",
    "internal",
    "unknown",
})
"""Accepted values of the ``source`` field. Anything else is logged as "unknown"."""

# Third-party loggers that drown out application records below WARNING
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """
    Read logging.yaml on first use and cache it.

    Raises:
        FileNotFoundError: If logging.yaml does not exist
    """
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    return find_project_root() / configured_path


def normalize_source(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Processor that replaces an unrecognized ``source`` with "unknown"."""
    source = event_dict.get("source")
    if source is not None and source not in VALID_SOURCES:
        event_dict["source"] = "unknown"
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        normalize_source,
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger's handlers.

    Any argument left as None falls back to logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'json' or 'console' for the console handler; the file is always JSON
        enable_console: Write records to stdout
        enable_file_logging: Write records to the rotating JSONL file
    """
    config = _load_logging_config()
    console_config = config["handlers"]["console"]
    file_config = config["handlers"]["file"]

    if level is None:
        level = config["level"]
    if format_type is None:
        format_type = config["format"]
    if enable_console is None:
        enable_console = console_config["enabled"]
    if enable_file_logging is None:
        enable_file_logging = file_config["enabled"]

    processors = _shared_processors()
    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), processors)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console_handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=True), processors))
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = _resolve_log_path(file_config["path"])
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=file_config["max_bytes"],
            backupCount=file_config["backup_count"],
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the structlog logger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log ``message`` at ``level`` with an explicit ``source`` field.

    Raises:
        AttributeError: If level is not a logging method name
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
