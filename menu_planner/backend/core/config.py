"""
Configuration.

Two sources, nothing hardcoded:

    config/.env (or the process environment)
        DB_PASSWORD, JWT_SECRET

    config/settings/*.yaml, each validated by its schema in config_schema.py
        application, database, logging, features, security, storage

Paths in the YAML files are relative to the project root, the nearest
ancestor of the working directory that holds a ``.project_root`` file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from menu_planner.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
    StorageSchema,
)

PROJECT_ROOT_MARKER = ".project_root"
SETTINGS_DIR = Path("config") / "settings"
ENV_FILE = Path("config") / ".env"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def find_project_root() -> Path:
    """
    Walk up from the working directory to the ``.project_root`` marker.

    Raises:
        RuntimeError: If no ancestor carries the marker
    """
    cwd = Path.cwd()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_ROOT_MARKER).exists():
            return candidate
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """``find_project_root`` for entry points: exits with a readable message instead of raising."""
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """
    Parse ``config/settings/<filename>``. An empty file yields ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    config_path = find_project_root() / SETTINGS_DIR / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}


def _load_section(schema_cls: type[SchemaT], filename: str) -> SchemaT:
    try:
        return schema_cls(**load_yaml_config(filename))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class Settings(BaseSettings):
    """Secrets only. Everything else lives in YAML."""

    db_password: str = ""
    jwt_secret: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig:
    """
    Validated YAML settings, one attribute per file.

    Raises:
        FileNotFoundError: If a settings file is missing
        ValueError: If a settings file does not match its schema
    """

    def __init__(self) -> None:
        self.application: ApplicationSchema = _load_section(ApplicationSchema, "application.yaml")
        self.database: DatabaseSchema = _load_section(DatabaseSchema, "database.yaml")
        self.logging: LoggingSchema = _load_section(LoggingSchema, "logging.yaml")
        self.features: FeaturesSchema = _load_section(FeaturesSchema, "features.yaml")
        self.security: SecuritySchema = _load_section(SecuritySchema, "security.yaml")
        self.storage: StorageSchema = _load_section(StorageSchema, "storage.yaml")


@lru_cache
def get_settings() -> Settings:
    env_path = find_project_root() / ENV_FILE
    if env_path.exists():
        return Settings(_env_file=str(env_path))
    return Settings()


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


def is_sqlite(driver: str) -> bool:
    return driver.startswith("sqlite")


def sqlite_path(name: str) -> Path:
    """Database file for a sqlite driver, anchored at the project root when relative."""
    path = Path(name)
    return path if path.is_absolute() else find_project_root() / path


def get_database_url() -> str:
    """
    Build the SQLAlchemy URL from database.yaml and DB_PASSWORD.

    For sqlite drivers the database name is a file path and no
    credentials are used.
    """
    db = get_app_config().database
    if is_sqlite(db.driver):
        return f"{db.driver}:///{sqlite_path(db.name)}"
    password = get_settings().db_password
    return f"{db.driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"


def get_server_address() -> tuple[str, int]:
    """(host, port) the API server binds to."""
    server = get_app_config().application.server
    return server.host, server.port
