"""
Configuration Schemas.

One pydantic model per file in config/settings/. Unknown keys, missing
keys and out-of-range values are rejected when the file is loaded, so a
broken deployment fails at startup rather than on first use.

    application.yaml  -> ApplicationSchema
    database.yaml     -> DatabaseSchema
    logging.yaml      -> LoggingSchema
    features.yaml     -> FeaturesSchema
    security.yaml     -> SecuritySchema
    storage.yaml      -> StorageSchema
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


# -- application.yaml ---------------------------------------------------------


class ServerSchema(_Section):
    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)


class CorsSchema(_Section):
    origins: list[str]


class ApplicationSchema(_Section):
    """Identity shown on /health and /docs, plus where the API listens."""

    name: str = Field(min_length=1)
    version: str
    description: str
    environment: Literal["development", "staging", "production", "test"]
    debug: bool
    api_prefix: str
    server: ServerSchema
    cors: CorsSchema

    @field_validator("api_prefix")
    @classmethod
    def _prefix_is_absolute(cls, value: str) -> str:
        if not value.startswith("/") or value.endswith("/"):
            raise ValueError("api_prefix must start with '/' and not end with '/'")
        return value


# -- database.yaml ------------------------------------------------------------


class DatabaseSchema(_Section):
    """
    Relational store. For sqlite drivers ``name`` is a file path relative
    to the project root and the network fields are ignored.
    """

    driver: str = Field(min_length=1)
    host: str
    port: int = Field(ge=1, le=65535)
    name: str = Field(min_length=1)
    user: str
    pool_size: int = Field(ge=1)
    max_overflow: int = Field(ge=0)
    pool_timeout: int = Field(ge=1)
    pool_recycle: int
    echo: bool


# -- logging.yaml -------------------------------------------------------------


class ConsoleHandlerSchema(_Section):
    enabled: bool


class FileHandlerSchema(_Section):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_Section):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_Section):
    level: LogLevel
    format: Literal["json", "console"]
    handlers: HandlersSchema


# -- features.yaml ------------------------------------------------------------


class FeaturesSchema(_Section):
    """Feature flags. All default off in the shipped files except request logging."""

    auth_require_email_verification: bool
    api_detailed_errors: bool
    api_request_logging: bool


# -- security.yaml ------------------------------------------------------------


class JwtSchema(_Section):
    algorithm: Literal["HS256", "HS384", "HS512"]
    access_token_expire_minutes: int = Field(gt=0)
    audience: str = Field(min_length=1)


class PasswordSchema(_Section):
    min_length: int = Field(ge=1)


class SecuritySchema(_Section):
    jwt: JwtSchema
    password: PasswordSchema


# -- storage.yaml -------------------------------------------------------------


class StorageKeysSchema(_Section):
    """File stem of each collection in the local store."""

    dishes: str = Field(min_length=1)
    menus: str = Field(min_length=1)
    daily_menus: str = Field(min_length=1)


class StorageSchema(_Section):
    local_dir: str = Field(min_length=1)
    keys: StorageKeysSchema
