"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
Nothing the board or the store tunes is hardcoded elsewhere.

Secrets (.env):
    DB_PASSWORD

Settings (YAML):
    application.yaml   - App identity, server, CORS, timeouts
    database.yaml      - Database connection settings
    logging.yaml       - Logging configuration
    board.yaml         - Note widget and board defaults
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from stickyboard.backend.core.config_schema import (
    ApplicationSchema,
    BoardSchema,
    DatabaseSchema,
    LoggingSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only passwords, tokens, and keys."""

    db_password: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_SECTIONS: dict[str, tuple[type, str]] = {
    "application": (ApplicationSchema, "application.yaml"),
    "database": (DatabaseSchema, "database.yaml"),
    "logging": (LoggingSchema, "logging.yaml"),
    "board": (BoardSchema, "board.yaml"),
}


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load one YAML file and validate it into its schema."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """
    Every settings file, validated at construction.

    A missing key, wrong type or unknown field in any file fails here with
    the file name in the message, before the server or the board starts.
    """

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    board: BoardSchema

    def __init__(self) -> None:
        for section, (schema_cls, filename) in _SECTIONS.items():
            setattr(self, section, _load_validated(schema_cls, filename))


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """
    Construct database URL from YAML config and secrets.

    SQLite drivers treat `name` as a file path relative to the project root.
    Server drivers combine host, port and user with DB_PASSWORD from .env.

    Returns:
        Database connection URL string.
    """
    db = get_app_config().database
    if db.is_sqlite:
        db_path = find_project_root() / db.name
        return f"{db.driver}:///{db_path}"

    password = get_settings().db_password
    return f"{db.driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"


def get_server_base_url() -> tuple[str, float]:
    """
    Get the backend server base URL and timeout from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    app = get_app_config().application
    server = app.server
    base_url = f"http://{server.host}:{server.port}"
    timeout = float(app.timeouts.external_api)
    return base_url, timeout
