"""
Configuration Management.

Loads settings from config/settings/*.yaml and deployment overrides from
BLOGPAD_* environment variables (or config/.env).

Settings (YAML):
    application.yaml - App identity, server, cors
    logging.yaml     - Logging configuration
    storage.yaml     - Key-value store backend and entries key
    display.yaml     - Locale, timezone and page title for rendering

Overrides (environment):
    BLOGPAD_DATA_DIR, BLOGPAD_LOG_LEVEL
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from blogpad.backend.core.config_schema import (
    ApplicationSchema,
    DisplaySchema,
    LoggingSchema,
    StorageSchema,
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

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Deployment overrides loaded from BLOGPAD_* variables or config/.env."""

    data_dir: str | None = None
    log_level: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="BLOGPAD_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of causing cryptic KeyErrors later.

    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._storage = _load_validated(StorageSchema, "storage.yaml")
        self._display = _load_validated(DisplaySchema, "display.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def storage(self) -> StorageSchema:
        """Key-value store settings."""
        return self._storage

    @property
    def display(self) -> DisplaySchema:
        """Rendering settings (locale, timezone, page title)."""
        return self._display


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_data_dir() -> Path:
    """
    Resolve the directory holding the file-backed store.

    BLOGPAD_DATA_DIR wins over storage.yaml. Relative paths are resolved
    against the project root.

    Returns:
        Absolute Path to the data directory.
    """
    configured = get_settings().data_dir or get_app_config().storage.data_dir
    path = Path(configured)
    if not path.is_absolute():
        path = find_project_root() / path
    return path


def get_server_address() -> tuple[str, int]:
    """
    Get the server host and port from application.yaml.

    Returns:
        Tuple of (host, port).
    """
    server = get_app_config().application.server
    return server.host, server.port
