"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all: it listens on port 8000
and keeps its documents in ``todos.db`` next to the package.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Todo API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0"))
    description: str = field(default_factory=lambda: os.getenv("API_DESCRIPTION", "An enhanced TODO API"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))

    # Base URI used when annotating todos with their ``url``.  When empty
    # the base URL of the incoming request is used instead.
    public_url: str = field(default_factory=lambda: os.getenv("PUBLIC_URL", ""))

    # Path of the SQLite file holding the document store.  Relative paths
    # are resolved against the project root by the ``db`` module.  The
    # special value ``:memory:`` keeps documents in memory only.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "todos.db"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests that change the
# environment call ``reload_settings`` afterwards.
settings = Settings()


def reload_settings() -> Settings:
    """Re-read environment variables into the shared ``settings`` object."""
    fresh = Settings()
    for name, value in vars(fresh).items():
        setattr(settings, name, value)
    return settings
