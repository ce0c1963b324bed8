"""
Configuration - Service settings loaded from the environment.

A .env file in the working directory is loaded first (python-dotenv), so
either real environment variables or the file can provide:

    GIT_REPO_URL           remote repository holding the documents (required)
    REPOSITORY_DIR         local working copy path (required)
    WEBHOOK_SECRET         token expected in X-Codeup-Token (required)
    TYTO_HOST / TYTO_PORT  bind address (default 0.0.0.0:9001)
    SYNC_COOLDOWN_SECONDS  pause after each sync, signals dropped (default 1)
    FETCH_TIMEOUT_SECONDS  git command timeout (default 120)
    SYNC_ON_STARTUP        sync once when the worker starts (default true)
    UNCATEGORIZED_LABEL    category for directories without one
    CORS_ORIGINS           comma separated allowed origins (default *)
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from tyto.engine.aggregator import DEFAULT_UNCATEGORIZED_LABEL


class ConfigError(Exception):
    """Settings are missing or malformed"""


# Settings field -> environment variable
ENV_VARS = {
    "git_repo_url": "GIT_REPO_URL",
    "repository_dir": "REPOSITORY_DIR",
    "webhook_secret": "WEBHOOK_SECRET",
    "host": "TYTO_HOST",
    "port": "TYTO_PORT",
    "sync_cooldown_seconds": "SYNC_COOLDOWN_SECONDS",
    "fetch_timeout_seconds": "FETCH_TIMEOUT_SECONDS",
    "sync_on_startup": "SYNC_ON_STARTUP",
    "uncategorized_label": "UNCATEGORIZED_LABEL",
    "cors_origins": "CORS_ORIGINS",
}

REQUIRED_VARS = ("GIT_REPO_URL", "REPOSITORY_DIR", "WEBHOOK_SECRET")


class Settings(BaseModel):
    """Runtime settings for the service"""

    git_repo_url: str
    repository_dir: str
    webhook_secret: str
    host: str = "0.0.0.0"
    port: int = 9001
    sync_cooldown_seconds: float = Field(default=1.0, ge=0)
    fetch_timeout_seconds: float = Field(default=120.0, gt=0)
    sync_on_startup: bool = True
    uncategorized_label: str = DEFAULT_UNCATEGORIZED_LABEL
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        load_env_file: bool = True,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            load_env_file: Whether to load .env into os.environ first

        Raises:
            ConfigError: If a required variable is unset or a value is invalid
        """
        if load_env_file:
            load_dotenv()
        env = os.environ if environ is None else environ

        missing = [var for var in REQUIRED_VARS if not env.get(var)]
        if missing:
            raise ConfigError(f"Environment variable(s) not set: {', '.join(missing)}")

        values: dict[str, object] = {}
        for field_name, var in ENV_VARS.items():
            raw = env.get(var)
            if raw is None or raw == "":
                continue
            if field_name == "cors_origins":
                values[field_name] = [o.strip() for o in raw.split(",") if o.strip()]
            else:
                values[field_name] = raw

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
