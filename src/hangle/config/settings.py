"""Configuration management for hangle.

Loads settings from a YAML configuration file, with ``HANGLE_``
environment variables and a .env file filling in anything the YAML file
leaves unset.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/hangle.yaml")


class BridgeConfig(BaseModel):
    endpoint_url: str = Field(default="http://localhost:8080/", description="Console URL the bridge polls")
    request_timeout: float | None = Field(
        default=None, gt=0, description="Per-request timeout in seconds; None waits for the console"
    )
    preload_modules: list[str] = Field(
        default_factory=lambda: ["json", "math"],
        description="Modules bound in the evaluation environment at startup",
    )


class ConsoleConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    input_timeout: float = Field(default=45.0, gt=0, description="Long-poll wait before __USER_INPUT_TIMEOUT")
    session_limit: float = Field(default=30 * 60, gt=0, description="Seconds shown counting down in the prompt")
    history_file: Path | None = Field(default_factory=lambda: Path.home() / ".hangle_history")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for hangle.

    Loads from a YAML file, with environment variables and a .env file
    filling in anything the file leaves unset.
    """

    model_config = {
        "env_prefix": "HANGLE_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: YAML file > env vars > .env file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
