"""Configuration management for pointerbridge.

Loads settings from a YAML configuration file with environment variable
overrides. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/pointerbridge.yaml")


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5005, ge=1, le=65535)


class XdotoolConfig(BaseModel):
    binary: str = Field(default="xdotool", description="xdotool executable name or path")
    type_delay_ms: int = Field(default=10, ge=0)
    display: str | None = Field(default=None, description="X display, e.g. ':0'")


class CaptureConfig(BaseModel):
    default_delay: int = Field(default=3, ge=0)
    max_delay: int = Field(default=30, ge=0)


class DragConfig(BaseModel):
    default_steps: int = Field(default=30, gt=0)


class ClientConfig(BaseModel):
    base_url: str = Field(default="http://127.0.0.1:5005")
    timeout: float = Field(default=60.0, gt=0)


class MacroConfig(BaseModel):
    action_delay_ms: int = Field(default=1500, ge=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)
    access_level: str = Field(
        default="WARNING",
        description="Level for uvicorn's access log; requests are already logged by the app",
    )


class Settings(BaseSettings):
    """Root configuration for pointerbridge.

    Loads from YAML file and supports environment variable overrides,
    e.g. ``POINTERBRIDGE_SERVER__PORT=6000``.
    """

    model_config = {
        "env_prefix": "POINTERBRIDGE_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    server: ServerConfig = Field(default_factory=ServerConfig)
    xdotool: XdotoolConfig = Field(default_factory=XdotoolConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    drag: DragConfig = Field(default_factory=DragConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    macro: MacroConfig = Field(default_factory=MacroConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):  # type: ignore[no-untyped-def]
        # YAML values arrive as init kwargs; environment must still win over them
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data: dict = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _apply_env_overrides(yaml_data: dict) -> None:
    """Honor the X11 DISPLAY variable when no display is configured."""
    display = os.environ.get("DISPLAY", "")
    if not display:
        return
    section = yaml_data.setdefault("xdotool", {})
    if not section.get("display"):
        section["display"] = display
