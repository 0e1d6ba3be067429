"""Configuration management for sunset.

Loads settings from a YAML configuration file with ``SUNSET_`` prefixed
environment variable overrides.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/sunset.yaml")


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=12321, ge=1, le=65535)


class BrightnessConfig(BaseModel):
    minimum: float = Field(default=10.0)
    maximum: float = Field(default=200.0)
    step: float = Field(default=5.0, gt=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> BrightnessConfig:
        if self.minimum > self.maximum:
            raise ValueError("brightness.minimum must not exceed brightness.maximum")
        return self


class BacklightConfig(BaseModel):
    command: str = Field(default="light")


class RedshiftConfig(BaseModel):
    command: str = Field(default="redshift")
    method: str = Field(default="wayland", description="Adjustment method passed via -m")
    temperature: int = Field(default=6500, gt=0, description="Color temperature in kelvin")


class ClientConfig(BaseModel):
    base_url: str = Field(default="http://localhost:12321")
    timeout: float = Field(default=10.0, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="DEBUG")
    format: str = Field(default="[%(name)s][%(levelname)s] %(message)s")
    file: str | None = Field(default="~/sunset.log")


class Settings(BaseSettings):
    """Root configuration for sunset.

    Loads from YAML file and supports environment variable overrides,
    e.g. ``SUNSET_SERVER__PORT=8000``.
    """

    model_config = {
        "env_prefix": "SUNSET_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    server: ServerConfig = Field(default_factory=ServerConfig)
    brightness: BrightnessConfig = Field(default_factory=BrightnessConfig)
    backlight: BacklightConfig = Field(default_factory=BacklightConfig)
    redshift: RedshiftConfig = Field(default_factory=RedshiftConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; env vars must win over them.
        return env_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + environment variables.

    Priority: env vars > YAML file > defaults
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
