"""Configuration management for the callback server."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..utils.exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = Path("config") / "callback.json"

# Environment override prefix for every field (e.g. DSR_CALLBACK_PORT)
ENV_PREFIX = "DSR_CALLBACK_"

# Port variables set by hosting platforms, checked in order
PLATFORM_PORT_VARIABLES = ("PORT", "RAILWAY_PORT")


class CallbackServerConfig(BaseModel):
    """Callback server configuration model.

    Configuration precedence:
    1. Environment variables (DSR_CALLBACK_* prefix)
    2. PORT / RAILWAY_PORT environment variables (port only)
    3. JSON config file
    4. Default values
    """

    host: str = Field(default="0.0.0.0", description="Server host address")
    port: int = Field(default=3000, description="HTTP server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_path: str = Field(default="logs/dsr-callback.log", description="Log file path")
    render_callbacks: bool = Field(
        default=True,
        description="Render received callbacks on the console",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(valid_levels)}"
            )
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Invalid port {v}. Must be between 1 and 65535.")
        return v


def _port_from_env(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"Invalid value for {env_key}: '{value}'. Must be an integer."
        )


def load_config(config_file: Path | None = None) -> CallbackServerConfig:
    """Load callback server configuration from file and environment variables.

    Args:
        config_file: Path to configuration JSON file. Defaults to config/callback.json

    Returns:
        CallbackServerConfig instance with merged configuration

    Raises:
        ConfigurationError: If an explicit config file is missing, the file is
            not valid JSON, or the merged configuration is invalid
    """
    explicit = config_file is not None
    if config_file is None:
        config_file = DEFAULT_CONFIG_FILE

    # Load from JSON file if exists
    config_data = {}
    if config_file.exists():
        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Failed to parse configuration file '{config_file}': {e}. "
                f"Ensure the file contains valid JSON."
            )
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Configuration file '{config_file}' must contain a JSON object."
            )
    elif explicit:
        raise ConfigurationError(
            f"Configuration file not found: '{config_file}'. "
            f"Ensure the file exists or check the path."
        )

    for env_key in PLATFORM_PORT_VARIABLES:
        if os.environ.get(env_key):
            config_data["port"] = _port_from_env(env_key, os.environ[env_key])
            break

    # Override with environment variables (DSR_CALLBACK_ prefix)
    for key in CallbackServerConfig.model_fields.keys():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in os.environ:
            value = os.environ[env_key]
            if key == "port":
                value = _port_from_env(env_key, value)
            config_data[key] = value

    # Create and validate configuration
    try:
        config = CallbackServerConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}")

    return config
