"""Configuration management for the Circonus API client."""

import json
import os
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator, model_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


DEFAULT_API_URL = "https://api.circonus.com/v2"
DEFAULT_APP_NAME = "circonus-api-client"


class CirconusConfig(BaseModel):
    """Configuration for the Circonus API client."""

    # Circonus API credentials
    token_key: str = Field(
        ...,
        description="Circonus API token"
    )
    app_name: str = Field(
        default=DEFAULT_APP_NAME,
        description="Application name registered with the API token"
    )
    url: str = Field(
        default=DEFAULT_API_URL,
        description="Circonus API URL"
    )
    debug: bool = Field(
        default=False,
        description="Log request and response bodies"
    )

    # Transport configuration
    timeout: int = Field(
        default=30,
        description="Request timeout in seconds"
    )
    max_retries: int = Field(
        default=4,
        description="Maximum retry attempts"
    )
    min_retry_delay: float = Field(
        default=1.0,
        description="Minimum delay between retries in seconds"
    )
    max_retry_delay: float = Field(
        default=15.0,
        description="Maximum delay between retries in seconds"
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Log format (json or text)"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the API URL, expanding a bare host name."""
        v = v.strip()
        if not v:
            raise ValueError("API URL cannot be empty")
        if "/" not in v:
            v = f"https://{v}/v2"
        if not v.startswith(("http://", "https://")):
            raise ValueError("API URL must be a valid HTTP/HTTPS URL")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(valid_levels))}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = {"json", "text"}
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(sorted(valid_formats))}")
        return v_lower

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout value."""
        if v <= 0:
            raise ValueError("Timeout must be greater than 0")
        if v > 300:  # 5 minutes max
            raise ValueError("Timeout must not exceed 300 seconds")
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate max retries value."""
        if v < 0:
            raise ValueError("Max retries must be non-negative")
        if v > 10:
            raise ValueError("Max retries should not exceed 10")
        return v

    @field_validator("min_retry_delay", "max_retry_delay")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        """Validate retry delay."""
        if v < 0:
            raise ValueError("Retry delay must be non-negative")
        if v > 60:
            raise ValueError("Retry delay should not exceed 60 seconds")
        return v

    @model_validator(mode="after")
    def validate_retry_window(self) -> "CirconusConfig":
        if self.max_retry_delay < self.min_retry_delay:
            raise ValueError("max_retry_delay must be >= min_retry_delay")
        return self

    @classmethod
    def from_env(cls) -> "CirconusConfig":
        """Create configuration from environment variables."""
        return cls.from_env_and_file(None)

    @classmethod
    def from_file(cls, config_path: Path) -> "CirconusConfig":
        """Create configuration from a JSON configuration file.

        Args:
            config_path: Path to the JSON configuration file

        Returns:
            CirconusConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is not valid JSON
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")

        return cls(**config_data)

    @classmethod
    def from_env_and_file(cls, config_path: Optional[Path] = None) -> "CirconusConfig":
        """Create configuration from environment variables and optional config file.

        Environment variables take precedence over config file values.

        Args:
            config_path: Optional path to JSON configuration file

        Returns:
            CirconusConfig instance

        Raises:
            ValueError: If configuration file is invalid or environment variables have invalid values
            FileNotFoundError: If specified config file doesn't exist
        """
        config_data: Dict[str, Any] = {"token_key": ""}

        if config_path:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")

            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
            except IOError as e:
                raise ValueError(f"Error reading configuration file {config_path}: {e}")

            if not isinstance(file_config, dict):
                raise ValueError(f"Configuration file must contain a JSON object, got {type(file_config).__name__}")

            config_data.update(file_config)

        env_mappings = {
            "CIRCONUS_API_TOKEN": ("token_key", str),
            "CIRCONUS_API_APP": ("app_name", str),
            "CIRCONUS_API_URL": ("url", str),
            "CIRCONUS_API_DEBUG": ("debug", bool),
            "CIRCONUS_API_TIMEOUT": ("timeout", int),
            "CIRCONUS_API_MAX_RETRIES": ("max_retries", int),
            "CIRCONUS_API_MIN_RETRY_DELAY": ("min_retry_delay", float),
            "CIRCONUS_API_MAX_RETRY_DELAY": ("max_retry_delay", float),
            "CIRCONUS_LOG_LEVEL": ("log_level", str),
            "CIRCONUS_LOG_FORMAT": ("log_format", str),
        }

        for env_var, (config_key, value_type) in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            try:
                if value_type == str:
                    config_data[config_key] = env_value.strip()
                elif value_type == bool:
                    config_data[config_key] = env_value.strip().lower() in ("1", "true", "yes", "on")
                elif value_type == int:
                    config_data[config_key] = int(env_value)
                elif value_type == float:
                    config_data[config_key] = float(env_value)
            except (ValueError, TypeError) as e:
                raise ValueError(
                    f"Invalid value for {env_var}: '{env_value}' (expected {value_type.__name__})"
                ) from e

        return cls(**config_data)

    def validate_required_fields(self) -> Dict[str, str]:
        """Validate that all required fields are present.

        Returns:
            Dictionary of validation errors (empty if valid)
        """
        errors = {}

        if not self.token_key:
            errors["token_key"] = "Circonus API token is required. Set CIRCONUS_API_TOKEN environment variable or provide in config file."

        if not self.app_name:
            errors["app_name"] = "Circonus API app name is required. Set CIRCONUS_API_APP environment variable or provide in config file."

        return errors

    def get_validation_summary(self) -> Dict[str, Any]:
        """Get a summary of configuration validation status."""
        errors = self.validate_required_fields()

        return {
            "valid": len(errors) == 0,
            "errors": errors,
            "config": {
                "token_key_set": bool(self.token_key),
                "app_name": self.app_name,
                "url": self.url,
                "debug": self.debug,
                "timeout": self.timeout,
                "max_retries": self.max_retries,
                "min_retry_delay": self.min_retry_delay,
                "max_retry_delay": self.max_retry_delay,
                "log_level": self.log_level,
                "log_format": self.log_format,
            }
        }
