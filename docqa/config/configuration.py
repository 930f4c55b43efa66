"""Configuration module for DocQA.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml
- Default      → config.yaml

The OpenAI API key is loaded from the .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from docqa/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable."""
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI API configuration."""
    api_key: str
    model: str
    temperature: float
    max_tokens: Optional[int] = None
    base_url: Optional[str] = None


@dataclass(frozen=True)
class UploadConfig:
    """Upload limits enforced at the API boundary."""
    max_file_size_mb: int

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str
    format: str = DEFAULT_LOG_FORMAT


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    openai: OpenAIConfig
    upload: UploadConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for non-sensitive settings and .env for API keys.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    openai_section = yaml_config.get("openai", {})
    max_tokens = openai_section.get("max_tokens")

    try:
        openai_config = OpenAIConfig(
            api_key=_get_required_env("OPENAI_API_KEY"),
            model=openai_section.get("model", "gpt-4o"),
            temperature=float(openai_section.get("temperature", 0)),
            max_tokens=int(max_tokens) if max_tokens is not None else None,
            base_url=_get_optional_env("OPENAI_BASE_URL"),
        )

        upload_section = yaml_config.get("upload", {})
        upload_config = UploadConfig(
            max_file_size_mb=int(upload_section.get("max_file_size_mb", 20)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid numeric value in configuration: {e}") from e

    if upload_config.max_file_size_mb <= 0:
        raise ConfigurationError("upload.max_file_size_mb must be positive")

    logging_section = yaml_config.get("logging", {})
    logging_config = LoggingConfig(
        level=str(logging_section.get("level", "INFO")).upper(),
        format=logging_section.get("format", DEFAULT_LOG_FORMAT),
    )

    return AppConfig(
        openai=openai_config,
        upload=upload_config,
        logging=logging_config,
    )


def configure_logging(logging_config: LoggingConfig) -> None:
    """Apply the logging section to the root logger."""
    logging.basicConfig(level=logging_config.level, format=logging_config.format)


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config
