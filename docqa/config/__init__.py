"""Configuration module."""

from docqa.config.configuration import (
    AppConfig,
    ConfigurationError,
    LoggingConfig,
    OpenAIConfig,
    UploadConfig,
    configure_logging,
    get_config,
    load_config,
)

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "LoggingConfig",
    "OpenAIConfig",
    "UploadConfig",
    "configure_logging",
    "get_config",
    "load_config",
]
