"""
Langfuse provider settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_BASE_URL = "http://localhost:3000"


class ProviderSettings(BaseSettings):
    """
    Langfuse provider configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in project root
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="LANGFUSE_",
    )

    # Langfuse Admin API
    admin_api_key: str | None = Field(
        default=None,
        description="Langfuse Admin API key, sent as a Bearer token (env: LANGFUSE_ADMIN_API_KEY)",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Langfuse API (env: LANGFUSE_BASE_URL)",
    )

    # Pulumi Configuration
    pulumi_config_passphrase: str = Field(
        default="langfuse",
        description="Pulumi passphrase for state encryption (env: LANGFUSE_PULUMI_CONFIG_PASSPHRASE or PULUMI_CONFIG_PASSPHRASE)",
        validation_alias=AliasChoices(
            "LANGFUSE_PULUMI_CONFIG_PASSPHRASE", "PULUMI_CONFIG_PASSPHRASE"
        ),
    )

    stack_name: str = Field(
        default="dev",
        description="Pulumi stack used by apply/plan/destroy (env: LANGFUSE_STACK_NAME)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: LANGFUSE_LOG_LEVEL)",
    )


# Global settings instance
_settings: ProviderSettings | None = None


def get_settings() -> ProviderSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        ProviderSettings instance
    """
    global _settings
    if _settings is None:
        _settings = ProviderSettings()
    return _settings


def reload_settings() -> ProviderSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh ProviderSettings instance
    """
    global _settings
    _settings = ProviderSettings()
    return _settings
