"""
Configuration management for the Rosetta construction service.

Supports configuration via environment variables and .env files.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RosettaConfig(BaseSettings):
    """
    Configuration settings for the Rosetta construction service.

    All settings can be configured via environment variables with the ROSETTA_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROSETTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Network identification
    blockchain: str = Field(
        default="cosmos",
        description="Blockchain name reported in network identifiers"
    )
    network: str = Field(
        default="cosmoshub-4",
        description="Network (chain id) this deployment serves"
    )

    # Node settings
    node_url: str = Field(
        default="http://localhost:1317",
        description="Base URL of the node's REST (LCD) endpoint"
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to every chain client call"
    )

    # Chain encoding
    bech32_prefix: str = Field(
        default="cosmos",
        min_length=1,
        description="Human readable part of account addresses"
    )
    default_gas: Optional[int] = Field(
        default=200_000,
        ge=0,
        description="Gas used when a request carries no suggested fee multiplier"
    )

    # HTTP server settings
    host: str = Field(
        default="0.0.0.0",
        description="Address the HTTP server binds to"
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )


# Global config instance
_config: Optional[RosettaConfig] = None


def get_config() -> RosettaConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = RosettaConfig()
    return _config


def set_config(config: RosettaConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
