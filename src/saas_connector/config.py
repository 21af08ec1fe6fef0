"""Configuration management for saas-connector using Pydantic Settings.

Configuration is loaded from environment variables and/or .env files.
Environment variables take precedence over .env file values.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LeadvertexSettings(BaseSettings):
    """LeadVertex admin API settings."""

    model_config = SettingsConfigDict(env_prefix="LEADVERTEX_")

    client_id: str = Field(
        default="",
        description="LeadVertex account subdomain",
    )
    api_token: SecretStr | None = Field(
        default=None,
        description="API token, sent as the `token` query parameter",
    )
    base_url: str = Field(
        default="https://{client_id}.leadvertex.ru/api/admin/",
        description="API root URL; `{client_id}` is substituted",
    )
    timeout: float = Field(
        default=30,
        gt=0,
        le=300,
        description="Request timeout in seconds",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects",
    )
    verify_tls: bool = Field(
        default=True,
        description="Whether to verify TLS certificates",
    )
    pre_request_delay: float = Field(
        default=0.0,
        ge=0,
        description="Pause before every request, in seconds",
    )

    @property
    def url(self) -> str:
        """Resolved API root URL."""
        return self.base_url.format(client_id=self.client_id)


class MoyskladSettings(BaseSettings):
    """MoySklad JSON API settings."""

    model_config = SettingsConfigDict(env_prefix="MOYSKLAD_")

    login: str = Field(
        default="",
        description="API login",
    )
    password: SecretStr = Field(
        default=SecretStr(""),
        description="API password",
    )
    base_url: str = Field(
        default="https://online.moysklad.ru/api/remap/",
        description="JSON API root URL",
    )
    api_version: str = Field(
        default="1.1",
        description="JSON API version",
    )
    timeout: float = Field(
        default=60,
        gt=0,
        le=300,
        description="Request timeout in seconds",
    )
    connect_timeout: float = Field(
        default=60,
        gt=0,
        le=300,
        description="Connection timeout in seconds",
    )
    follow_redirects: bool = Field(
        default=False,
        description="Follow HTTP redirects",
    )
    verify_tls: bool = Field(
        default=True,
        description="Whether to verify TLS certificates",
    )
    pre_request_delay: float = Field(
        default=0.25,
        ge=0,
        description="Pause before every request, in seconds (API rate courtesy)",
    )


class Settings(BaseSettings):
    """Main application settings.

    All settings can be configured via environment variables.
    Nested settings use double underscores, e.g., MOYSKLAD__LOGIN.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    retry_wait: float = Field(
        default=0.0,
        ge=0,
        le=60,
        description="Seconds to wait between retries of transient failures",
    )

    leadvertex: LeadvertexSettings = Field(default_factory=LeadvertexSettings)
    moysklad: MoyskladSettings = Field(default_factory=MoyskladSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Application settings instance, cached for reuse.
    """
    return Settings()
