"""
Application Configuration
=========================
Centralized configuration management using Pydantic Settings.

``Settings`` is the only place the environment is read. The gateway is built
from an explicit ``GatewayConfig`` so tests can construct isolated instances.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["openai", "gemini", "llama", "deepseek"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # Provider credentials
    openai_api_key: str = ""
    gemini_api_key: str = ""
    llama_api_key: str = ""
    deepseek_api_key: str = ""

    # Gateway
    default_provider: ProviderName = "openai"
    request_timeout: float = Field(default=60.0, gt=0)
    history_limit: int = Field(default=500, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Metrics
    metrics_enabled: bool = True

    # Provider catalog override (cost and context-limit tables)
    catalog_config_path: str = "config/catalog.yaml"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@dataclass
class GatewayConfig:
    """
    Explicit construction parameters for ``ProviderGateway``.

    Attributes:
        api_keys: Provider id to API key; missing or empty means unavailable
        default_provider: Provider active when the gateway is created
        request_timeout: Seconds before an outbound provider call times out
        history_limit: Maximum number of prompt log entries kept in memory
        catalog_config_path: Optional YAML override for the provider catalog
    """

    api_keys: dict[str, str] = field(default_factory=dict)
    default_provider: str = "openai"
    request_timeout: float = 60.0
    history_limit: int = 500
    catalog_config_path: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        """Build a gateway configuration from application settings."""
        return cls(
            api_keys={
                "openai": settings.openai_api_key,
                "gemini": settings.gemini_api_key,
                "llama": settings.llama_api_key,
                "deepseek": settings.deepseek_api_key,
            },
            default_provider=settings.default_provider,
            request_timeout=settings.request_timeout,
            history_limit=settings.history_limit,
            catalog_config_path=settings.catalog_config_path,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
