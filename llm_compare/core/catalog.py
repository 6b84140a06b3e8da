"""
Provider Catalog
================
Cost, context-limit and default-model tables for the supported providers.

Built-in tables can be overridden per provider from a YAML file. The lookups
never fail: an unknown model resolves to its provider's ``default`` entry and
an unknown provider resolves to the default provider's table.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

DEFAULT_CATALOG: dict[str, dict[str, Any]] = {
    "openai": {
        "cost_per_1k": "0.03",
        "default_model": "gpt-3.5-turbo",
        "context_limits": {
            "gpt-4": 8192,
            "gpt-4-turbo": 128000,
            "gpt-4-1106-preview": 128000,
            "gpt-3.5-turbo": 16384,
            "gpt-3.5-turbo-16k": 16384,
            "default": 4096,
        },
    },
    "gemini": {
        "cost_per_1k": "0.01",
        "default_model": "gemini-pro",
        "context_limits": {
            "gemini-pro": 32768,
            "default": 32768,
        },
    },
    "llama": {
        "cost_per_1k": "0.002",
        "default_model": "llama-2-70b-chat",
        "context_limits": {
            "llama-2-70b-chat": 4096,
            "default": 4096,
        },
    },
    "deepseek": {
        "cost_per_1k": "0.005",
        "default_model": "deepseek-chat",
        "context_limits": {
            "deepseek-chat": 32768,
            "default": 32768,
        },
    },
}


class ProviderCatalog:
    """
    Lookup tables for provider pricing and context windows.

    Loads overrides from YAML on top of the built-in tables. The tables are
    read once and treated as immutable afterwards.
    """

    def __init__(
        self,
        config_path: str | None = None,
        default_provider: str = "openai",
    ):
        self.config_path = config_path
        self._catalog: dict[str, dict[str, Any]] = self._load_catalog()

        if default_provider not in self._catalog:
            logger.warning(
                "Default provider missing from catalog, using openai",
                default_provider=default_provider,
            )
            default_provider = "openai"
        self.default_provider = default_provider

    def _load_catalog(self) -> dict[str, dict[str, Any]]:
        """Merge the YAML overrides, if any, into the built-in tables."""
        catalog = {
            provider: {**entry, "context_limits": dict(entry["context_limits"])}
            for provider, entry in DEFAULT_CATALOG.items()
        }

        if not self.config_path:
            return catalog

        config_file = Path(self.config_path)
        if not config_file.exists():
            logger.warning("Catalog config not found, using defaults", path=self.config_path)
            return catalog

        try:
            with open(config_file) as f:
                overrides = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load catalog config", path=self.config_path, error=str(e))
            return catalog

        providers = (overrides.get("providers") or {}) if isinstance(overrides, dict) else None
        if not isinstance(providers, dict):
            logger.warning("Catalog config has an unexpected layout, using defaults", path=self.config_path)
            return catalog

        for provider, entry in providers.items():
            if provider not in catalog:
                logger.warning("Ignoring unsupported provider in catalog", provider=provider)
                continue
            if not isinstance(entry, dict):
                logger.warning("Ignoring malformed catalog entry", provider=provider)
                continue
            target = catalog[provider]
            if "cost_per_1k" in entry:
                target["cost_per_1k"] = str(entry["cost_per_1k"])
            if "default_model" in entry:
                target["default_model"] = entry["default_model"]
            limits = entry.get("context_limits") or {}
            if not isinstance(limits, dict):
                logger.warning("Ignoring malformed context limits", provider=provider)
                continue
            for model, limit in limits.items():
                target["context_limits"][model] = int(limit)

        logger.info("Loaded catalog configuration", path=self.config_path)
        return catalog

    @property
    def providers(self) -> list[str]:
        """Provider ids in catalog order."""
        return list(self._catalog)

    def _entry(self, provider: str) -> dict[str, Any]:
        return self._catalog.get(provider) or self._catalog[self.default_provider]

    def cost_per_1k(self, provider: str) -> Decimal:
        """USD cost per 1000 tokens for a provider."""
        return Decimal(str(self._entry(provider)["cost_per_1k"]))

    def default_model(self, provider: str) -> str:
        """Model used when a call does not name one."""
        return self._entry(provider)["default_model"]

    def context_limits(self, provider: str) -> dict[str, int]:
        """Copy of the context-limit table for a provider."""
        return dict(self._entry(provider)["context_limits"])

    def resolve_context_limit(self, provider: str, model: str | None) -> int:
        """
        Maximum combined prompt and response tokens for a provider/model pair.

        Falls back to the provider's ``default`` entry for unknown models, and
        to the default provider's table for unknown providers.
        """
        limits = self._entry(provider)["context_limits"]
        if model and model in limits:
            return limits[model]
        return limits["default"]

    def calculate_cost(self, provider: str, tokens: int) -> Decimal:
        """Cost in USD of ``tokens`` at the provider's rate."""
        return (Decimal(tokens) / Decimal("1000")) * self.cost_per_1k(provider)
