"""
LLM Compare
===========
Send prompts to hosted language-model providers (OpenAI, Gemini, Llama,
DeepSeek) through one gateway and compare their cost, latency and success.
"""

__version__ = "1.0.0"

from llm_compare.config import GatewayConfig, Settings
from llm_compare.core.catalog import ProviderCatalog
from llm_compare.core.tokens import estimate_tokens, fit_prompt
from llm_compare.exceptions import (
    ConfigurationError,
    LLMCompareError,
    MissingCredentialError,
    ProviderCallError,
    UnsupportedProviderError,
)
from llm_compare.schemas.gateway import NormalizedResponse, SendOptions, UsageSnapshot
from llm_compare.services.gateway import ProviderGateway

__all__ = [
    "ProviderGateway",
    "GatewayConfig",
    "Settings",
    "ProviderCatalog",
    "SendOptions",
    "NormalizedResponse",
    "UsageSnapshot",
    "estimate_tokens",
    "fit_prompt",
    "LLMCompareError",
    "UnsupportedProviderError",
    "MissingCredentialError",
    "ProviderCallError",
    "ConfigurationError",
]
