"""
Providers
=========
Request/response translation for each supported hosted model API.

Adding a provider means adding a ``Provider`` subclass and registering it here.
"""

from llm_compare.providers.base import (
    ChatCompletionProvider,
    ParsedResponse,
    Provider,
    ProviderRequest,
)
from llm_compare.providers.deepseek import DeepSeekProvider
from llm_compare.providers.gemini import GeminiProvider
from llm_compare.providers.llama import LlamaProvider
from llm_compare.providers.openai import OpenAIProvider

PROVIDERS: dict[str, type[Provider]] = {
    OpenAIProvider.name: OpenAIProvider,
    GeminiProvider.name: GeminiProvider,
    LlamaProvider.name: LlamaProvider,
    DeepSeekProvider.name: DeepSeekProvider,
}

SUPPORTED_PROVIDERS: tuple[str, ...] = tuple(PROVIDERS)

__all__ = [
    "Provider",
    "ChatCompletionProvider",
    "ProviderRequest",
    "ParsedResponse",
    "OpenAIProvider",
    "GeminiProvider",
    "LlamaProvider",
    "DeepSeekProvider",
    "PROVIDERS",
    "SUPPORTED_PROVIDERS",
]
