"""
Llama Provider
==============
Hosted Llama API (OpenAI-compatible chat completions).
"""

from llm_compare.providers.base import ChatCompletionProvider


class LlamaProvider(ChatCompletionProvider):
    """Llama ``/v1/chat/completions``; estimates usage when none is reported."""

    name = "llama"
    endpoint = "https://api.llama.ai/v1/chat/completions"
