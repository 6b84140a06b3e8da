"""
OpenAI Provider
===============
OpenAI chat completions API.
"""

from llm_compare.providers.base import ChatCompletionProvider


class OpenAIProvider(ChatCompletionProvider):
    """
    OpenAI ``/v1/chat/completions``.

    Usage is always reported by the API; a response without it counts as zero
    tokens rather than an estimate.
    """

    name = "openai"
    endpoint = "https://api.openai.com/v1/chat/completions"
    estimate_missing_usage = False
