"""
DeepSeek Provider
=================
DeepSeek API (OpenAI-compatible chat completions).
"""

from llm_compare.providers.base import ChatCompletionProvider


class DeepSeekProvider(ChatCompletionProvider):
    name = "deepseek"
    endpoint = "https://api.deepseek.com/v1/chat/completions"
