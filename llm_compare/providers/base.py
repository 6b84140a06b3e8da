"""
Provider Base
=============
Request/response translation contract shared by all providers.

A provider never performs I/O itself: it builds the native HTTP request and
normalizes the native response body. The gateway owns the HTTP client.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from llm_compare.core.tokens import estimate_tokens
from llm_compare.schemas.gateway import SendOptions

DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7


@dataclass
class ProviderRequest:
    """A provider-native HTTP POST."""

    url: str
    json: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


@dataclass
class ParsedResponse:
    """Provider-native payload plus its normalized token count."""

    payload: dict[str, Any]
    tokens_used: int


class Provider(ABC):
    """Translation layer for one hosted model API."""

    name: ClassVar[str]
    endpoint: ClassVar[str]

    @abstractmethod
    def build_request(
        self,
        prompt: str,
        model: str,
        options: SendOptions,
        api_key: str,
    ) -> ProviderRequest:
        """Build the native request for ``prompt``."""

    @abstractmethod
    def parse_response(self, prompt: str, body: Any) -> ParsedResponse:
        """
        Normalize a decoded response body.

        Raises:
            ValueError: If the body is not shaped like this provider's response
        """


class ChatCompletionProvider(Provider):
    """
    Base for OpenAI-style ``/chat/completions`` APIs.

    Subclasses set ``name`` and ``endpoint``. When the response carries no
    ``usage.total_tokens``, ``estimate_missing_usage`` decides between an
    estimate of the prompt and zero.
    """

    estimate_missing_usage: ClassVar[bool] = True

    def build_request(
        self,
        prompt: str,
        model: str,
        options: SendOptions,
        api_key: str,
    ) -> ProviderRequest:
        body: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": options.max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": (
                options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
            ),
        }
        body.update(options.extra)

        return ProviderRequest(
            url=self.endpoint,
            json=body,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    def parse_response(self, prompt: str, body: Any) -> ParsedResponse:
        if not isinstance(body, dict):
            raise ValueError(f"Expected a JSON object, got {type(body).__name__}")

        usage = body.get("usage") or {}
        total = usage.get("total_tokens") if isinstance(usage, dict) else None

        if isinstance(total, int) and total > 0:
            tokens_used = total
        elif self.estimate_missing_usage:
            tokens_used = estimate_tokens(prompt)
        else:
            tokens_used = 0

        return ParsedResponse(payload=body, tokens_used=tokens_used)
