"""
Google Gemini Provider
======================
Gemini ``generateContent`` API.
"""

from typing import Any
from urllib.parse import quote

from llm_compare.core.tokens import estimate_tokens
from llm_compare.providers.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    ParsedResponse,
    Provider,
    ProviderRequest,
)
from llm_compare.schemas.gateway import SendOptions


class GeminiProvider(Provider):
    """
    Gemini ``models/{model}:generateContent``.

    The API key travels as the ``key`` query parameter rather than a header,
    and the model is part of the URL path.
    """

    name = "gemini"
    endpoint = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def build_request(
        self,
        prompt: str,
        model: str,
        options: SendOptions,
        api_key: str,
    ) -> ProviderRequest:
        body: dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": options.max_tokens or DEFAULT_MAX_TOKENS,
                "temperature": (
                    options.temperature
                    if options.temperature is not None
                    else DEFAULT_TEMPERATURE
                ),
            },
        }
        body.update(options.extra)

        return ProviderRequest(
            url=self.endpoint.format(model=quote(model, safe="")),
            json=body,
            headers={"Content-Type": "application/json"},
            params={"key": api_key},
        )

    def parse_response(self, prompt: str, body: Any) -> ParsedResponse:
        if not isinstance(body, dict):
            raise ValueError(f"Expected a JSON object, got {type(body).__name__}")

        usage = body.get("usageMetadata") or {}
        total = usage.get("totalTokenCount") if isinstance(usage, dict) else None

        if isinstance(total, int) and total > 0:
            tokens_used = total
        else:
            tokens_used = estimate_tokens(prompt + self._extract_text(body))

        return ParsedResponse(payload=body, tokens_used=tokens_used)

    def _extract_text(self, body: dict[str, Any]) -> str:
        """Text of the first part of the first candidate, or empty."""
        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return ""
        return text if isinstance(text, str) else ""
