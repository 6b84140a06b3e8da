"""
Test Configuration
==================
Pytest fixtures for LLM Compare tests.
"""

import asyncio
import json
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from llm_compare.config import GatewayConfig
from llm_compare.services.gateway import ProviderGateway

TEST_API_KEYS = {
    "openai": "sk-test-openai",
    "gemini": "test-gemini-key",
    "llama": "test-llama-key",
    "deepseek": "",
}


class FakeProviderAPI:
    """
    Stand-in for the provider endpoints, served through ``httpx.MockTransport``.

    Records every request and replies with the queued responses in order,
    repeating the last one once the queue is exhausted.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Callable[[httpx.Request], httpx.Response]] = []
        self.on_request: Callable[[httpx.Request], None] | None = None

    def reply(self, status_code: int = 200, json_body: Any = None, text: str | None = None) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)

        self._responses.append(respond)

    def fail(self, exc: Exception) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            raise exc

        self._responses.append(respond)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        if len(self._responses) > 1:
            return self._responses.pop(0)(request)
        if self._responses:
            return self._responses[0](request)
        return httpx.Response(200, json=chat_completion())

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.last_request.content)


def chat_completion(content: str = "Hello!", total_tokens: int | None = 42) -> dict[str, Any]:
    """Chat-completion style response body."""
    body: dict[str, Any] = {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }
    if total_tokens is not None:
        body["usage"] = {
            "prompt_tokens": total_tokens // 2,
            "completion_tokens": total_tokens - total_tokens // 2,
            "total_tokens": total_tokens,
        }
    return body


def gemini_content(text: str = "Hello!", total_tokens: int | None = None) -> dict[str, Any]:
    """Gemini generateContent response body."""
    body: dict[str, Any] = {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ],
    }
    if total_tokens is not None:
        body["usageMetadata"] = {"totalTokenCount": total_tokens}
    return body


@pytest.fixture
def provider_api() -> FakeProviderAPI:
    return FakeProviderAPI()


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(api_keys=dict(TEST_API_KEYS), default_provider="openai")


@pytest.fixture
def gateway(
    gateway_config: GatewayConfig, provider_api: FakeProviderAPI
) -> Generator[ProviderGateway, None, None]:
    """Gateway whose outbound calls go to ``provider_api``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider_api.handler))
    yield ProviderGateway(gateway_config, http_client=http_client)
    asyncio.run(http_client.aclose())
