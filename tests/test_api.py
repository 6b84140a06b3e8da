"""
API Tests
=========
Tests for LLM Compare REST API endpoints.
"""

from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from conftest import FakeProviderAPI, chat_completion
from llm_compare.api.deps import get_gateway
from llm_compare.main import app
from llm_compare.services.gateway import ProviderGateway


@pytest.fixture
def client(gateway: ProviderGateway) -> Generator[TestClient, None, None]:
    """Create test client backed by the fake-provider gateway."""
    app.dependency_overrides[get_gateway] = lambda: gateway

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data


class TestProviderEndpoints:
    """Tests for provider endpoints."""

    def test_list_providers(self, client: TestClient):
        response = client.get("/providers")
        assert response.status_code == 200
        data = {item["provider"]: item for item in response.json()}

        assert list(data) == ["openai", "gemini", "llama", "deepseek"]
        assert data["openai"]["active"] is True
        assert data["openai"]["available"] is True
        assert data["deepseek"]["available"] is False
        assert Decimal(str(data["openai"]["cost_per_1k"])) == Decimal("0.03")
        assert data["gemini"]["default_model"] == "gemini-pro"

    def test_list_available(self, client: TestClient):
        response = client.get("/providers/available")
        assert response.status_code == 200
        assert response.json() == ["openai", "gemini", "llama"]

    def test_select_provider(self, client: TestClient, gateway: ProviderGateway):
        response = client.put("/providers/active", json={"provider": "gemini"})
        assert response.status_code == 200
        assert response.json()["provider"] == "gemini"
        assert gateway.provider == "gemini"

    def test_select_unknown_provider(self, client: TestClient):
        response = client.put("/providers/active", json={"provider": "claude"})
        assert response.status_code == 400

    def test_select_provider_without_key(self, client: TestClient, gateway: ProviderGateway):
        response = client.put("/providers/active", json={"provider": "deepseek"})
        assert response.status_code == 409
        assert gateway.provider == "openai"

    def test_set_credential(self, client: TestClient):
        response = client.put("/providers/deepseek/credential", json={"api_key": "ds-key"})
        assert response.status_code == 204

        available = client.get("/providers/available").json()
        assert "deepseek" in available

    def test_set_credential_unknown_provider(self, client: TestClient):
        response = client.put("/providers/claude/credential", json={"api_key": "x"})
        assert response.status_code == 400

    def test_get_models(self, client: TestClient):
        response = client.get("/providers/openai/models")
        assert response.status_code == 200
        data = response.json()

        assert data["provider"] == "openai"
        limits = {m["model"]: m["context_limit"] for m in data["models"]}
        assert limits["gpt-4"] == 8192
        assert limits["default"] == 4096

    def test_get_models_invalid_provider(self, client: TestClient):
        response = client.get("/providers/invalid/models")
        assert response.status_code == 400


class TestPromptEndpoints:
    """Tests for prompt endpoints."""

    def test_send_prompt(self, client: TestClient, provider_api: FakeProviderAPI):
        provider_api.reply(json_body=chat_completion("Profile ready", total_tokens=120))

        response = client.post(
            "/prompts",
            json={
                "prompt": "Profile this consumer",
                "component": "ConsumerProfiler",
                "options": {"model": "gpt-4", "top_p": 0.5},
            },
        )
        assert response.status_code == 200
        data = response.json()

        assert data["provider"] == "openai"
        assert data["model"] == "gpt-4"
        assert data["tokens_used"] == 120
        assert data["metadata"] is None
        assert provider_api.last_body["top_p"] == 0.5

    def test_send_prompt_reports_truncation(self, client: TestClient):
        response = client.post(
            "/prompts",
            json={"prompt": "word " * 20000, "options": {"model": "gpt-4"}},
        )
        assert response.status_code == 200
        metadata = response.json()["metadata"]

        assert metadata["was_truncated"] is True
        assert metadata["original_tokens"] == 25000
        assert metadata["processed_tokens"] <= 8192 - 1000 - 100

    def test_send_prompt_missing_key(self, client: TestClient, gateway: ProviderGateway):
        gateway.set_credential("openai", "")

        response = client.post("/prompts", json={"prompt": "Hi"})
        assert response.status_code == 409

    def test_send_prompt_no_budget(self, client: TestClient):
        response = client.post(
            "/prompts",
            json={"prompt": "Hi", "options": {"model": "gpt-4", "max_tokens": 9000}},
        )
        assert response.status_code == 422

    def test_send_prompt_provider_failure(self, client: TestClient, provider_api: FakeProviderAPI):
        provider_api.reply(503, json_body={"error": "overloaded"})

        response = client.post("/prompts", json={"prompt": "Hi"})
        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["provider"] == "openai"
        assert detail["status_code"] == 503
        assert detail["body"] == {"error": "overloaded"}

    def test_send_empty_prompt(self, client: TestClient, provider_api: FakeProviderAPI):
        response = client.post("/prompts", json={"prompt": ""})

        assert response.status_code == 200
        assert provider_api.last_body["messages"] == [{"role": "user", "content": ""}]

    def test_send_missing_prompt(self, client: TestClient):
        response = client.post("/prompts", json={"component": "ui"})
        assert response.status_code == 422

    def test_estimate(self, client: TestClient):
        response = client.post("/prompts/estimate", json={"text": "abcde"})
        assert response.status_code == 200
        assert response.json() == {"tokens": 2}


class TestUsageEndpoints:
    """Tests for usage endpoints."""

    def test_usage_after_prompt(self, client: TestClient, provider_api: FakeProviderAPI):
        provider_api.reply(json_body=chat_completion(total_tokens=1000))
        client.post("/prompts", json={"prompt": "Hi"})

        response = client.get("/usage")
        assert response.status_code == 200
        assert response.json() == {"provider": "openai", "tokens": 1000, "cost": "0.0300"}

    def test_reset_usage(self, client: TestClient, provider_api: FakeProviderAPI):
        client.post("/prompts", json={"prompt": "Hi"})

        response = client.delete("/usage")
        assert response.status_code == 204
        assert client.get("/usage").json()["tokens"] == 0


class TestHistoryEndpoints:
    """Tests for prompt history endpoints."""

    def test_history_and_stats(self, client: TestClient, provider_api: FakeProviderAPI):
        provider_api.reply(json_body=chat_completion(total_tokens=100))
        provider_api.reply(500, text="boom")

        client.post("/prompts", json={"prompt": "first", "component": "BusinessProfiler"})
        client.post("/prompts", json={"prompt": "second"})

        history = client.get("/history").json()
        assert [h["status"] for h in history] == ["error", "success"]
        assert history[1]["component"] == "BusinessProfiler"

        assert len(client.get("/history", params={"limit": 1}).json()) == 1

        stats = client.get("/history/stats").json()
        assert len(stats) == 1
        assert stats[0]["provider"] == "openai"
        assert stats[0]["count"] == 2
        assert stats[0]["success_rate"] == 50.0

    def test_clear_history(self, client: TestClient):
        client.post("/prompts", json={"prompt": "Hi"})

        response = client.delete("/history")
        assert response.status_code == 204
        assert client.get("/history").json() == []


class TestMetricsEndpoint:
    """Tests for the Prometheus endpoint."""

    def test_metrics_exposed(self, client: TestClient):
        client.post("/prompts", json={"prompt": "Hi"})

        response = client.get("/metrics/")
        assert response.status_code == 200
        assert "llm_compare_provider_calls_total" in response.text
