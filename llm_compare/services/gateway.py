"""
Provider Gateway
================
Uniform prompt dispatch across hosted model providers.

The gateway holds the active provider, per-provider credentials and a running
usage total. Each call fits the prompt into the provider's context window,
issues exactly one HTTP request and records usage at the rate of the provider
that served it.
"""

import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import httpx
import structlog

from llm_compare.config import GatewayConfig
from llm_compare.core import metrics
from llm_compare.core.catalog import ProviderCatalog
from llm_compare.core.tokens import FitResult, estimate_tokens, fit_prompt
from llm_compare.exceptions import (
    ConfigurationError,
    MissingCredentialError,
    ProviderCallError,
    UnsupportedProviderError,
)
from llm_compare.providers import PROVIDERS, ParsedResponse, Provider, ProviderRequest
from llm_compare.providers.base import DEFAULT_MAX_TOKENS
from llm_compare.schemas.gateway import (
    NormalizedResponse,
    PromptLogEntry,
    ProviderStats,
    SendOptions,
    TruncationMetadata,
    UsageSnapshot,
)
from llm_compare.services.prompt_log import PromptLogger, make_snippet

logger = structlog.get_logger()

# Reserved for protocol overhead in every request.
SYSTEM_OVERHEAD_TOKENS = 100


class ProviderGateway:
    """
    Gateway for sending prompts to the supported providers.

    Usage:
        config = GatewayConfig(api_keys={"openai": "sk-..."})
        async with ProviderGateway(config) as gateway:
            response = await gateway.send_prompt("Summarize this report")
            print(gateway.get_usage())

    Usage updates happen in one synchronous step after the provider call
    returns, with the provider captured when the call was dispatched. On a
    single event loop concurrent calls therefore never lose updates, and a
    provider switch during an in-flight call does not reprice it.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        catalog: ProviderCatalog | None = None,
        http_client: httpx.AsyncClient | None = None,
        prompt_log: PromptLogger | None = None,
    ):
        """
        Initialize the gateway.

        Args:
            config: Explicit gateway configuration (empty credentials if omitted)
            catalog: Cost and context-limit tables (built from config if omitted)
            http_client: Client used for provider calls; the gateway owns and
                closes the client only when it created it
            prompt_log: History log (a new bounded log if omitted)

        Raises:
            UnsupportedProviderError: If the config names an unknown provider
        """
        self.config = config or GatewayConfig()
        supported = list(PROVIDERS)

        for name in [self.config.default_provider, *self.config.api_keys]:
            if name not in PROVIDERS:
                raise UnsupportedProviderError(name, supported)

        self.catalog = catalog or ProviderCatalog(
            config_path=self.config.catalog_config_path,
            default_provider=self.config.default_provider,
        )
        self.prompt_log = prompt_log or PromptLogger(max_entries=self.config.history_limit)

        self._providers: dict[str, Provider] = {name: cls() for name, cls in PROVIDERS.items()}
        self._api_keys: dict[str, str] = {
            name: self.config.api_keys.get(name) or "" for name in PROVIDERS
        }
        self.provider = self.config.default_provider

        self._tokens = 0
        self._cost = Decimal("0")

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self.config.request_timeout)

        logger.info(
            "Provider gateway initialized",
            provider=self.provider,
            available_providers=self.list_available_providers(),
        )

    # Provider selection and credentials

    def _check_supported(self, provider: str) -> None:
        if provider not in PROVIDERS:
            raise UnsupportedProviderError(provider, list(PROVIDERS))

    def select_provider(self, provider: str) -> None:
        """
        Make ``provider`` the active provider.

        Raises:
            UnsupportedProviderError: If the provider is unknown
            MissingCredentialError: If no API key is stored for it
        """
        self._check_supported(provider)
        if not self._api_keys[provider]:
            raise MissingCredentialError(provider)

        self.provider = provider
        logger.info("Switched provider", provider=provider)

    def set_credential(self, provider: str, api_key: str) -> None:
        """Store ``api_key`` for ``provider``; an empty key clears it."""
        self._check_supported(provider)
        self._api_keys[provider] = api_key or ""
        logger.info("Updated credential", provider=provider, cleared=not api_key)

    def list_available_providers(self) -> list[str]:
        """Providers with a non-empty credential."""
        return [name for name, key in self._api_keys.items() if key]

    # Token budgeting

    @staticmethod
    def estimate_tokens(text: str) -> int:
        return estimate_tokens(text)

    @staticmethod
    def fit_prompt(text: str, max_tokens: int) -> FitResult:
        return fit_prompt(text, max_tokens)

    def resolve_context_limit(self, provider: str, model: str | None) -> int:
        return self.catalog.resolve_context_limit(provider, model)

    def prompt_budget(self, provider: str, model: str, max_tokens: int | None) -> int:
        """
        Tokens left for the prompt after the response and overhead reserves.

        Raises:
            ConfigurationError: If nothing is left for the prompt
        """
        context_limit = self.resolve_context_limit(provider, model)
        response_tokens = max_tokens or DEFAULT_MAX_TOKENS
        budget = context_limit - response_tokens - SYSTEM_OVERHEAD_TOKENS

        if budget <= 0:
            raise ConfigurationError(
                f"max_tokens={response_tokens} leaves no room for the prompt: "
                f"{provider}/{model} has a context limit of {context_limit} tokens "
                f"and {SYSTEM_OVERHEAD_TOKENS} are reserved"
            )
        return budget

    # Dispatch

    async def send_prompt(
        self,
        prompt: str,
        options: SendOptions | None = None,
        component: str = "api",
    ) -> NormalizedResponse:
        """
        Send ``prompt`` to the active provider.

        Args:
            prompt: Prompt text, truncated to fit the context window if needed
            options: Model, max response tokens, temperature and any
                provider-specific fields to pass through
            component: Name of the calling component, recorded in the history

        Returns:
            NormalizedResponse with the provider-native payload, usage and
            truncation metadata

        Raises:
            MissingCredentialError: If the active provider has no API key
            ConfigurationError: If the options leave no prompt budget
            ProviderCallError: If the provider call fails; never retried
        """
        options = options or SendOptions()
        provider_name = self.provider
        api_key = self._api_keys[provider_name]
        if not api_key:
            raise MissingCredentialError(provider_name)

        provider = self._providers[provider_name]
        model = options.model or self.catalog.default_model(provider_name)
        budget = self.prompt_budget(provider_name, model, options.max_tokens)

        fitted = fit_prompt(prompt, budget)
        metadata = None
        if fitted.was_truncated:
            metadata = TruncationMetadata(
                original_tokens=estimate_tokens(prompt),
                processed_tokens=estimate_tokens(fitted.text),
            )
            metrics.PROMPT_TRUNCATIONS.labels(provider=provider_name).inc()
            logger.warning(
                "Prompt truncated to fit context limit",
                provider=provider_name,
                model=model,
                original_tokens=metadata.original_tokens,
                processed_tokens=metadata.processed_tokens,
            )

        request = provider.build_request(fitted.text, model, options, api_key)

        start_time = time.perf_counter()
        try:
            parsed = await self._dispatch(provider, request, fitted.text)
        except ProviderCallError as e:
            latency_ms = int((time.perf_counter() - start_time) * 1000)
            metrics.PROVIDER_CALLS.labels(provider=provider_name, status="error").inc()
            logger.error(
                "Provider call failed",
                provider=provider_name,
                model=model,
                status_code=e.status_code,
                error=str(e),
            )
            self._log_prompt(component, prompt, provider_name, model, "error", latency_ms=latency_ms)
            raise

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        cost = self._track_usage(provider_name, parsed.tokens_used)

        metrics.PROVIDER_CALLS.labels(provider=provider_name, status="success").inc()
        metrics.PROVIDER_TOKENS.labels(provider=provider_name).inc(parsed.tokens_used)
        metrics.PROVIDER_COST.labels(provider=provider_name).inc(float(cost))
        metrics.PROVIDER_LATENCY.labels(provider=provider_name).observe(latency_ms / 1000)

        logger.info(
            "Provider call completed",
            provider=provider_name,
            model=model,
            tokens=parsed.tokens_used,
            cost=float(cost),
            latency_ms=latency_ms,
        )
        self._log_prompt(
            component,
            prompt,
            provider_name,
            model,
            "success",
            tokens=parsed.tokens_used,
            cost=cost,
            latency_ms=latency_ms,
        )

        return NormalizedResponse(
            provider=provider_name,
            model=model,
            payload=parsed.payload,
            tokens_used=parsed.tokens_used,
            cost=cost,
            latency_ms=latency_ms,
            metadata=metadata,
        )

    async def _dispatch(
        self,
        provider: Provider,
        request: ProviderRequest,
        prompt: str,
    ) -> ParsedResponse:
        """Issue one POST and normalize the result. No retries."""
        try:
            response = await self._client.post(
                request.url,
                json=request.json,
                headers=request.headers,
                params=request.params or None,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ProviderCallError(provider.name, f"{type(e).__name__}: {e}") from e
        except (TypeError, ValueError) as e:
            # Pass-through options that cannot be encoded as JSON
            raise ProviderCallError(provider.name, f"Invalid request body: {e}") from e

        if not response.is_success:
            raise ProviderCallError(
                provider.name,
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=_error_body(response),
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderCallError(
                provider.name,
                "malformed response body",
                status_code=response.status_code,
                body=response.text,
            ) from e

        try:
            return provider.parse_response(prompt, body)
        except ValueError as e:
            raise ProviderCallError(
                provider.name,
                str(e),
                status_code=response.status_code,
                body=body,
            ) from e

    # Usage

    def _track_usage(self, provider: str, tokens: int) -> Decimal:
        """Add ``tokens`` at ``provider``'s rate and return the call's cost."""
        cost = self.catalog.calculate_cost(provider, tokens)
        self._tokens += tokens
        self._cost += cost
        return cost

    def get_usage(self) -> UsageSnapshot:
        """Running totals; cost is formatted to 4 decimal places."""
        return UsageSnapshot(
            provider=self.provider,
            tokens=self._tokens,
            cost=f"{self._cost:.4f}",
        )

    def reset_usage(self) -> None:
        self._tokens = 0
        self._cost = Decimal("0")
        logger.info("Usage reset")

    # History

    def _log_prompt(
        self,
        component: str,
        prompt: str,
        provider: str,
        model: str,
        status: str,
        tokens: int = 0,
        cost: Decimal = Decimal("0"),
        latency_ms: int = 0,
    ) -> None:
        self.prompt_log.log_prompt(
            PromptLogEntry(
                component=component,
                prompt_snippet=make_snippet(prompt),
                provider=provider,
                model=model,
                status=status,
                tokens=tokens,
                cost=cost,
                latency_ms=latency_ms,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def history(self, limit: int | None = None) -> list[PromptLogEntry]:
        return self.prompt_log.get_history(limit)

    def clear_history(self) -> None:
        self.prompt_log.clear()

    def provider_stats(self) -> dict[str, ProviderStats]:
        return self.prompt_log.provider_stats()

    # Lifecycle

    async def aclose(self) -> None:
        """Close the HTTP client if the gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ProviderGateway":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


def _error_body(response: httpx.Response) -> Any:
    """Decoded error body when it is JSON, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text
