"""
Exceptions
==========
Error taxonomy for the provider gateway.

None of these are retried internally: each one is terminal for the call that
raised it.
"""

from typing import Any


class LLMCompareError(Exception):
    """Base exception for all gateway errors."""


class UnsupportedProviderError(LLMCompareError):
    """Raised for a provider id outside the supported set, before any I/O."""

    def __init__(self, provider: str, supported: list[str] | None = None):
        self.provider = provider
        self.supported = supported or []
        message = f"Unsupported provider: {provider}"
        if self.supported:
            message += f". Available: {', '.join(self.supported)}"
        super().__init__(message)


class MissingCredentialError(LLMCompareError):
    """Raised when a known provider has no API key stored."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f'Missing API key for provider "{provider}". '
            f"Set {provider.upper()}_API_KEY or call set_credential()."
        )


class ConfigurationError(LLMCompareError):
    """Raised when call options leave no room for the prompt."""


class ProviderCallError(LLMCompareError):
    """
    Raised when a provider call fails in transport, status or decoding.

    Attributes:
        provider: Provider that served the failed call
        status_code: HTTP status, if a response was received
        body: Raw error body, if one was received
    """

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"Failed to get response from {provider}: {message}")
