"""
Gateway Schemas
===============
Pydantic models for gateway calls, usage snapshots and the prompt log.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class SendOptions(BaseModel):
    """
    Per-call options for ``send_prompt``.

    Unknown fields are kept and passed through verbatim to the provider's
    request body.
    """

    model_config = ConfigDict(extra="allow")

    model: str | None = None
    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0)

    @property
    def extra(self) -> dict[str, Any]:
        """Provider-specific fields beyond model, max_tokens and temperature."""
        return dict(self.model_extra or {})


class TruncationMetadata(BaseModel):
    """Attached to a response when the prompt was shortened."""

    was_truncated: bool = True
    original_tokens: int = Field(ge=0)
    processed_tokens: int = Field(ge=0)


class NormalizedResponse(BaseModel):
    """Uniform result of a provider call."""

    provider: str
    model: str
    payload: dict[str, Any]
    tokens_used: int = Field(ge=0)
    cost: Decimal = Field(ge=0)
    latency_ms: int = Field(ge=0)
    metadata: TruncationMetadata | None = None

    @property
    def was_truncated(self) -> bool:
        return self.metadata is not None and self.metadata.was_truncated


class UsageSnapshot(BaseModel):
    """Read-only view of the usage accumulator."""

    provider: str
    tokens: int = Field(ge=0)
    cost: str


class PromptLogEntry(BaseModel):
    """A single prompt outcome in the history log."""

    component: str
    prompt_snippet: str
    provider: str
    model: str
    status: Literal["success", "error"]
    tokens: int = Field(default=0, ge=0)
    cost: Decimal = Field(default=Decimal("0"), ge=0)
    latency_ms: int = Field(default=0, ge=0)
    timestamp: datetime


class ProviderStats(BaseModel):
    """Per-provider aggregate over the prompt log."""

    provider: str
    count: int
    success_count: int
    success_rate: float
    total_tokens: int
    total_cost: Decimal
    avg_latency_ms: int
