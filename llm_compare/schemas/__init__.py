"""
Pydantic Schemas
================
Request/Response models for gateway calls and API validation.
"""

from llm_compare.schemas.api import (
    CredentialRequest,
    EstimateRequest,
    EstimateResponse,
    ModelLimit,
    PromptRequest,
    ProviderInfo,
    ProviderModelsResponse,
    SelectProviderRequest,
)
from llm_compare.schemas.gateway import (
    NormalizedResponse,
    PromptLogEntry,
    ProviderStats,
    SendOptions,
    TruncationMetadata,
    UsageSnapshot,
)

__all__ = [
    "SendOptions",
    "NormalizedResponse",
    "TruncationMetadata",
    "UsageSnapshot",
    "PromptLogEntry",
    "ProviderStats",
    "PromptRequest",
    "SelectProviderRequest",
    "CredentialRequest",
    "EstimateRequest",
    "EstimateResponse",
    "ProviderInfo",
    "ModelLimit",
    "ProviderModelsResponse",
]
