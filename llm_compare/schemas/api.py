"""
API Schemas
===========
Request/Response models for the HTTP API.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from llm_compare.schemas.gateway import SendOptions


class PromptRequest(BaseModel):
    """Prompt submitted by a UI component."""

    prompt: str
    component: str = Field(default="api", max_length=255)
    options: SendOptions = Field(default_factory=SendOptions)


class SelectProviderRequest(BaseModel):
    provider: str = Field(..., min_length=1)


class CredentialRequest(BaseModel):
    api_key: str = ""


class EstimateRequest(BaseModel):
    text: str


class EstimateResponse(BaseModel):
    tokens: int


class ProviderInfo(BaseModel):
    """Provider availability and pricing."""

    provider: str
    available: bool
    active: bool
    cost_per_1k: Decimal
    default_model: str


class ModelLimit(BaseModel):
    """Context window for a model."""

    model: str
    context_limit: int


class ProviderModelsResponse(BaseModel):
    """Known models and context windows for a provider."""

    provider: str
    models: list[ModelLimit]
