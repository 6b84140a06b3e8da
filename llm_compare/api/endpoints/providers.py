"""
Provider Endpoints
==================
API endpoints for provider selection, credentials and model limits.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from llm_compare.api.deps import get_gateway
from llm_compare.exceptions import MissingCredentialError, UnsupportedProviderError
from llm_compare.schemas.api import (
    CredentialRequest,
    ModelLimit,
    ProviderInfo,
    ProviderModelsResponse,
    SelectProviderRequest,
)
from llm_compare.services.gateway import ProviderGateway

router = APIRouter()

Gateway = Annotated[ProviderGateway, Depends(get_gateway)]


@router.get(
    "",
    response_model=list[ProviderInfo],
    summary="List providers",
    description="All supported providers with availability, pricing and default model",
)
async def list_providers(gateway: Gateway) -> list[ProviderInfo]:
    available = set(gateway.list_available_providers())
    return [
        ProviderInfo(
            provider=name,
            available=name in available,
            active=name == gateway.provider,
            cost_per_1k=gateway.catalog.cost_per_1k(name),
            default_model=gateway.catalog.default_model(name),
        )
        for name in gateway.catalog.providers
    ]


@router.get(
    "/available",
    response_model=list[str],
    summary="List available providers",
    description="Providers that currently have an API key",
)
async def list_available_providers(gateway: Gateway) -> list[str]:
    return gateway.list_available_providers()


@router.put(
    "/active",
    response_model=ProviderInfo,
    summary="Select provider",
    description="Switch the provider used for subsequent prompts",
)
async def select_provider(request: SelectProviderRequest, gateway: Gateway) -> ProviderInfo:
    """
    Switch the active provider.

    Returns 400 for an unknown provider and 409 when it has no API key.
    """
    try:
        gateway.select_provider(request.provider)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except MissingCredentialError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return ProviderInfo(
        provider=gateway.provider,
        available=True,
        active=True,
        cost_per_1k=gateway.catalog.cost_per_1k(gateway.provider),
        default_model=gateway.catalog.default_model(gateway.provider),
    )


@router.put(
    "/{provider}/credential",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set provider credential",
    description="Store an API key for a provider; an empty key clears it",
)
async def set_credential(provider: str, request: CredentialRequest, gateway: Gateway) -> None:
    try:
        gateway.set_credential(provider, request.api_key)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get(
    "/{provider}/models",
    response_model=ProviderModelsResponse,
    summary="Get provider models",
    description="Known models and context limits for a provider",
)
async def get_provider_models(provider: str, gateway: Gateway) -> ProviderModelsResponse:
    if provider not in gateway.catalog.providers:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid provider. Must be one of: {', '.join(gateway.catalog.providers)}",
        )

    limits = gateway.catalog.context_limits(provider)
    return ProviderModelsResponse(
        provider=provider,
        models=[
            ModelLimit(model=model, context_limit=limit)
            for model, limit in sorted(limits.items())
        ],
    )
