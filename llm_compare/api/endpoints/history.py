"""
History Endpoints
=================
API endpoints for the prompt log and per-provider comparison.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from llm_compare.api.deps import get_gateway
from llm_compare.schemas.gateway import PromptLogEntry, ProviderStats
from llm_compare.services.gateway import ProviderGateway

router = APIRouter()

Gateway = Annotated[ProviderGateway, Depends(get_gateway)]


@router.get(
    "",
    response_model=list[PromptLogEntry],
    summary="Get prompt history",
    description="Prompt outcomes, newest first",
)
async def get_history(
    gateway: Gateway,
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
) -> list[PromptLogEntry]:
    return gateway.history(limit)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="Clear prompt history")
async def clear_history(gateway: Gateway) -> None:
    gateway.clear_history()


@router.get(
    "/stats",
    response_model=list[ProviderStats],
    summary="Compare providers",
    description="Count, success rate, tokens, cost and average latency per provider",
)
async def get_provider_stats(gateway: Gateway) -> list[ProviderStats]:
    return sorted(gateway.provider_stats().values(), key=lambda s: s.provider)
