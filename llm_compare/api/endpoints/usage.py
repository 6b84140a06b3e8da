"""
Usage Endpoints
===============
API endpoints for the running usage totals.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from llm_compare.api.deps import get_gateway
from llm_compare.schemas.gateway import UsageSnapshot
from llm_compare.services.gateway import ProviderGateway

router = APIRouter()


@router.get("", response_model=UsageSnapshot, summary="Get usage")
async def get_usage(
    gateway: Annotated[ProviderGateway, Depends(get_gateway)],
) -> UsageSnapshot:
    return gateway.get_usage()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="Reset usage")
async def reset_usage(
    gateway: Annotated[ProviderGateway, Depends(get_gateway)],
) -> None:
    gateway.reset_usage()
