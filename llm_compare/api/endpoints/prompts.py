"""
Prompt Endpoints
================
API endpoints for sending prompts and estimating their size.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from llm_compare.api.deps import get_gateway
from llm_compare.core.tokens import estimate_tokens
from llm_compare.exceptions import (
    ConfigurationError,
    MissingCredentialError,
    ProviderCallError,
)
from llm_compare.schemas.api import EstimateRequest, EstimateResponse, PromptRequest
from llm_compare.schemas.gateway import NormalizedResponse
from llm_compare.services.gateway import ProviderGateway

router = APIRouter()

@router.post(
    "",
    response_model=NormalizedResponse,
    summary="Send prompt",
    description="Send a prompt to the active provider",
)
async def send_prompt(
    request: PromptRequest,
    gateway: Annotated[ProviderGateway, Depends(get_gateway)],
) -> NormalizedResponse:
    """
    Send a prompt to the active provider.

    - Truncates the prompt to fit the model's context window
    - Records usage at the provider's rate
    - Maps gateway errors to 409 (no key), 422 (no prompt budget) and
      502 (provider failure)
    """
    try:
        return await gateway.send_prompt(
            request.prompt,
            options=request.options,
            component=request.component,
        )
    except MissingCredentialError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ConfigurationError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e
    except ProviderCallError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": str(e),
                "provider": e.provider,
                "status_code": e.status_code,
                "body": e.body,
            },
        ) from e


@router.post(
    "/estimate",
    response_model=EstimateResponse,
    summary="Estimate tokens",
    description="Approximate token count of a text (about four characters per token)",
)
async def estimate(request: EstimateRequest) -> EstimateResponse:
    return EstimateResponse(tokens=estimate_tokens(request.text))
