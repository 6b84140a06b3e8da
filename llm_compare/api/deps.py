"""
API Dependencies
================
FastAPI dependency providers.
"""

from fastapi import Request

from llm_compare.services.gateway import ProviderGateway


def get_gateway(request: Request) -> ProviderGateway:
    """Gateway created by the application lifespan."""
    return request.app.state.gateway
