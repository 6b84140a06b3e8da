"""
API Router
==========
Main API router combining all endpoint modules.
"""

from fastapi import APIRouter

from llm_compare.api.endpoints import health, history, prompts, providers, usage

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(providers.router, prefix="/providers", tags=["Providers"])
api_router.include_router(prompts.router, prefix="/prompts", tags=["Prompts"])
api_router.include_router(usage.router, prefix="/usage", tags=["Usage"])
api_router.include_router(history.router, prefix="/history", tags=["History"])
