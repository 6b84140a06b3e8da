"""
HTTP API
========
Routers exposing the provider gateway to the browser UI.
"""

from llm_compare.api.router import api_router

__all__ = ["api_router"]
