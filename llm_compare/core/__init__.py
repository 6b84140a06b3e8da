"""
Core Logic
==========
Provider catalog, token estimation and prompt fitting.
"""

from llm_compare.core.catalog import ProviderCatalog
from llm_compare.core.tokens import (
    TRUNCATION_NOTICE,
    FitResult,
    estimate_tokens,
    fit_prompt,
)

__all__ = [
    "ProviderCatalog",
    "FitResult",
    "TRUNCATION_NOTICE",
    "estimate_tokens",
    "fit_prompt",
]
