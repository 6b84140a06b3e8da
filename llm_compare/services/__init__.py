"""
Business Services
=================
Provider gateway and prompt history.
"""

from llm_compare.services.gateway import ProviderGateway
from llm_compare.services.prompt_log import PromptLogger

__all__ = ["ProviderGateway", "PromptLogger"]
