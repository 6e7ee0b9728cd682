"""
Shared utilities for the Shanti Guide orchestration layer.
"""

from .llm_client import EMPTY_REPLY_PLACEHOLDER, GenerationGateway

__all__ = ["EMPTY_REPLY_PLACEHOLDER", "GenerationGateway"]
