"""
Agents
"""

from .guide_agent import (
    INVALID_CREDENTIAL_TEXT,
    MISSING_CREDENTIAL_TEXT,
    GuideAgent,
    get_response,
)

__all__ = ["GuideAgent", "INVALID_CREDENTIAL_TEXT", "MISSING_CREDENTIAL_TEXT", "get_response"]
