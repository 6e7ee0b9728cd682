"""
Infrastructure layer: configuration and dependency wiring.
"""

from .config import AppConfig, CredentialResolver
from .container import Container

__all__ = ["AppConfig", "Container", "CredentialResolver"]
