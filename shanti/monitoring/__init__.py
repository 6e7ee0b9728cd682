"""
Monitoring and observability modules
"""

from .logger import AgentLogger, ErrorDeduplicationFilter, SensitiveDataFilter

__all__ = ["AgentLogger", "ErrorDeduplicationFilter", "SensitiveDataFilter"]
