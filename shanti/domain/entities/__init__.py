"""
Domain Entities
"""

from .guide import ExerciseId, GenerationResult, MoodType, Purpose
from .knowledge import ContextBundle, KnowledgeEntry

__all__ = [
    "ContextBundle",
    "ExerciseId",
    "GenerationResult",
    "KnowledgeEntry",
    "MoodType",
    "Purpose",
]
