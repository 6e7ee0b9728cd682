"""
Domain Layer
============
프레임워크나 외부 의존성 없이 순수 도메인 모델만 포함합니다.

구조:
- entities/: 지식 항목, 컨텍스트 묶음, 목적/기분/연습 열거형, 생성 결과
- exceptions.py: 오케스트레이션 계층 예외 계층
"""

from shanti.domain.entities import (
    ContextBundle,
    ExerciseId,
    GenerationResult,
    KnowledgeEntry,
    MoodType,
    Purpose,
)
from shanti.domain.exceptions import (
    ConfigurationError,
    GenerationError,
    GenerationTransportError,
    InvalidCredentialError,
    KnowledgeLoadError,
    MissingCredentialError,
    ShantiError,
)

__all__ = [
    # Entities
    "ContextBundle",
    "ExerciseId",
    "GenerationResult",
    "KnowledgeEntry",
    "MoodType",
    "Purpose",
    # Exceptions
    "ShantiError",
    "ConfigurationError",
    "MissingCredentialError",
    "GenerationError",
    "GenerationTransportError",
    "InvalidCredentialError",
    "KnowledgeLoadError",
]
