"""
Core 응답 구성 모듈

- prompt_builder: 목적별 페르소나 프롬프트
- suggestion: 추천 마커 프로토콜 (v1)
- fallback: 결정적 폴백 응답
- content_guard: 커뮤니티 게시물 안전 필터
"""

from .content_guard import ContentSafetyFilter
from .fallback import FallbackResponder
from .prompt_builder import PromptBuilder
from .suggestion import MarkerStatus, SuggestionParse, extract_suggestion

__all__ = [
    "ContentSafetyFilter",
    "FallbackResponder",
    "MarkerStatus",
    "PromptBuilder",
    "SuggestionParse",
    "extract_suggestion",
]
