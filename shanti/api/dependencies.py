"""
API Dependencies
================
라우트 모듈들이 공유하는 의존성 (레이트리밋, 컨테이너 접근자)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from shanti.agents.guide_agent import GuideAgent
from shanti.core.content_guard import ContentSafetyFilter
from shanti.infrastructure.container import Container
from shanti.rag.loader import KnowledgeSourceLoader

# ============= Rate Limiter =============

limiter = Limiter(key_func=get_remote_address)


# ============= Component Accessors =============


def get_guide_agent() -> GuideAgent:
    return Container.get_guide_agent()


def get_knowledge_loader() -> KnowledgeSourceLoader:
    return Container.get_knowledge_loader()


def get_content_filter() -> type[ContentSafetyFilter]:
    return ContentSafetyFilter
