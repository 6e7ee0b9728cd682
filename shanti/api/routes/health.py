"""
Health Check Routes
===================
헬스체크 엔드포인트 (/health)
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Request

from shanti.agents.guide_agent import GuideAgent
from shanti.api.dependencies import get_guide_agent, get_knowledge_loader, limiter
from shanti.api.models import HealthResponse
from shanti.rag.loader import KnowledgeSourceLoader

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
@limiter.limit("60/minute")
async def health_check(
    request: Request,
    loader: KnowledgeSourceLoader = Depends(get_knowledge_loader),
    agent: GuideAgent = Depends(get_guide_agent),
) -> HealthResponse:
    """기본 헬스 체크 (지식 소스는 로드된 경우에만 개수 보고, 로드를 유발하지 않음)"""
    stats = loader.get_stats()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        knowledge_loaded=stats["loaded"],
        knowledge_entries=stats["entry_count"] if stats["loaded"] else None,
        credential_configured=agent.gateway.has_credential(),
    )
