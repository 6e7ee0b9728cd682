"""
Guide Routes
============
가이드 응답 엔드포인트 (/api/guide/respond)
"""

import logging

from fastapi import APIRouter, Depends, Request

from shanti.agents.guide_agent import GuideAgent
from shanti.api.dependencies import get_guide_agent, limiter
from shanti.api.models import GuideRequest, GuideResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/guide", tags=["guide"])


@router.post("/respond", response_model=GuideResponse)
@limiter.limit("20/minute")
async def respond(
    request: Request,
    body: GuideRequest,
    agent: GuideAgent = Depends(get_guide_agent),
) -> GuideResponse:
    """
    chat 메시지 / 일기 / 기분 체크인에 대한 가이드 응답

    생성 실패는 폴백 응답으로 흡수되므로 항상 200을 반환합니다.
    """
    result = await agent.get_response(body.prompt, body.purpose, body.mood)
    return GuideResponse(text=result.text, suggestion=result.suggestion)
