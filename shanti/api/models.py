"""
API Pydantic Models
===================
가이드 / 커뮤니티 / 헬스 엔드포인트 요청·응답 모델
"""

from pydantic import BaseModel, Field

from shanti.domain.entities.guide import MoodType, Purpose

# ============= Guide Models =============


class GuideRequest(BaseModel):
    """가이드 응답 요청"""

    prompt: str = Field(..., max_length=10000, description="최대 10,000자")
    purpose: Purpose
    mood: MoodType | None = None


class GuideResponse(BaseModel):
    """가이드 응답"""

    text: str
    suggestion: str | None = None


# ============= Community Models =============


class StoryScreenRequest(BaseModel):
    """커뮤니티 스토리 게시 전 검사 요청"""

    title: str = Field(..., max_length=200)
    content: str = Field(..., max_length=10000)


class StoryScreenResponse(BaseModel):
    """검사 결과 (publishable=False면 message에 안내 문구)"""

    publishable: bool
    message: str | None = None


# ============= Health Models =============


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    knowledge_loaded: bool
    knowledge_entries: int | None = None
    credential_configured: bool
