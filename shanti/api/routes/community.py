"""
Community Routes
================
커뮤니티 스토리 게시 전 안전 검사 (/api/community/screen)
"""

from fastapi import APIRouter, Depends, Request

from shanti.api.dependencies import get_content_filter, limiter
from shanti.api.models import StoryScreenRequest, StoryScreenResponse
from shanti.core.content_guard import ContentSafetyFilter

router = APIRouter(prefix="/api/community", tags=["community"])


@router.post("/screen", response_model=StoryScreenResponse)
@limiter.limit("30/minute")
async def screen_story(
    request: Request,
    body: StoryScreenRequest,
    content_filter: type[ContentSafetyFilter] = Depends(get_content_filter),
) -> StoryScreenResponse:
    """제목과 본문이 모두 통과해야 게시 가능"""
    if content_filter.screen_story(body.title, body.content):
        return StoryScreenResponse(publishable=True)
    return StoryScreenResponse(publishable=False, message=content_filter.REVIEW_MESSAGE)
