"""
커뮤니티 콘텐츠 안전 필터 (ContentSafetyFilter)
==============================================
커뮤니티 게시 전 위기 위험 문구 검사

- 고정 금지 문구 목록 (자해/자살 관련 10개)
- 대소문자 무시 부분 문자열 매칭
- 제목과 본문을 각각 검사, 둘 다 통과해야 게시 가능
"""

import logging
import unicodedata

logger = logging.getLogger(__name__)


class ContentSafetyFilter:
    """위기 위험 키워드 스크리너"""

    DENYLIST = (
        "suicide",
        "kill myself",
        "end it all",
        "self-harm",
        "cutting",
        "overdose",
        "pills",
        "hurt myself",
        "die",
        "death",
    )

    REVIEW_MESSAGE = (
        "Your story contains content that requires review. Please consider reaching out to a "
        "mental health professional or crisis helpline if you're in distress."
    )

    @staticmethod
    def _normalize(text: str) -> str:
        # NFKC 정규화 (전각 문자 등 유니코드 우회 방지)
        return unicodedata.normalize("NFKC", text or "").lower()

    @classmethod
    def find_phrase(cls, text: str) -> str | None:
        """처음 매칭된 금지 문구 (없으면 None)"""
        normalized = cls._normalize(text)
        for phrase in cls.DENYLIST:
            if phrase in normalized:
                return phrase
        return None

    @classmethod
    def is_safe(cls, text: str) -> bool:
        """금지 문구가 하나도 없으면 True"""
        return cls.find_phrase(text) is None

    @classmethod
    def screen_story(cls, title: str, content: str) -> bool:
        """
        커뮤니티 스토리 게시 가능 여부

        Returns:
            제목과 본문이 모두 안전하면 True
        """
        for field_name, value in (("content", content), ("title", title)):
            phrase = cls.find_phrase(value)
            if phrase is not None:
                logger.warning(f"Community submission held for review: {field_name} matched '{phrase}'")
                return False
        return True
