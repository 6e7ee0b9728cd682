"""
Wellness Guide (static knowledge document)
단일 마크다운 문서를 "##" 기준 섹션으로 나누고 질의와 가장 많이 겹치는 섹션 1개 선택

데이터셋 경로와 달리 불용어 필터 없이 느슨하게 매칭합니다:
- 질의 소문자 공백 분리, 길이 > 3 토큰 (중복 포함)
- 섹션 소문자 텍스트에 부분 문자열로 포함되면 +1
- 최고 점수가 STATIC_MATCH_THRESHOLD 초과일 때만 채택
"""

import logging
from pathlib import Path

from shanti.shared.constants import (
    STATIC_MATCH_THRESHOLD,
    STATIC_MIN_TOKEN_LENGTH,
    STATIC_SECTION_MARKER,
)

logger = logging.getLogger(__name__)


class WellnessGuide:
    """정적 웰니스 문서 섹션 매처"""

    def __init__(
        self,
        content: str | None = None,
        path: str | Path | None = None,
        threshold: int = STATIC_MATCH_THRESHOLD,
    ):
        """
        Args:
            content: 문서 본문 (직접 전달 시 path 무시)
            path: 마크다운 파일 경로 (첫 사용 시 읽음)
            threshold: 채택 최소 점수 (초과)
        """
        self.path = Path(path) if path else None
        self.threshold = threshold
        self._content = content
        self._sections: list[str] | None = None

    @property
    def sections(self) -> list[str]:
        if self._sections is None:
            self._sections = self._split_sections(self._read_content())
        return self._sections

    def _read_content(self) -> str:
        if self._content is not None:
            return self._content
        if self.path is None or not self.path.exists():
            logger.warning(f"Wellness guide not found: {self.path}")
            return ""
        try:
            with open(self.path, encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Wellness guide unreadable: {self.path}: {e}")
            return ""

    @staticmethod
    def _split_sections(content: str) -> list[str]:
        # 첫 마커 이전 텍스트(문서 제목 등)는 버림
        return content.split(STATIC_SECTION_MARKER)[1:]

    def score_section(self, section: str, keywords: list[str]) -> int:
        section_lower = section.lower()
        return sum(
            1
            for keyword in keywords
            if len(keyword) >= STATIC_MIN_TOKEN_LENGTH and keyword in section_lower
        )

    def match(self, prompt: str) -> str | None:
        """
        질의에 가장 잘 맞는 섹션

        Returns:
            "## <섹션>" 또는 None (임계값 이하)
        """
        keywords = prompt.lower().split()

        best_match = ""
        max_score = 0
        for section in self.sections:
            score = self.score_section(section, keywords)
            if score > max_score:
                max_score = score
                best_match = section

        if max_score > self.threshold:
            trimmed = best_match.strip()
            return f"{STATIC_SECTION_MARKER} {trimmed}" if trimmed else None

        return None
