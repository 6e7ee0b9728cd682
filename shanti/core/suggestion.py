"""
Toolkit Suggestion Marker Protocol (v1)
=======================================
생성 텍스트에 포함된 추천 연습 마커를 추출하는 마이크로 프로토콜

Grammar (v1):
    marker := "[TOOLKIT_SUGGESTION:" value "]"
    value  := 1*( any char except "]" and newline )   ; 양끝 공백 제거 후 비어 있으면 안 됨

파싱 결과:
- FOUND:     첫 번째 마커 값 추출, 마커 부분 문자열만 제거 후 전체 trim
- ABSENT:    마커 접두어 없음, 텍스트 그대로
- MALFORMED: 접두어는 있으나 닫힌 마커가 없거나 값이 비어 있음, 텍스트 그대로
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

MARKER_PROTOCOL_VERSION = 1
MARKER_PREFIX = "[TOOLKIT_SUGGESTION:"
MARKER_PATTERN = re.compile(r"\[TOOLKIT_SUGGESTION:(?P<value>[^\]\n]*)\]")


class MarkerStatus(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class SuggestionParse:
    text: str
    suggestion: str | None
    status: MarkerStatus


def format_marker(value: str) -> str:
    """추천 마커 문자열 생성"""
    return f"{MARKER_PREFIX}{value}]"


def extract_suggestion(text: str) -> SuggestionParse:
    """
    생성 텍스트에서 추천 마커 추출

    Args:
        text: 모델 응답 원문

    Returns:
        SuggestionParse (표시용 텍스트, 추천값, 파싱 상태)
    """
    if MARKER_PREFIX not in text:
        return SuggestionParse(text=text, suggestion=None, status=MarkerStatus.ABSENT)

    match = MARKER_PATTERN.search(text)
    value = match.group("value").strip() if match else ""
    if not value:
        logger.warning(f"Malformed suggestion marker in reply: {text[-80:]!r}")
        return SuggestionParse(text=text, suggestion=None, status=MarkerStatus.MALFORMED)

    visible = (text[: match.start()] + text[match.end() :]).strip()
    return SuggestionParse(text=visible, suggestion=value, status=MarkerStatus.FOUND)
