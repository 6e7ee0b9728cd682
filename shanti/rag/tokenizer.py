"""
Keyword Tokenizer
텍스트 -> 정규화된 키워드 집합 (로더와 질의 경로가 공유)
"""

import re

from shanti.shared.constants import MIN_KEYWORD_LENGTH, STOP_WORDS

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def sanitize(value: str | None) -> str:
    """공백 연속을 한 칸으로 접고 양끝 공백 제거 (None -> "")"""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def tokenize(text: str) -> frozenset[str]:
    """
    텍스트를 키워드 집합으로 변환

    1. 소문자화
    2. [a-z0-9] / 공백 이외 문자 -> 공백
    3. 공백 분리
    4. MIN_KEYWORD_LENGTH 미만, 불용어 제거

    Returns:
        키워드 집합 (중복 제거, 순서 없음)
    """
    normalized = _NON_ALNUM.sub(" ", (text or "").lower())
    return frozenset(
        token
        for token in normalized.split()
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS
    )
