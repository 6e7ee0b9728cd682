"""
Guide Domain Entities
=====================
질의 목적, 기분 태그, 추천 연습, 생성 결과
"""

from dataclasses import dataclass
from enum import Enum


class Purpose(str, Enum):
    """상호작용 목적 (닫힌 열거형)"""

    CHAT = "chat"
    JOURNAL = "journal"
    MOOD = "mood"


class MoodType(str, Enum):
    """기분 체크인 태그"""

    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    CALM = "calm"
    EXCITED = "excited"
    FRUSTRATED = "frustrated"
    GRATEFUL = "grateful"


class ExerciseId(str, Enum):
    """툴킷 연습 식별자"""

    BOX_BREATHING = "box-breathing"
    GROUNDING_54321 = "5-4-3-2-1-grounding"
    THOUGHT_CHALLENGING = "thought-challenging"
    BODY_SCAN = "body-scan"
    LOVING_KINDNESS = "loving-kindness"


@dataclass(frozen=True)
class GenerationResult:
    """
    오케스트레이터 최종 응답

    suggestion은 연습 식별자 문자열이며, 모델이 보낸 값을 검증 없이 전달합니다.
    (ExerciseId 검증은 소비자 책임)
    """

    text: str
    suggestion: str | None = None
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return {"text": self.text, "suggestion": self.suggestion}
