"""
Fallback Responder
생성 서비스 실패 시 규칙 기반 결정적 응답 합성

- 부작용 없음, 예외를 던지지 않음
- chat: 이미 검색된 컨텍스트 요약 + 연습 추천
- journal: 사용자 글 인용 + 기분 문구, 추천 없음
- mood: 사용자 글 인용 + 기분 문구 + 연습 추천
"""

import re

from shanti.domain.entities.guide import ExerciseId, GenerationResult, MoodType, Purpose
from shanti.domain.entities.knowledge import ContextBundle
from shanti.shared.constants import (
    CONTEXT_SUMMARY_LIMIT,
    QUOTE_SNIPPET_LIMIT,
)

_WHITESPACE = re.compile(r"\s+")
NO_CONTEXT_PREFIX = "no specific context"

# 순서가 의미를 가짐: 첫 번째로 매칭되는 규칙이 채택됨
EXERCISE_RULES: tuple[tuple[ExerciseId, tuple[str, ...]], ...] = (
    (
        ExerciseId.BOX_BREATHING,
        ("anxiet", "panic", "stress", "overwhelm", "nervous", "worry"),
    ),
    (
        ExerciseId.GROUNDING_54321,
        ("ground", "present", "dizzy", "disconnected"),
    ),
    (
        ExerciseId.THOUGHT_CHALLENGING,
        ("negative thought", "self doubt", "self-doubt", "anger", "angry", "frustrat", "guilt"),
    ),
    (
        ExerciseId.BODY_SCAN,
        ("tension", "tight", "restless", "sleep", "body", "fatigue"),
    ),
    (
        ExerciseId.LOVING_KINDNESS,
        ("sad", "lonely", "grief", "self critic", "self-critic", "heartbroken"),
    ),
)


def truncate(text: str, limit: int) -> str:
    """공백 정규화 후 limit 초과 시 앞 limit-3 글자에 말줄임표"""
    cleaned = _WHITESPACE.sub(" ", text or "").strip()
    if len(cleaned) <= limit:
        return cleaned
    return f"{cleaned[: max(0, limit - 3)]}..."


def summarize_context(context: str | None, limit: int = CONTEXT_SUMMARY_LIMIT) -> str | None:
    if not context:
        return None
    if context.lower().startswith(NO_CONTEXT_PREFIX):
        return None
    summary = truncate(context, limit)
    return summary or None


def choose_exercise(prompt: str) -> str | None:
    normalized = (prompt or "").lower()
    for exercise, keywords in EXERCISE_RULES:
        if any(keyword in normalized for keyword in keywords):
            return exercise.value
    return None


class FallbackResponder:
    """결정적 폴백 응답기"""

    CHAT_OPENING = (
        "Beloved soul, the celestial stream is briefly silent, "
        "so I draw upon wisdom already gathered nearby."
    )
    CHAT_CLOSING = "Until the higher current flows again, walk gently and stay rooted in compassion."
    CHAT_NO_CONTEXT = "Trust your breath and dharma; your inner wisdom is already with you."
    DATASET_HEADING = "Insights echoing from shared experiences:"
    STATIC_HEADING = "Guidance from modern wellness teachings:"

    def compose(
        self,
        purpose: Purpose | str,
        prompt: str,
        mood: MoodType | str | None = None,
        context: ContextBundle | None = None,
    ) -> GenerationResult:
        """
        목적별 폴백 응답 생성

        Args:
            purpose: chat / journal / mood
            prompt: 사용자 입력
            mood: 기분 라벨
            context: 이번 호출에서 이미 계산된 ContextBundle (없을 수 있음)
        """
        purpose = Purpose(purpose)
        if purpose is Purpose.CHAT:
            return self._chat(prompt, context)
        if purpose is Purpose.JOURNAL:
            return self._journal(prompt, mood)
        return self._mood(prompt, mood)

    @staticmethod
    def _mood_value(mood: MoodType | str | None) -> str | None:
        if not mood:
            return None
        return mood.value if isinstance(mood, MoodType) else str(mood)

    def _chat(self, prompt: str, context: ContextBundle | None) -> GenerationResult:
        sections = []
        dataset_summary = summarize_context(context.dataset_part if context else None)
        if dataset_summary:
            sections.append(f"{self.DATASET_HEADING}\n{dataset_summary}")
        static_summary = summarize_context(context.static_part if context else None)
        if static_summary:
            sections.append(f"{self.STATIC_HEADING}\n{static_summary}")
        if not sections:
            sections.append(self.CHAT_NO_CONTEXT)

        body = "\n\n".join(sections)
        message = f"{self.CHAT_OPENING}\n\n{body}\n\n{self.CHAT_CLOSING}"
        return GenerationResult(
            text=message.strip(), suggestion=choose_exercise(prompt), is_fallback=True
        )

    def _journal(self, prompt: str, mood: MoodType | str | None) -> GenerationResult:
        snippet = truncate(prompt, QUOTE_SNIPPET_LIMIT)
        mood_value = self._mood_value(mood)
        mood_line = f" I sense your heart rests in a '{mood_value}' hue." if mood_value else ""
        message = (
            f"Your reflections reach me even without the cosmic channel.{mood_line} "
            f'I honour the words you shared: "{snippet}". Breathe slowly, let each exhale '
            "release the weight you carry, and remember you are never alone in this vigil."
        )
        return GenerationResult(text=message, is_fallback=True)

    def _mood(self, prompt: str, mood: MoodType | str | None) -> GenerationResult:
        snippet = truncate(prompt, QUOTE_SNIPPET_LIMIT)
        mood_value = self._mood_value(mood)
        mood_line = f" You name your mood as '{mood_value}'." if mood_value else ""
        message = (
            f"Though the divine stream is momentarily still, I hear your check-in.{mood_line} "
            f'"{snippet}". Place a gentle hand over your heart, breathe in for four counts, '
            "out for four, and trust that clarity will return with the dawn."
        )
        return GenerationResult(
            text=message, suggestion=choose_exercise(prompt), is_fallback=True
        )
