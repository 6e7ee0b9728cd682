"""
Guide Agent
응답 오케스트레이터 (검색 → 프롬프트 → 생성 → 추천 추출, 실패 시 폴백)

Flow:
    caller → 자격 증명 확인 → (chat만) ContextComposer
           → PromptBuilder → GenerationGateway
           → 성공: (chat만) 추천 마커 추출
           → 실패: FallbackResponder (이미 계산된 컨텍스트 재사용)

호출자에게 구분된 메시지로 전달되는 실패는 자격 증명 누락/무효 두 가지뿐입니다.
"""

from typing import Any, Optional

from shanti.core.fallback import FallbackResponder
from shanti.core.prompt_builder import PromptBuilder
from shanti.core.suggestion import extract_suggestion
from shanti.domain.entities.guide import GenerationResult, MoodType, Purpose
from shanti.domain.entities.knowledge import ContextBundle
from shanti.domain.exceptions import (
    GenerationError,
    InvalidCredentialError,
    MissingCredentialError,
)
from shanti.monitoring.logger import AgentLogger
from shanti.rag.context_builder import ContextComposer
from shanti.shared.llm_client import GenerationGateway

MISSING_CREDENTIAL_TEXT = (
    "My child, the path to wisdom is clouded. "
    "The sacred key (GEMINI_API_KEY) is missing from your environment."
)
INVALID_CREDENTIAL_TEXT = (
    "My child, the key to this realm of knowledge appears to be invalid. "
    "Please check your sacred key (GEMINI_API_KEY) and try again."
)


class GuideAgent:
    """페르소나 가이드 응답 에이전트"""

    def __init__(
        self,
        composer: ContextComposer,
        gateway: GenerationGateway,
        fallback: Optional[FallbackResponder] = None,
        logger: Optional[AgentLogger] = None,
    ):
        """
        Args:
            composer: chat 목적 컨텍스트 구성기
            gateway: 생성 서비스 게이트웨이
            fallback: 폴백 응답기
            logger: 로거
        """
        self.composer = composer
        self.gateway = gateway
        self.fallback = fallback or FallbackResponder()
        self.logger = logger or AgentLogger("guide")

    async def get_response(
        self,
        prompt: str,
        purpose: Purpose | str,
        mood: MoodType | str | None = None,
    ) -> GenerationResult:
        """
        사용자 입력에 대한 가이드 응답

        Args:
            prompt: 사용자 입력 (chat 메시지 / 일기 본문 / 체크인 메모)
            purpose: chat / journal / mood
            mood: 기분 라벨 (선택)

        Returns:
            GenerationResult (text, suggestion)

        Raises:
            ValueError: 알 수 없는 purpose
        """
        purpose = Purpose(purpose)
        mood_value = mood.value if isinstance(mood, MoodType) else mood
        request_context = self.logger.guide_request(prompt, purpose.value, mood_value)

        if not self.gateway.has_credential():
            return self._finish(
                request_context, GenerationResult(text=MISSING_CREDENTIAL_TEXT), "missing_credential"
            )

        context: ContextBundle | None = None
        try:
            if purpose is Purpose.CHAT:
                context = await self.composer.build_context(prompt)
            prompt_text = PromptBuilder.build(
                purpose, prompt, mood, context.combined if context else None
            )
            text = await self.gateway.generate(prompt_text)
        except MissingCredentialError:
            return self._finish(
                request_context,
                GenerationResult(text=MISSING_CREDENTIAL_TEXT),
                "missing_credential",
                context=context,
            )
        except InvalidCredentialError as e:
            return self._finish(
                request_context,
                GenerationResult(text=INVALID_CREDENTIAL_TEXT),
                "invalid_credential",
                context=context,
                error=str(e),
            )
        except GenerationError as e:
            result = self.fallback.compose(purpose, prompt, mood, context)
            return self._finish(request_context, result, "fallback", context=context, error=str(e))
        except Exception as e:
            # 자격 증명 외 실패는 모두 fallback
            self.logger.error(
                f"Unexpected failure while building guide response: {type(e).__name__}: {e}",
                exc_info=True,
            )
            result = self.fallback.compose(purpose, prompt, mood, context)
            return self._finish(
                request_context, result, "fallback", context=context, error=f"{type(e).__name__}: {e}"
            )

        if purpose is Purpose.CHAT:
            parsed = extract_suggestion(text)
            result = GenerationResult(text=parsed.text, suggestion=parsed.suggestion)
        else:
            result = GenerationResult(text=text)

        return self._finish(request_context, result, "generated", context=context)

    def _finish(
        self,
        request_context: dict[str, Any],
        result: GenerationResult,
        outcome: str,
        context: ContextBundle | None = None,
        error: str | None = None,
    ) -> GenerationResult:
        self.logger.guide_response(
            request_context,
            result.text,
            outcome,
            model=self.gateway.model,
            suggestion=result.suggestion,
            dataset_context=bool(context and context.dataset_part),
            static_context=bool(context and context.static_part),
            error=error,
        )
        return result


async def get_response(
    prompt: str, purpose: Purpose | str, options: Optional[dict[str, Any]] = None
) -> dict[str, Any]:
    """
    오케스트레이션 단일 진입점

    Args:
        prompt: 사용자 입력
        purpose: chat / journal / mood
        options: {"mood": <기분 라벨>} (선택)

    Returns:
        {"text": ..., "suggestion": ... | None}
    """
    from shanti.infrastructure.container import Container

    mood = (options or {}).get("mood")
    result = await Container.get_guide_agent().get_response(prompt, purpose, mood)
    return result.to_dict()
