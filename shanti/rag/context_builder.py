"""
Context Composer
데이터셋 검색 결과 + 웰니스 가이드 섹션 -> 크기 제한된 단일 컨텍스트

두 경로는 서로 독립적이며 동시에 실행 후 병합합니다.
"""

import asyncio
import logging

from shanti.domain.entities.knowledge import ContextBundle
from shanti.domain.exceptions import KnowledgeLoadError
from shanti.rag.loader import KnowledgeSourceLoader
from shanti.rag.ranker import rank
from shanti.rag.tokenizer import tokenize
from shanti.rag.wellness_guide import WellnessGuide
from shanti.shared.constants import (
    MAX_CONTEXT_CHARS,
    MAX_RETRIEVAL_RESULTS,
    NO_CONTEXT_SENTINEL,
)

logger = logging.getLogger(__name__)


class ContextComposer:
    """chat 목적 컨텍스트 구성기"""

    def __init__(
        self,
        loader: KnowledgeSourceLoader,
        wellness_guide: WellnessGuide,
        max_sections: int = MAX_RETRIEVAL_RESULTS,
        max_chars: int = MAX_CONTEXT_CHARS,
    ):
        self.loader = loader
        self.wellness_guide = wellness_guide
        self.max_sections = max_sections
        self.max_chars = max_chars

    async def build_context(self, prompt: str) -> ContextBundle:
        """
        질의에 대한 ContextBundle 생성 (캐시하지 않음)

        Returns:
            ContextBundle (아무것도 없으면 combined = NO_CONTEXT_SENTINEL)
        """
        dataset_part, static_part = await asyncio.gather(
            self.build_dataset_context(prompt),
            asyncio.to_thread(self.wellness_guide.match, prompt),
        )

        sections = [part for part in (dataset_part, static_part) if part]
        if not sections:
            return ContextBundle(combined=NO_CONTEXT_SENTINEL)

        return ContextBundle(
            combined=self._bound("\n\n".join(sections)),
            dataset_part=dataset_part,
            static_part=static_part,
        )

    async def build_dataset_context(self, prompt: str) -> str | None:
        """
        데이터셋 경로: 토큰화 -> 랭킹 -> 문단 포맷

        로더 실패는 이번 호출에서 "검색 결과 없음"으로 처리
        """
        keywords = tokenize(prompt)
        if not keywords:
            return None

        try:
            entries = await self.loader.load_entries()
        except KnowledgeLoadError as e:
            logger.error(f"Error building dataset context: {e}")
            return None

        matched = rank(keywords, entries, self.max_sections)
        if not matched:
            return None

        logger.debug(f"Dataset context: {len(matched)} passages for {len(keywords)} keywords")
        return "\n\n".join(entry.format_passage() for entry in matched)

    def _bound(self, text: str) -> str:
        if len(text) <= self.max_chars:
            return text
        return f"{text[: self.max_chars - 3]}..."
