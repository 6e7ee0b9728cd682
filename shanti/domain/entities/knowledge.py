"""
Knowledge Domain Entities
=========================
검색 대상 지식 항목과 검색 결과 묶음: KnowledgeEntry, ContextBundle
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KnowledgeEntry:
    """
    검색 가능한 정규화된 지식 단위

    Attributes:
        source: 원본 데이터셋 이름 (예: "Bhagavad Gita")
        title: 짧은 라벨 (합성 라벨일 수 있음)
        body: 정규화된 본문 (빈 문자열 불가)
        keywords: title + body 에서 추출한 키워드 집합 (불변)
    """

    source: str
    title: str
    body: str
    keywords: frozenset[str]

    def format_passage(self) -> str:
        """프롬프트 컨텍스트용 문단 형식"""
        title_line = f"Title: {self.title}\n" if self.title else ""
        return f"Source: {self.source}\n{title_line}{self.body}"


@dataclass(frozen=True)
class ContextBundle:
    """
    chat 목적 프롬프트에 첨부되는 검색 컨텍스트

    Attributes:
        combined: 병합된 컨텍스트 (최대 길이 제한, 없으면 sentinel 문구)
        dataset_part: 데이터셋 경로 결과
        static_part: 웰니스 가이드 경로 결과
    """

    combined: str
    dataset_part: str | None = None
    static_part: str | None = None

    @property
    def has_context(self) -> bool:
        return bool(self.dataset_part or self.static_part)
