"""
Retrieval Ranker
키워드 교집합 기반 어휘 랭킹

score   = |prompt_keywords ∩ entry.keywords|
density = score / |entry.keywords|   (동점 시 2차 정렬)
"""

from collections.abc import Iterable
from dataclasses import dataclass

from shanti.domain.entities.knowledge import KnowledgeEntry
from shanti.shared.constants import MAX_RETRIEVAL_RESULTS


@dataclass(frozen=True)
class ScoredEntry:
    entry: KnowledgeEntry
    score: int
    density: float


def score_entries(
    prompt_keywords: frozenset[str] | set[str],
    entries: Iterable[KnowledgeEntry],
) -> list[ScoredEntry]:
    """score > 0 인 항목만 점수와 함께 반환 (정렬 전)"""
    scored = []
    for entry in entries:
        score = len(prompt_keywords & entry.keywords)
        if score == 0:
            continue
        density = score / max(len(entry.keywords), 1)
        scored.append(ScoredEntry(entry=entry, score=score, density=density))
    return scored


def rank(
    prompt_keywords: frozenset[str] | set[str],
    entries: Iterable[KnowledgeEntry],
    max_results: int = MAX_RETRIEVAL_RESULTS,
) -> list[KnowledgeEntry]:
    """
    관련도 상위 N개 항목

    Args:
        prompt_keywords: 질의 키워드 집합
        entries: 후보 항목
        max_results: 최대 반환 개수

    Returns:
        score 내림차순, density 내림차순 (완전 동점은 원래 순서 유지)
    """
    if not prompt_keywords:
        return []

    scored = score_entries(prompt_keywords, entries)
    scored.sort(key=lambda s: (-s.score, -s.density))
    return [s.entry for s in scored[:max_results]]
