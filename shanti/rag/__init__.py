"""
RAG (Retrieval-Augmented Generation) 모듈

어휘 기반 검색 파이프라인:
- tokenizer: 텍스트 -> 키워드 집합
- sources: 데이터셋별 스키마 + 정규화 어댑터
- loader: 메모이즈된 병렬 로더
- ranker: 교집합/밀도 랭킹
- wellness_guide: 정적 문서 섹션 매칭
- context_builder: 두 경로 병합
"""

from .context_builder import ContextComposer
from .loader import KnowledgeSourceLoader
from .ranker import rank
from .tokenizer import sanitize, tokenize
from .wellness_guide import WellnessGuide

__all__ = [
    "ContextComposer",
    "KnowledgeSourceLoader",
    "WellnessGuide",
    "rank",
    "sanitize",
    "tokenize",
]
