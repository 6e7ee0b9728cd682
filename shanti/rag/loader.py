"""
Knowledge Source Loader
모든 지식 소스를 최초 사용 시 병렬 로드하고 프로세스 수명 동안 캐시

Lifecycle:
- 첫 load_entries() 호출: 모든 소스를 동시에 로드 후 join
- 이후 호출: 동일한 튜플 반환 (재로드 없음)
- 동시 첫 호출자: 진행 중인 로드 하나를 공유
- 실패: 캐시를 비우고 KnowledgeLoadError -> 다음 호출에서 전체 재시도
"""

import asyncio
import logging
import time
from pathlib import Path

from shanti.domain.entities.knowledge import KnowledgeEntry
from shanti.domain.exceptions import KnowledgeLoadError
from shanti.rag.sources import KnowledgeSource, default_sources

logger = logging.getLogger(__name__)


class KnowledgeSourceLoader:
    """메모이즈된 지식 소스 로더"""

    def __init__(
        self,
        sources: list[KnowledgeSource] | None = None,
        data_dir: str | Path = "./data",
    ):
        """
        Args:
            sources: 로드할 소스 어댑터 목록 (None이면 기본 4개 소스)
            data_dir: 기본 소스의 CSV 디렉토리
        """
        self.sources = sources if sources is not None else default_sources(data_dir)
        self._entries: tuple[KnowledgeEntry, ...] | None = None
        self._pending: asyncio.Future | None = None
        self._load_count = 0

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    async def load_entries(self) -> tuple[KnowledgeEntry, ...]:
        """
        전체 KnowledgeEntry 반환 (멱등, 메모이즈)

        Raises:
            KnowledgeLoadError: 하나 이상의 소스 로드 실패 시
        """
        if self._entries is not None:
            return self._entries

        pending = self._pending
        if pending is None or (pending.done() and (pending.cancelled() or pending.exception())):
            pending = asyncio.ensure_future(self._load_all())
            self._pending = pending

        try:
            # 호출자 취소가 공유 로드를 취소하지 않도록 shield
            entries = await asyncio.shield(pending)
        except BaseException:
            # 같은 실패 로드를 다른 호출자가 이미 비웠을 수 있음
            if self._pending is pending and pending.done():
                self._pending = None
            raise

        self._entries = entries
        self._pending = None
        return entries

    def invalidate(self) -> None:
        """캐시 폐기 (다음 호출 시 재로드)"""
        self._entries = None
        self._pending = None

    async def _load_all(self) -> tuple[KnowledgeEntry, ...]:
        self._load_count += 1
        start = time.time()

        results = await asyncio.gather(
            *(asyncio.to_thread(source.load) for source in self.sources),
            return_exceptions=True,
        )

        entries: list[KnowledgeEntry] = []
        for source, result in zip(self.sources, results):
            if isinstance(result, BaseException):
                logger.error(f"Failed to prepare knowledge entries from {source.name}: {result}")
                if isinstance(result, KnowledgeLoadError):
                    raise result
                raise KnowledgeLoadError(
                    f"Failed to load knowledge source {source.name}: {result}",
                    source=source.name,
                ) from result
            entries.extend(result)

        logger.info(
            f"Knowledge entries loaded: {len(entries)} entries from {len(self.sources)} sources "
            f"in {time.time() - start:.2f}s"
        )
        return tuple(entries)

    def get_stats(self) -> dict:
        return {
            "loaded": self.is_loaded,
            "entry_count": len(self._entries) if self._entries is not None else 0,
            "load_attempts": self._load_count,
            "sources": [source.name for source in self.sources],
        }
