"""
Knowledge Source Adapters
이기종 CSV 데이터셋 -> KnowledgeEntry 정규화

각 소스는 자신의 컬럼 스키마(pydantic 모델)를 가지며,
스키마를 아는 코드는 이 모듈의 어댑터뿐입니다.

| 소스                          | 파일                        | 상한 |
|-------------------------------|-----------------------------|------|
| Bhagavad Gita                 | Bhagwad_Gita.csv            | -    |
| Mental Health FAQ             | Mental_Health_FAQ.csv       | -    |
| Community Voices              | mental_health.csv           | 400  |
| Student Mental Health Survey  | Student Mental health.csv   | 200  |
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, ClassVar

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from shanti.domain.entities.knowledge import KnowledgeEntry
from shanti.domain.exceptions import KnowledgeLoadError
from shanti.rag.tokenizer import sanitize, tokenize
from shanti.shared.constants import MAX_COMMUNITY_ENTRIES, MAX_STUDENT_ENTRIES

logger = logging.getLogger(__name__)


def create_entry(source: str, title: str, body: str) -> KnowledgeEntry | None:
    """
    정규화된 KnowledgeEntry 생성

    본문이 비어 있으면 None (로드 시 조용히 제외)
    """
    text = sanitize(body)
    if not text:
        return None

    heading = sanitize(title)
    combined = f"{heading} {text}".strip()
    return KnowledgeEntry(source=source, title=heading, body=text, keywords=tokenize(combined))


# =============================================================================
# 소스별 레코드 스키마
# =============================================================================


class SourceRecord(BaseModel):
    """CSV 행 공통 베이스 (모든 값은 정규화된 문자열)"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        if value is None:
            return ""
        # pandas가 빈 셀을 NaN(float)으로 줄 수 있음
        if isinstance(value, float) and value != value:
            return ""
        return sanitize(str(value))


class GitaVerseRecord(SourceRecord):
    """Bhagwad_Gita.csv 행"""

    chapter: str = Field(default="", alias="Chapter")
    verse: str = Field(default="", alias="Verse")
    shloka: str = Field(default="", alias="Shloka")
    english_meaning: str = Field(default="", alias="EngMeaning")


class FaqRecord(SourceRecord):
    """Mental_Health_FAQ.csv 행"""

    question: str = Field(default="", alias="Questions")
    answer: str = Field(default="", alias="Answers")


class CommunityPostRecord(SourceRecord):
    """mental_health.csv 행 (label "1" = 도움 요청 글)"""

    text: str = ""
    label: str = ""


class StudentSurveyRecord(SourceRecord):
    """Student Mental health.csv 행 (설문 문항이 곧 컬럼명)"""

    gender: str = Field(default="", alias="Choose your gender")
    course: str = Field(default="", alias="What is your course?")
    year: str = Field(default="", alias="Your current year of Study")
    depression: str = Field(default="", alias="Do you have Depression?")
    anxiety: str = Field(default="", alias="Do you have Anxiety?")
    panic_attack: str = Field(default="", alias="Do you have Panic attack?")
    treatment: str = Field(default="", alias="Did you seek any specialist for a treatment?")


# =============================================================================
# 소스 어댑터
# =============================================================================


class KnowledgeSource:
    """
    지식 소스 어댑터 베이스

    Subclass 책임:
    - record_model: 행 스키마
    - to_entry(): 스키마 -> KnowledgeEntry 변환

    fetch_rows()는 블로킹 IO이며 로더가 worker thread에서 호출합니다.
    """

    name: ClassVar[str] = ""
    filename: ClassVar[str] = ""
    record_model: ClassVar[type[SourceRecord]] = SourceRecord

    def __init__(self, data_dir: str | Path = "./data", max_entries: int | None = None):
        self.data_dir = Path(data_dir)
        self.max_entries = max_entries

    @property
    def path(self) -> Path:
        return self.data_dir / self.filename

    def fetch_rows(self) -> list[dict[str, Any]]:
        """CSV 읽기 (헤더 포함, 빈 행 제외, 모든 셀을 문자열로)"""
        if not self.path.exists():
            raise KnowledgeLoadError(f"Failed to load CSV asset: {self.path}", source=self.name)
        try:
            frame = pd.read_csv(
                self.path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding="utf-8",
            )
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise KnowledgeLoadError(
                f"Failed to load CSV asset: {self.path}: {e}", source=self.name
            ) from e
        return frame.to_dict(orient="records")

    def to_entry(self, record: SourceRecord, index: int) -> KnowledgeEntry | None:
        raise NotImplementedError

    def normalize(self, rows: Iterable[Mapping[str, Any]]) -> list[KnowledgeEntry]:
        """
        원시 행 -> KnowledgeEntry 목록

        max_entries가 설정된 경우 원본 순서대로 채택된 항목 N개까지만 반환
        """
        entries: list[KnowledgeEntry] = []
        for index, row in enumerate(rows):
            if self.max_entries is not None and len(entries) >= self.max_entries:
                break
            if not row:
                continue
            record = self.record_model.model_validate(dict(row))
            entry = self.to_entry(record, index)
            if entry is not None:
                entries.append(entry)
        return entries

    def load(self) -> list[KnowledgeEntry]:
        rows = self.fetch_rows()
        entries = self.normalize(rows)
        logger.debug(f"{self.name}: {len(entries)} entries from {len(rows)} rows")
        return entries


class BhagavadGitaSource(KnowledgeSource):
    name = "Bhagavad Gita"
    filename = "Bhagwad_Gita.csv"
    record_model = GitaVerseRecord

    def to_entry(self, record: GitaVerseRecord, index: int) -> KnowledgeEntry | None:
        if not record.english_meaning:
            return None

        title_parts = [
            part
            for part in (
                record.chapter and f"Chapter {record.chapter}",
                record.verse and f"Verse {record.verse}",
            )
            if part
        ]
        title = ", ".join(title_parts) if title_parts else "Bhagavad Gita Teaching"

        body_parts = [record.english_meaning]
        if record.shloka:
            body_parts.append(f"Original verse: {record.shloka}")
        return create_entry(self.name, title, "\n".join(body_parts))


class MentalHealthFaqSource(KnowledgeSource):
    name = "Mental Health FAQ"
    filename = "Mental_Health_FAQ.csv"
    record_model = FaqRecord

    def to_entry(self, record: FaqRecord, index: int) -> KnowledgeEntry | None:
        if not record.answer:
            return None
        question = record.question or f"FAQ entry {index + 1}"
        return create_entry(self.name, question, record.answer)


class CommunityPostsSource(KnowledgeSource):
    name = "Community Voices"
    filename = "mental_health.csv"
    record_model = CommunityPostRecord

    def __init__(self, data_dir: str | Path = "./data", max_entries: int | None = MAX_COMMUNITY_ENTRIES):
        super().__init__(data_dir, max_entries)

    def to_entry(self, record: CommunityPostRecord, index: int) -> KnowledgeEntry | None:
        if not record.text:
            return None
        if record.label:
            kind = "support request" if record.label == "1" else "coping story"
            title = f"Community reflection ({kind})"
        else:
            title = "Community reflection"
        return create_entry(self.name, title, record.text)


class StudentSurveySource(KnowledgeSource):
    name = "Student Mental Health Survey"
    filename = "Student Mental health.csv"
    record_model = StudentSurveyRecord

    def __init__(self, data_dir: str | Path = "./data", max_entries: int | None = MAX_STUDENT_ENTRIES):
        super().__init__(data_dir, max_entries)

    def to_entry(self, record: StudentSurveyRecord, index: int) -> KnowledgeEntry | None:
        title_parts = [
            part
            for part in (
                record.gender and f"{record.gender} student",
                record.course,
                record.year and f"Year {record.year}",
            )
            if part
        ]
        title = " • ".join(title_parts) if title_parts else "Student well-being insight"

        bullet_points = [
            line
            for line in (
                record.depression and f"Depression: {record.depression}",
                record.anxiety and f"Anxiety: {record.anxiety}",
                record.panic_attack and f"Panic attacks: {record.panic_attack}",
                record.treatment and f"Professional support: {record.treatment}",
            )
            if line
        ]
        return create_entry(self.name, title, "\n".join(bullet_points))


def default_sources(data_dir: str | Path) -> list[KnowledgeSource]:
    """기본 4개 소스 (로드 순서 = 결과 순서)"""
    return [
        BhagavadGitaSource(data_dir),
        MentalHealthFaqSource(data_dir),
        CommunityPostsSource(data_dir),
        StudentSurveySource(data_dir),
    ]
