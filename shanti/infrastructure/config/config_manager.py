"""
Centralized Configuration Manager
=================================
가이드 서비스 설정을 중앙에서 관리합니다.

주요 기능:
- 환경변수(.env 포함)에서 설정 로드
- 시작 시 설정 검증 (validate)
- 런타임 자격 증명 오버라이드 (세션 → config/credentials.json)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from shanti.shared.constants import (
    CREDENTIAL_KEYS,
    CREDENTIAL_PLACEHOLDERS,
    DEFAULT_MODEL,
    MAX_CONTEXT_CHARS,
    REQUEST_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


def usable_credential(value: Any) -> str | None:
    """공백/placeholder("undefined", "null")가 아닌 문자열만 유효한 키로 인정"""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    if not stripped or stripped.lower() in CREDENTIAL_PLACEHOLDERS:
        return None
    return stripped


@dataclass
class AppConfig:
    """
    애플리케이션 설정

    환경변수와 .env 파일에서 로드합니다.
    """

    # Paths
    data_path: Path = field(default_factory=lambda: Path.cwd() / "data")
    wellness_doc_path: Path | None = None
    config_path: Path = field(default_factory=lambda: Path.cwd() / "config")
    logs_path: Path = field(default_factory=lambda: Path.cwd() / "logs")

    # Generation
    gemini_api_key: str | None = None
    model: str = DEFAULT_MODEL
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    max_context_chars: int = MAX_CONTEXT_CHARS

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self) -> None:
        if self.wellness_doc_path is None:
            self.wellness_doc_path = self.data_path / "wellness-info.md"

    @property
    def credentials_file(self) -> Path:
        return self.config_path / "credentials.json"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경변수에서 설정 로드 (.env는 기존 환경변수를 덮어쓰지 않음)"""
        load_dotenv(override=False)

        data_dir = os.environ.get("SHANTI_DATA_DIR")
        config = cls(data_path=Path(data_dir)) if data_dir else cls()

        config.gemini_api_key = usable_credential(os.environ.get("GEMINI_API_KEY"))
        config.model = os.environ.get("SHANTI_MODEL", DEFAULT_MODEL)
        config.request_timeout = float(
            os.environ.get("SHANTI_REQUEST_TIMEOUT", str(REQUEST_TIMEOUT_SECONDS))
        )
        config.port = int(os.environ.get("PORT", "8000"))

        return config

    def validate(self) -> list[str]:
        """설정 검증

        필수 설정의 유효성을 검사하고, 오류 목록을 반환합니다.
        API 키 누락은 경고만 남깁니다 (가이드가 고정 안내문으로 응답).

        Returns:
            오류 메시지 목록 (빈 리스트 = 정상)
        """
        errors: list[str] = []
        warnings: list[str] = []

        if not self.gemini_api_key:
            warnings.append("GEMINI_API_KEY가 설정되지 않았습니다 (런타임 오버라이드만 사용)")

        if not self.data_path.exists():
            warnings.append(f"data 디렉토리가 없습니다: {self.data_path}")
        elif not self.wellness_doc_path.exists():
            warnings.append(f"웰니스 가이드 문서를 찾을 수 없습니다: {self.wellness_doc_path}")

        if self.request_timeout <= 0:
            errors.append(f"SHANTI_REQUEST_TIMEOUT은 양수여야 합니다, 현재 {self.request_timeout}")

        if self.max_context_chars < 4:
            errors.append(f"max_context_chars가 너무 작습니다: {self.max_context_chars}")

        if self.port < 1 or self.port > 65535:
            errors.append(f"PORT 범위 오류: 1-65535 필요, 현재 {self.port}")

        for w in warnings:
            logger.warning(f"[Config Warning] {w}")

        return errors

    @classmethod
    def from_env_validated(cls, fail_fast: bool = True) -> "AppConfig":
        """환경변수에서 설정 로드 + 검증

        Raises:
            RuntimeError: fail_fast=True이고 설정 오류가 있을 때
        """
        config = cls.from_env()
        errors = config.validate()

        if errors:
            error_msg = "설정 검증 실패:\n" + "\n".join(f"  - {e}" for e in errors)
            if fail_fast:
                raise RuntimeError(error_msg)
            logger.error(error_msg)

        return config

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (API 키는 설정 여부만)"""
        return {
            "data_path": str(self.data_path),
            "wellness_doc_path": str(self.wellness_doc_path),
            "config_path": str(self.config_path),
            "logs_path": str(self.logs_path),
            "gemini_api_key_set": bool(self.gemini_api_key),
            "model": self.model,
            "request_timeout": self.request_timeout,
            "max_context_chars": self.max_context_chars,
            "host": self.host,
            "port": self.port,
        }


class CredentialResolver:
    """
    생성 서비스 API 키 조회

    우선순위:
    1. 빌드 시점 값 (환경변수 GEMINI_API_KEY)
    2. 세션 오버라이드 (메모리)
    3. 오버라이드 파일 (config/credentials.json)

    키 우선: SHANTI_GEMINI_API_KEY를 모든 저장소(세션 → 파일)에서 먼저 찾고,
    없으면 GEMINI_API_KEY를 같은 순서로 조회합니다.
    읽을 수 없는 저장소는 로그를 남기고 건너뜁니다.
    """

    def __init__(self, build_time_key: str | None = None, override_file: Path | None = None):
        self.build_time_key = usable_credential(build_time_key)
        self.override_file = Path(override_file) if override_file else None
        self._session_overrides: dict[str, str] = {}

    @classmethod
    def from_config(cls, config: AppConfig) -> "CredentialResolver":
        return cls(build_time_key=config.gemini_api_key, override_file=config.credentials_file)

    def set_override(self, value: str, key: str = CREDENTIAL_KEYS[0]) -> None:
        """세션 오버라이드 등록"""
        self._session_overrides[key] = value

    def clear_overrides(self) -> None:
        self._session_overrides.clear()

    def _read_file_store(self) -> dict[str, Any]:
        if self.override_file is None or not self.override_file.exists():
            return {}
        try:
            with open(self.override_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Credential override file unreadable, skipping: {self.override_file} ({e})")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Credential override file is not a JSON object, skipping: {self.override_file}")
            return {}
        return data

    def _override_stores(self) -> list[tuple[str, dict[str, Any]]]:
        return [
            ("session", self._session_overrides),
            ("file", self._read_file_store()),
        ]

    def resolve(self) -> str | None:
        """사용 가능한 첫 번째 API 키 (없으면 None)"""
        if self.build_time_key:
            return self.build_time_key

        stores = self._override_stores()
        for key in CREDENTIAL_KEYS:
            for store_name, store in stores:
                value = usable_credential(store.get(key))
                if value:
                    logger.debug(f"Using credential override from {store_name} store ({key})")
                    return value
        return None

    def __call__(self) -> str | None:
        return self.resolve()
