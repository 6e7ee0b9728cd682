"""
Agent Logger
가이드 에이전트 실행 로깅 시스템
"""

import json
import logging
import re
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class SensitiveDataFilter(logging.Filter):
    """
    API 키 및 민감 정보를 마스킹하는 로깅 필터

    마스킹 대상:
    - Google API Key (AIza...)
    - URL 쿼리 key 파라미터 (?key=...)
    - OpenAI 스타일 키 (sk-...)
    - 일반 API 키/토큰/비밀번호 패턴
    """

    PATTERNS = [
        # Google / Gemini API Key
        (r"AIza[0-9A-Za-z_\-]{30,}", "AIza****"),
        # key query parameter
        (r"([?&]key=)[^&\s]+", r"\1****"),
        # OpenAI style key (litellm proxies)
        (r"sk-[a-zA-Z0-9]{20,}", "sk-****"),
        # Generic API key/token/secret patterns
        (
            r'(?i)(api[_-]?key|token|secret|password)["\']?\s*[:=]\s*["\']?([a-zA-Z0-9_\-]{16,})["\']?',
            r"\1=****",
        ),
        # Bearer tokens
        (r"Bearer\s+[a-zA-Z0-9_\-\.]{20,}", "Bearer ****"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """
        로그 레코드의 메시지에서 민감 정보 마스킹

        Returns:
            True (항상 로그 통과, 메시지만 수정)
        """
        if record.msg:
            record.msg = self._mask_value(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._mask_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._mask_value(arg) for arg in record.args)

        return True

    def _mask_value(self, value: Any) -> Any:
        """개별 값 마스킹"""
        if isinstance(value, str):
            for pattern, replacement in self.PATTERNS:
                value = re.sub(pattern, replacement, value)
        elif isinstance(value, dict):
            return {k: self._mask_value(v) for k, v in value.items()}
        elif isinstance(value, (list, tuple)):
            return type(value)(self._mask_value(item) for item in value)
        return value


class ErrorDeduplicationFilter(logging.Filter):
    """
    동일 에러 메시지 중복 제거 필터

    생성 서비스 장애 시 요청마다 같은 경고가 반복되는 것을 막습니다.
    window_seconds 이내에 max_count 초과 동일 메시지는 억제하고,
    첫 억제와 10건마다 요약 메시지를 남깁니다.
    """

    def __init__(self, window_seconds: int = 60, max_count: int = 3, name: str = ""):
        super().__init__(name)
        self.window_seconds = window_seconds
        self.max_count = max_count
        # {message_key: {"count": int, "first_seen": float, "suppressed": int}}
        self._seen: dict[str, dict[str, Any]] = {}

    def _message_key(self, record: logging.LogRecord) -> str:
        msg = str(record.msg)
        normalized = re.sub(r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}", "<TIMESTAMP>", msg)
        normalized = re.sub(r"\b\d+(\.\d+)?\b", "<NUM>", normalized)
        return f"{record.levelno}:{normalized[:200]}"

    def filter(self, record: logging.LogRecord) -> bool:
        # DEBUG/INFO는 필터링하지 않음
        if record.levelno < logging.WARNING:
            return True

        now = time.time()
        key = self._message_key(record)
        self._cleanup(now)

        entry = self._seen.get(key)
        if entry is None:
            self._seen[key] = {"count": 1, "first_seen": now, "suppressed": 0}
            return True

        entry["count"] += 1
        if entry["count"] <= self.max_count:
            return True

        entry["suppressed"] += 1
        if entry["suppressed"] == 1 or entry["suppressed"] % 10 == 0:
            record.msg = (
                f"[Dedup] {entry['suppressed']}건 동일 에러 억제됨 (원본: {str(record.msg)[:100]})"
            )
            return True

        return False

    def _cleanup(self, now: float) -> None:
        expired = [
            key
            for key, entry in self._seen.items()
            if now - entry["first_seen"] > self.window_seconds
        ]
        for key in expired:
            self._seen.pop(key)

    def get_stats(self) -> dict[str, Any]:
        return {
            "tracked_messages": len(self._seen),
            "total_suppressed": sum(entry["suppressed"] for entry in self._seen.values()),
            "window_seconds": self.window_seconds,
            "max_count": self.max_count,
        }


class AgentLogger:
    """에이전트 로거 (이름별 싱글톤)"""

    _instances: dict[str, "AgentLogger"] = {}

    def __new__(cls, name: str = "agent", log_dir: str = "./logs"):
        if name not in cls._instances:
            instance = super().__new__(cls)
            cls._instances[name] = instance
        return cls._instances[name]

    def __init__(self, name: str = "agent", log_dir: str = "./logs"):
        if hasattr(self, "_initialized"):
            return

        self.name = name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logger()
        self._initialized = True

    def _setup_logger(self) -> None:
        """로거 설정 (콘솔 INFO + 일별 파일 DEBUG)"""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers = []

        sensitive_filter = SensitiveDataFilter()
        dedup_filter = ErrorDeduplicationFilter(window_seconds=60, max_count=3)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%H:%M:%S"
            )
        )
        console_handler.addFilter(sensitive_filter)
        console_handler.addFilter(dedup_filter)
        self.logger.addHandler(console_handler)

        today = datetime.now().strftime("%Y-%m-%d")
        file_handler = logging.FileHandler(
            self.log_dir / f"{self.name}_{today}.log", encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler.addFilter(sensitive_filter)
        file_handler.addFilter(dedup_filter)
        self.logger.addHandler(file_handler)

    def _format_extra(self, extra: dict | None) -> str:
        if not extra:
            return ""
        try:
            return f" | {json.dumps(extra, ensure_ascii=False, default=str)}"
        except (TypeError, ValueError):
            return f" | {str(extra)}"

    def debug(self, message: str, extra: dict | None = None) -> None:
        self.logger.debug(f"{message}{self._format_extra(extra)}")

    def info(self, message: str, extra: dict | None = None) -> None:
        self.logger.info(f"{message}{self._format_extra(extra)}")

    def warning(self, message: str, extra: dict | None = None) -> None:
        self.logger.warning(f"{message}{self._format_extra(extra)}")

    def error(self, message: str, extra: dict | None = None, exc_info: bool = False) -> None:
        self.logger.error(f"{message}{self._format_extra(extra)}", exc_info=exc_info)

    def llm_request(self, model: str, prompt_chars: int | None = None) -> None:
        """LLM 요청 로그"""
        self.debug(f"🤖 LLM Request: {model}", {"prompt_chars": prompt_chars})

    def llm_response(
        self, model: str, completion_tokens: int | None = None, latency_ms: float | None = None
    ) -> None:
        """LLM 응답 로그"""
        self.debug(
            f"   LLM Response: {model}",
            {
                "completion_tokens": completion_tokens,
                "latency_ms": round(latency_ms, 1) if latency_ms else None,
            },
        )

    # =========================================================================
    # 가이드 응답 감사 로깅
    # =========================================================================

    def guide_request(self, prompt: str, purpose: str, mood: str | None = None) -> dict[str, Any]:
        """
        가이드 요청 시작 로깅

        Returns:
            request_context: guide_response에 전달할 컨텍스트
        """
        context = {
            "request_id": f"guide_{int(time.time() * 1000)}",
            "purpose": purpose,
            "mood": mood,
            "prompt_length": len(prompt),
            "start_time": time.time(),
            "timestamp": datetime.now().isoformat(),
        }
        self.info("💬 Guide Request", {k: v for k, v in context.items() if k != "start_time"})
        return context

    def guide_response(
        self,
        request_context: dict[str, Any],
        response: str,
        outcome: str,
        model: str | None = None,
        suggestion: str | None = None,
        dataset_context: bool = False,
        static_context: bool = False,
        error: str | None = None,
    ) -> None:
        """
        가이드 응답 완료 로깅

        Args:
            request_context: guide_request에서 반환된 컨텍스트
            response: 응답 텍스트
            outcome: generated / fallback / missing_credential / invalid_credential
            model: 사용된 모델
            suggestion: 추천 연습 식별자
            dataset_context: 데이터셋 컨텍스트 사용 여부
            static_context: 웰니스 가이드 컨텍스트 사용 여부
            error: 원인 에러 메시지 (폴백 시)
        """
        latency_ms = (time.time() - request_context.get("start_time", time.time())) * 1000

        audit_record = {
            "request_id": request_context.get("request_id"),
            "purpose": request_context.get("purpose"),
            "timestamp": datetime.now().isoformat(),
            "latency_ms": round(latency_ms, 1),
            "model": model,
            "outcome": outcome,
            "suggestion": suggestion,
            "dataset_context": dataset_context,
            "static_context": static_context,
            "error": error,
            "response_length": len(response) if response else 0,
        }

        if outcome == "generated":
            self.info(f"✅ Guide Response | {latency_ms:.0f}ms", audit_record)
        else:
            self.warning(f"⚠️ Guide Response ({outcome})", audit_record)

        self._write_audit_log(audit_record)

    def _write_audit_log(self, record: dict[str, Any]) -> None:
        """감사 로그 파일에 JSON Lines 형식으로 기록"""
        try:
            today = datetime.now().strftime("%Y-%m-%d")
            audit_file = self.log_dir / f"guide_audit_{today}.jsonl"
            with open(audit_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            self.warning(f"Failed to write audit log: {e}")
