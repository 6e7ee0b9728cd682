"""
DI (Dependency Injection) 컨테이너

이 모듈은 가이드 서비스의 의존성을 중앙에서 관리합니다.

사용 예:
    from shanti.infrastructure.container import Container

    # 싱글톤 컴포넌트 획득
    loader = Container.get_knowledge_loader()
    agent = Container.get_guide_agent()

    # 테스트용 Mock 주입
    Container.override("gateway", mock_gateway)

    # 초기화
    Container.reset()
"""

from contextlib import contextmanager
from typing import Any

from shanti.infrastructure.config.config_manager import AppConfig, CredentialResolver
from shanti.monitoring.logger import AgentLogger
from shanti.rag.context_builder import ContextComposer
from shanti.rag.loader import KnowledgeSourceLoader
from shanti.rag.wellness_guide import WellnessGuide
from shanti.shared.llm_client import GenerationGateway


class Container:
    """
    Dependency Injection Container for Shanti Guide

    싱글톤 컴포넌트:
    - AppConfig
    - CredentialResolver
    - KnowledgeSourceLoader (프로세스 수명 캐시)
    - WellnessGuide
    - ContextComposer
    - GenerationGateway
    - GuideAgent
    """

    _instances: dict[str, Any] = {}
    _overrides: dict[str, Any] = {}

    @classmethod
    def _resolve(cls, name: str, factory) -> Any:
        if name in cls._overrides:
            return cls._overrides[name]

        if name not in cls._instances:
            cls._instances[name] = factory()

        return cls._instances[name]

    # ========================================
    # 싱글톤 컴포넌트 (캐시됨)
    # ========================================

    @classmethod
    def get_config(cls) -> AppConfig:
        """환경변수 기반 AppConfig (오류는 로깅만)"""
        return cls._resolve("config", lambda: AppConfig.from_env_validated(fail_fast=False))

    @classmethod
    def get_credential_resolver(cls) -> CredentialResolver:
        return cls._resolve(
            "credential_resolver", lambda: CredentialResolver.from_config(cls.get_config())
        )

    @classmethod
    def get_logger(cls) -> AgentLogger:
        return cls._resolve(
            "logger", lambda: AgentLogger("shanti_guide", log_dir=str(cls.get_config().logs_path))
        )

    @classmethod
    def get_knowledge_loader(cls) -> KnowledgeSourceLoader:
        """
        KnowledgeSourceLoader 싱글톤 반환

        Returns:
            데이터 디렉토리의 4개 기본 소스를 로드하는 로더
        """
        return cls._resolve(
            "knowledge_loader",
            lambda: KnowledgeSourceLoader(data_dir=cls.get_config().data_path),
        )

    @classmethod
    def get_wellness_guide(cls) -> WellnessGuide:
        return cls._resolve(
            "wellness_guide", lambda: WellnessGuide(path=cls.get_config().wellness_doc_path)
        )

    @classmethod
    def get_context_composer(cls) -> ContextComposer:
        return cls._resolve(
            "context_composer",
            lambda: ContextComposer(
                loader=cls.get_knowledge_loader(),
                wellness_guide=cls.get_wellness_guide(),
                max_chars=cls.get_config().max_context_chars,
            ),
        )

    @classmethod
    def get_gateway(cls) -> GenerationGateway:
        """
        GenerationGateway 싱글톤 반환

        API 키는 요청마다 CredentialResolver로 조회합니다.
        """
        def factory() -> GenerationGateway:
            config = cls.get_config()
            return GenerationGateway(
                credential_provider=cls.get_credential_resolver().resolve,
                model=config.model,
                timeout=config.request_timeout,
                logger=cls.get_logger(),
            )

        return cls._resolve("gateway", factory)

    @classmethod
    def get_guide_agent(cls):
        """
        GuideAgent 싱글톤 반환 (의존성 자동 주입)

        Returns:
            GuideAgent 인스턴스
        """
        from shanti.agents.guide_agent import GuideAgent

        return cls._resolve(
            "guide_agent",
            lambda: GuideAgent(
                composer=cls.get_context_composer(),
                gateway=cls.get_gateway(),
                logger=cls.get_logger(),
            ),
        )

    # ========================================
    # 테스트 지원
    # ========================================

    @classmethod
    def override(cls, name: str, instance: Any) -> None:
        """
        테스트용 Mock 주입

        Example:
            Container.override("gateway", mock_gateway)
        """
        cls._overrides[name] = instance

    @classmethod
    def reset(cls) -> None:
        """
        모든 인스턴스 및 오버라이드 초기화

        테스트 간 격리 또는 애플리케이션 재시작 시 사용
        """
        cls._instances.clear()
        cls._overrides.clear()

    @classmethod
    @contextmanager
    def test_override(cls, name: str, instance: Any):
        """
        테스트용 임시 오버라이드 (context manager)

        Example:
            with Container.test_override("gateway", mock_gateway):
                agent = Container.get_guide_agent()
            # 원래 값 복원
        """
        had_override = name in cls._overrides
        old_override = cls._overrides.get(name)

        had_instance = name in cls._instances
        old_instance = cls._instances.get(name)

        cls._overrides[name] = instance
        cls._instances.pop(name, None)

        try:
            yield
        finally:
            if had_override:
                cls._overrides[name] = old_override
            else:
                cls._overrides.pop(name, None)

            if had_instance:
                cls._instances[name] = old_instance
            else:
                cls._instances.pop(name, None)
