"""
Shanti Guide 커스텀 예외 타입

응답 오케스트레이션 계층에서 사용하는 구체적인 예외 타입을 정의합니다.
호출자에게 그대로 노출되는 것은 자격증명 관련 오류(누락/무효)뿐이며,
나머지는 모두 폴백 응답으로 흡수됩니다.

사용 예:
    from shanti.domain.exceptions import GenerationTransportError, InvalidCredentialError

    try:
        text = await gateway.generate(prompt)
    except InvalidCredentialError:
        return invalid_key_result()
    except GenerationTransportError as e:
        logger.warning(f"Generation failed: {e}, status: {e.status_code}")
        return fallback.compose(...)
"""


class ShantiError(Exception):
    """
    Base exception for all Shanti Guide errors.

    모든 커스텀 예외의 기본 클래스입니다.
    """

    pass


class ConfigurationError(ShantiError):
    """
    Configuration errors.

    설정 관련 에러:
    - 필수 환경변수 누락
    - 잘못된 설정 값

    Attributes:
        config_key: 문제가 된 설정 키
    """

    def __init__(self, message: str, config_key: str | None = None):
        super().__init__(message)
        self.config_key = config_key


class MissingCredentialError(ConfigurationError):
    """
    생성 서비스 API 키가 어디에서도 확인되지 않음

    네트워크 호출 전에 검사되며, 폴백 없이 고정 안내 문구로 응답합니다.
    """

    def __init__(self, message: str = "Generation service credential is not configured"):
        super().__init__(message, config_key="GEMINI_API_KEY")


class GenerationError(ShantiError):
    """
    Generation service errors.

    외부 생성 서비스 호출 관련 에러의 공통 부모입니다.

    Attributes:
        model: 사용한 모델명 (예: "gemini/gemini-pro")
    """

    def __init__(self, message: str, model: str | None = None):
        super().__init__(message)
        self.model = model


class GenerationTransportError(GenerationError):
    """
    Transport-level failures (non-success response, network error, timeout,
    malformed response body).

    폴백 응답으로 복구되며 사용자에게 원문이 노출되지 않습니다.

    Attributes:
        status_code: 업스트림 HTTP 상태 코드 (해당시)
        upstream_message: 업스트림 에러 본문 메시지
    """

    def __init__(
        self,
        message: str,
        model: str | None = None,
        status_code: int | None = None,
        upstream_message: str | None = None,
    ):
        super().__init__(message, model=model)
        self.status_code = status_code
        self.upstream_message = upstream_message


class InvalidCredentialError(GenerationTransportError):
    """
    업스트림이 API 키를 거부함 (API key not valid / API_KEY_INVALID)

    폴백 없이 고정 안내 문구로 응답합니다.
    """

    pass


class KnowledgeLoadError(ShantiError):
    """
    Knowledge source loading errors.

    지식 소스(CSV) 로드 실패. 해당 호출에서는 검색 결과 없음으로 처리되고,
    로더 캐시는 비워져 다음 호출에서 전체 재시도합니다.

    Attributes:
        source: 실패한 소스 이름 (해당시)
    """

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source
