"""커스텀 예외 클래스 모듈.

모든 예외는 에러 코드와 메시지 포맷팅에 쓰는 컨텍스트를 가집니다.
도메인별 하위 클래스는 에러 코드 접두사(domain)로 찾을 수 있습니다.
"""

from typing import Any

from termbase.lib.errors.codes import ErrorCode
from termbase.lib.errors.formatter import format_error_response


class TermbaseException(Exception):
    """용어 추출 엔진 기본 예외 클래스.

    str(exc)는 한국어 메시지이고, 다른 언어 응답은 to_dict(lang=...)로 만듭니다.

    Attributes:
        error_code: 에러 코드 문자열 (예: "TOKENIZER-001")
        context: 메시지 포맷팅 인자와 부가 정보
    """

    domain: str | None = None

    def __init__(self, error_code: str | ErrorCode, **context: Any) -> None:
        self.error_code = error_code.value if isinstance(error_code, ErrorCode) else error_code
        self.context = context
        super().__init__(self.to_dict(lang="ko", include_solutions=False)["message"])

    def to_dict(self, lang: str | None = None, include_solutions: bool = True) -> dict[str, Any]:
        """에러 응답 딕셔너리.

        Example:
            >>> ConfigError(ErrorCode.CONFIG_001, config_path="base.yaml").to_dict(lang="en")["error_code"]
            'CONFIG-001'
        """
        return format_error_response(self.error_code, lang=lang, include_solutions=include_solutions, **self.context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error_code={self.error_code!r}, context={self.context!r})"


class ConfigError(TermbaseException):
    """설정 파일 / 설정 값 / 패턴 테이블 오류."""

    domain = "CONFIG"


class TokenizerError(TermbaseException):
    """형태소 분석기 초기화 또는 분석 호출 실패."""

    domain = "TOKENIZER"


class AnalysisError(TermbaseException):
    """문서 단위 코퍼스 분석 실패 (context에 document_index 포함)."""

    domain = "ANALYSIS"


class ExtractionError(TermbaseException):
    """후보 추출 실행 실패."""

    domain = "EXTRACTION"


class DocumentSourceError(TermbaseException):
    """외부 문서/용어 저장소 또는 입력 파일 오류."""

    domain = "SOURCE"


class GeneralError(TermbaseException):
    domain = "GENERAL"


_DOMAIN_CLASSES: dict[str, type[TermbaseException]] = {
    cls.domain: cls
    for cls in (ConfigError, TokenizerError, AnalysisError, ExtractionError, DocumentSourceError, GeneralError)
    if cls.domain is not None
}


def get_exception_class(error_code: str | ErrorCode) -> type[TermbaseException]:
    """에러 코드 접두사에 해당하는 예외 클래스 (모르는 도메인이면 TermbaseException).

    Example:
        >>> get_exception_class("TOKENIZER-001").__name__
        'TokenizerError'
    """
    if isinstance(error_code, ErrorCode):
        domain = error_code.domain
    else:
        domain = error_code.split("-", 1)[0]
    return _DOMAIN_CLASSES.get(domain, TermbaseException)


def wrap_exception(
    error: Exception,
    default_code: str | ErrorCode = ErrorCode.GENERAL_001,
    **context: Any,
) -> TermbaseException:
    """임의의 예외를 도메인 예외로 변환.

    이미 TermbaseException이면 그대로 반환합니다. 그 외에는 default_code의 도메인 예외를 만들고
    원본 예외의 타입과 메시지를 context에 기록합니다.

    Example:
        >>> try:
        ...     raise ValueError("Invalid input")
        ... except Exception as e:
        ...     raise wrap_exception(e, ErrorCode.EXTRACTION_001, reason=str(e)) from e
    """
    if isinstance(error, TermbaseException):
        return error

    context.setdefault("original_error_type", type(error).__name__)
    context.setdefault("original_error_message", str(error))
    return get_exception_class(default_code)(default_code, **context)
