"""에러 메시지 포맷팅 유틸리티.

에러 코드로 메시지 템플릿과 해결 방법을 찾아 컨텍스트 값으로 채웁니다.
"""

import os
from typing import Any

from termbase.lib.errors.messages import (
    DEFAULT_LANGUAGE,
    ERROR_MESSAGES,
    SUPPORTED_LANGUAGES,
    get_message_template,
    get_solutions_list,
)


def get_default_language() -> str:
    """기본 언어 (환경변수 ERROR_LANGUAGE, 지원하지 않는 값이면 한국어)."""
    lang = os.getenv("ERROR_LANGUAGE", DEFAULT_LANGUAGE).lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def _resolve_language(lang: str | None) -> str:
    return lang if lang is not None else get_default_language()


def get_error_message(error_code: str, lang: str | None = None, **kwargs: Any) -> str:
    """에러 메시지 가져오기 (포맷팅 포함).

    컨텍스트에 템플릿이 요구하는 키가 없으면 템플릿 원문 뒤에 누락된 키를 붙여 반환합니다.

    Example:
        >>> get_error_message("TOKENIZER-002", lang="en", reason="bad input")
        "Morphological analysis failed: bad input"
    """
    template = get_message_template(error_code, _resolve_language(lang))
    if not kwargs:
        return template

    try:
        return template.format(**kwargs)
    except KeyError as e:
        missing_key = str(e).strip("'")
        return f"{template} (포맷팅 오류: {missing_key} 누락)"


def get_error_solutions(error_code: str, lang: str | None = None) -> list[str]:
    return get_solutions_list(error_code, _resolve_language(lang))


def format_error_response(
    error_code: str,
    lang: str | None = None,
    include_solutions: bool = True,
    **context: Any,
) -> dict[str, Any]:
    """에러 응답 딕셔너리 생성.

    Returns:
        {"error_code", "message"} 와 include_solutions가 True면 "solutions"
    """
    lang = _resolve_language(lang)
    response: dict[str, Any] = {
        "error_code": error_code,
        "message": get_error_message(error_code, lang, **context),
    }
    if include_solutions:
        response["solutions"] = get_error_solutions(error_code, lang)
    return response


def get_all_error_codes() -> list[str]:
    return sorted(ERROR_MESSAGES)


def get_error_codes_by_domain(domain: str) -> list[str]:
    """도메인 접두사로 에러 코드 조회 (대소문자 무시).

    Example:
        >>> get_error_codes_by_domain("tokenizer")
        ['TOKENIZER-001', 'TOKENIZER-002']
    """
    prefix = f"{domain.upper()}-"
    return sorted(code for code in ERROR_MESSAGES if code.startswith(prefix))
