"""에러 메시지 및 해결 방법 저장소.

모든 에러 메시지를 한국어와 영어로 저장하며,
각 에러에 대한 해결 방법도 제공합니다.
"""

from typing import Any

SUPPORTED_LANGUAGES = ("ko", "en")
DEFAULT_LANGUAGE = "ko"

# 에러 메시지 저장소: {error_code: {"ko": "한국어 메시지", "en": "English message"}}
ERROR_MESSAGES: dict[str, dict[str, str]] = {
    # CONFIG (설정 관리)
    "CONFIG-001": {
        "ko": "설정 파일을 찾을 수 없습니다: {config_path}",
        "en": "Configuration file not found: {config_path}",
    },
    "CONFIG-002": {
        "ko": "설정 값 검증 실패: {validation_errors}",
        "en": "Configuration validation failed: {validation_errors}",
    },
    "CONFIG-003": {
        "ko": "필터 패턴 테이블을 불러올 수 없습니다: {patterns_path} ({reason})",
        "en": "Cannot load filter pattern table: {patterns_path} ({reason})",
    },
    # TOKENIZER (형태소 분석기)
    "TOKENIZER-001": {
        "ko": "형태소 분석기 초기화 실패: {reason}",
        "en": "Failed to initialize morphological analyzer: {reason}",
    },
    "TOKENIZER-002": {
        "ko": "형태소 분석 실패: {reason}",
        "en": "Morphological analysis failed: {reason}",
    },
    # ANALYSIS (코퍼스 분석)
    "ANALYSIS-001": {
        "ko": "문서 분석 실패 (문서 {document_index}번): {reason}",
        "en": "Document analysis failed (document #{document_index}): {reason}",
    },
    # EXTRACTION (후보 추출)
    "EXTRACTION-001": {
        "ko": "용어 후보 추출 실패: {reason}",
        "en": "Term candidate extraction failed: {reason}",
    },
    # SOURCE (외부 저장소)
    "SOURCE-001": {
        "ko": "문서 조회 실패 (페이지 {page}): {reason}",
        "en": "Failed to fetch documents (page {page}): {reason}",
    },
    "SOURCE-002": {
        "ko": "입력 파일 형식이 올바르지 않습니다: {path}",
        "en": "Invalid input file format: {path}",
    },
    # GENERAL (일반)
    "GENERAL-001": {
        "ko": "알 수 없는 오류가 발생했습니다",
        "en": "An unknown error occurred",
    },
}


# 해결 방법 저장소: {error_code: {"ko": [...], "en": [...]}}
ERROR_SOLUTIONS: dict[str, dict[str, list[str]]] = {
    "CONFIG-001": {
        "ko": [
            "termbase/config/base.yaml 파일이 존재하는지 확인하세요",
            "ENVIRONMENT 환경 변수 값을 확인하세요",
        ],
        "en": [
            "Check that termbase/config/base.yaml exists",
            "Check the ENVIRONMENT environment variable",
        ],
    },
    "CONFIG-002": {
        "ko": [
            "임계값이 허용 범위 안에 있는지 확인하세요 (npmi: -1~1, relevance: 0~1)",
            "on_document_error 값은 raise 또는 skip이어야 합니다",
        ],
        "en": [
            "Check that thresholds are within range (npmi: -1~1, relevance: 0~1)",
            "on_document_error must be either raise or skip",
        ],
    },
    "CONFIG-003": {
        "ko": [
            "패턴 파일 경로가 올바른지 확인하세요",
            "YAML 문법과 version 키를 확인하세요",
        ],
        "en": [
            "Check the pattern file path",
            "Check the YAML syntax and the version key",
        ],
    },
    "TOKENIZER-001": {
        "ko": [
            "kiwipiepy 설치 여부를 확인하세요 (pip install kiwipiepy)",
            "model_type 설정 값을 확인하세요",
        ],
        "en": [
            "Check that kiwipiepy is installed (pip install kiwipiepy)",
            "Check the model_type setting",
        ],
    },
    "TOKENIZER-002": {
        "ko": ["입력 텍스트의 인코딩을 확인하세요"],
        "en": ["Check the encoding of the input text"],
    },
    "ANALYSIS-001": {
        "ko": [
            "해당 문서의 내용을 확인하세요",
            "on_document_error: skip 으로 실패 문서를 건너뛸 수 있습니다",
        ],
        "en": [
            "Inspect the failing document",
            "Set on_document_error: skip to continue past failing documents",
        ],
    },
    "EXTRACTION-001": {
        "ko": ["로그에서 원본 예외를 확인하세요"],
        "en": ["Check the logs for the original exception"],
    },
    "SOURCE-001": {
        "ko": ["문서 저장소 연결 상태를 확인하세요"],
        "en": ["Check the connection to the document store"],
    },
    "SOURCE-002": {
        "ko": [
            "Elasticsearch 검색 결과(hits.hits[]._source.content) 형식인지 확인하세요",
            "또는 문자열 리스트 JSON 형식을 사용하세요",
        ],
        "en": [
            "Use an Elasticsearch search export (hits.hits[]._source.content)",
            "Or use a JSON list of strings",
        ],
    },
    "GENERAL-001": {
        "ko": ["로그를 확인하세요"],
        "en": ["Check the logs"],
    },
}


def _lookup(table: dict[str, dict[str, Any]], error_code: str, lang: str) -> Any:
    if error_code not in table:
        raise KeyError(f"Unknown error code: {error_code}")
    if lang not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {lang}")
    return table[error_code][lang]


def get_message_template(error_code: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """
    메시지 템플릿 (str.format 자리표시자 포함)

    Raises:
        KeyError: 등록되지 않은 에러 코드
        ValueError: 지원하지 않는 언어
    """
    return _lookup(ERROR_MESSAGES, error_code, lang)


def get_solutions_list(error_code: str, lang: str = DEFAULT_LANGUAGE) -> list[str]:
    return list(_lookup(ERROR_SOLUTIONS, error_code, lang))
