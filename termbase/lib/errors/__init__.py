"""에러 코드, 다국어 메시지, 도메인 예외.

    >>> from termbase.lib.errors import ErrorCode, TokenizerError
    >>> raise TokenizerError(ErrorCode.TOKENIZER_001, reason="model not found")
"""

from termbase.lib.errors.codes import ErrorCode
from termbase.lib.errors.exceptions import (
    AnalysisError,
    ConfigError,
    DocumentSourceError,
    ExtractionError,
    GeneralError,
    TermbaseException,
    TokenizerError,
    get_exception_class,
    wrap_exception,
)
from termbase.lib.errors.formatter import (
    format_error_response,
    get_all_error_codes,
    get_default_language,
    get_error_codes_by_domain,
    get_error_message,
    get_error_solutions,
)

__all__ = [
    "AnalysisError",
    "ConfigError",
    "DocumentSourceError",
    "ErrorCode",
    "ExtractionError",
    "GeneralError",
    "TermbaseException",
    "TokenizerError",
    "format_error_response",
    "get_all_error_codes",
    "get_default_language",
    "get_error_codes_by_domain",
    "get_error_message",
    "get_error_solutions",
    "get_exception_class",
    "wrap_exception",
]
