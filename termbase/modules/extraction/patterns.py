"""
필터 패턴 테이블 로더

후보 필터와 사전 추천 휴리스틱이 사용하는 키워드/패턴 목록을
버전이 있는 YAML 데이터 파일에서 읽어 Pydantic으로 검증합니다.

사용법:
    patterns = load_filter_patterns()  # 패키지 기본 테이블
    patterns = load_filter_patterns("custom_patterns.yaml")
"""

import re
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...lib.errors import ConfigError, ErrorCode
from ...lib.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PATTERNS_PATH = Path(__file__).resolve().parents[2] / "config" / "filter_patterns.yaml"


class _PatternTable(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ExclusionPatterns(_PatternTable):
    """후보 제외 규칙 테이블"""

    url_patterns: tuple[str, ...] = ()
    technical_noise_patterns: tuple[str, ...] = ()
    code_syntax_patterns: frozenset[str] = frozenset()
    default_stopwords: frozenset[str] = frozenset()
    hex_pattern: re.Pattern[str] = re.compile(r"^[a-f0-9]{3,}$")
    meaningful_single_syllables: frozenset[str] = frozenset()


class DictionaryPatterns(_PatternTable):
    """사전 등록 필요 판별 테이블"""

    npmi_threshold: Decimal = Decimal("0.95")
    native_korean_suffixes: tuple[str, ...] = ()
    native_korean_prefixes: tuple[str, ...] = ()


class DetectorPatterns(_PatternTable):
    """점수 기반 사전 추천 탐지기 테이블"""

    npmi_threshold: Decimal = Decimal("0.9")
    cooccurrence_ratio: float = Field(default=0.7, gt=0.0, le=1.0)
    min_rules: int = Field(default=2, ge=1)
    min_score: float = Field(default=0.4, ge=0.0, le=1.0)
    known_suffixes: tuple[str, ...] = ()
    incomplete_patterns: frozenset[str] = frozenset()
    suffix_syllables: tuple[str, ...] = ()
    loanword_suffixes: tuple[str, ...] = ()
    loanword_patterns: tuple[str, ...] = ()


class FilterPatterns(_PatternTable):
    """필터 패턴 테이블 전체"""

    version: int = Field(ge=1)
    exclusion: ExclusionPatterns = ExclusionPatterns()
    dictionary: DictionaryPatterns = DictionaryPatterns()
    detector: DetectorPatterns = DetectorPatterns()


@lru_cache(maxsize=8)
def _load(path: Path) -> FilterPatterns:
    if not path.exists():
        raise ConfigError(ErrorCode.CONFIG_003, patterns_path=str(path), reason="file not found")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        patterns = FilterPatterns.model_validate(raw)
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigError(ErrorCode.CONFIG_003, patterns_path=str(path), reason=str(e)) from e

    logger.info(
        "필터 패턴 테이블 로드",
        path=str(path),
        version=patterns.version,
        url_patterns=len(patterns.exclusion.url_patterns),
        noise_patterns=len(patterns.exclusion.technical_noise_patterns),
        stopwords=len(patterns.exclusion.default_stopwords),
    )
    return patterns


def load_filter_patterns(path: str | Path | None = None) -> FilterPatterns:
    """
    필터 패턴 테이블 로드 (경로별 캐시)

    Raises:
        ConfigError: 파일이 없거나 YAML/스키마 검증에 실패한 경우
    """
    resolved = Path(path).expanduser().resolve() if path is not None else DEFAULT_PATTERNS_PATH
    return _load(resolved)
