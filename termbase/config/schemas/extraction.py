"""
용어 추출 설정 스키마

extraction / scoring / tokenizer / filter 섹션을 검증합니다.
"""

from decimal import Decimal
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from ...modules.extraction.models import ExtractionConfig
from .base import BaseConfig, coerce_decimal


class ScoringSettings(BaseConfig):
    """관련성 점수 가중치 (합이 1이어야 점수 범위가 0~1로 유지됨)"""

    npmi_weight: Decimal = Field(
        default=Decimal("0.6"),
        ge=0,
        le=1,
        description="NPMI 항 가중치",
    )

    tfidf_weight: Decimal = Field(
        default=Decimal("0.4"),
        ge=0,
        le=1,
        description="정규화 평균 TF-IDF 항 가중치",
    )

    @field_validator("npmi_weight", "tfidf_weight", mode="before")
    @classmethod
    def coerce_weights(cls, value: Any) -> Any:
        return coerce_decimal(value)

    @model_validator(mode="after")
    def validate_weight_sum(self) -> "ScoringSettings":
        if self.npmi_weight + self.tfidf_weight != 1:
            raise ValueError(
                f"npmi_weight + tfidf_weight must be 1 (got {self.npmi_weight} + {self.tfidf_weight})"
            )
        return self


class ExtractionSettings(BaseConfig):
    """
    추출 실행 설정

    Example:
        extraction:
          min_count: 3
          npmi_threshold: "0.2"
          relevance_threshold: "0.3"
          on_document_error: skip
    """

    min_count: int = Field(default=3, ge=1, description="후보가 되기 위한 최소 bigram 빈도")

    npmi_threshold: Decimal = Field(default=Decimal("0.2"), ge=-1, le=1, description="NPMI 하한")

    relevance_threshold: Decimal = Field(
        default=Decimal("0.3"),
        ge=0,
        le=1,
        description="관련성 점수 하한",
    )

    stopwords: list[str] = Field(default_factory=list, description="추가 불용어")

    page_size: int = Field(default=100, ge=1, le=10000, description="문서 저장소 페이지 크기")

    max_workers: int | None = Field(default=None, ge=1, description="코퍼스 분석 워커 수 (None이면 기본값)")

    on_document_error: Literal["raise", "skip"] = Field(
        default="raise",
        description="문서 단위 분석 실패 정책",
    )

    detect_dictionary_candidates: bool = Field(default=True, description="사용자 사전 추천 목록 생성 여부")

    @field_validator("npmi_threshold", "relevance_threshold", mode="before")
    @classmethod
    def coerce_thresholds(cls, value: Any) -> Any:
        return coerce_decimal(value)

    def to_extraction_config(
        self,
        excluded_terms: frozenset[str] | set[str] = frozenset(),
        scoring: ScoringSettings | None = None,
    ) -> ExtractionConfig:
        """실행 1회용 불변 설정 생성"""
        scoring = scoring if scoring is not None else ScoringSettings()
        return ExtractionConfig(
            min_count=self.min_count,
            npmi_threshold=self.npmi_threshold,
            relevance_threshold=self.relevance_threshold,
            stopwords=frozenset(self.stopwords),
            excluded_terms=frozenset(excluded_terms),
            on_document_error=self.on_document_error,
            detect_dictionary_candidates=self.detect_dictionary_candidates,
            npmi_weight=scoring.npmi_weight,
            tfidf_weight=scoring.tfidf_weight,
        )


class TokenizerSettings(BaseConfig):
    """형태소 분석기 설정"""

    max_gap: int = Field(default=3, ge=0, description="같은 시퀀스로 볼 최대 토큰 간격 (문자 수)")
    min_token_length: int = Field(default=2, ge=1, description="최소 토큰 길이")
    noun_tags: list[str] | None = Field(default=None, description="유지할 품사 태그 (None이면 기본 명사 태그)")
    html_entities: list[str] | None = Field(default=None, description="제외할 HTML 엔티티 이름")
    user_words: list[str] = Field(default_factory=list, description="사용자 사전 단어 (고유 명사로 등록)")
    model_type: str | None = Field(default=None, description="Kiwi 언어 모델 종류")


class FilterSettings(BaseConfig):
    """후보 필터 설정"""

    patterns_path: str | None = Field(
        default=None,
        description="필터 패턴 테이블 경로 (None이면 패키지 기본 테이블)",
    )

    @field_validator("patterns_path", mode="before")
    @classmethod
    def empty_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value
