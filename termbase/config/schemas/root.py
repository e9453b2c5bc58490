"""
최상위 설정 스키마
"""

from typing import Any

from pydantic import Field, field_validator

from .base import BaseConfig
from .extraction import ExtractionSettings, FilterSettings, ScoringSettings, TokenizerSettings


class RootConfig(BaseConfig):
    """base.yaml + 환경별 설정을 병합한 전체 설정"""

    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    tokenizer: TokenizerSettings = Field(default_factory=TokenizerSettings)
    filter: FilterSettings = Field(default_factory=FilterSettings)

    # {"level": "INFO"} 형태, configure_logging(level=...)에 전달
    logging: dict[str, Any] | None = None

    @field_validator("logging")
    @classmethod
    def normalize_log_level(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value and isinstance(value.get("level"), str):
            return {**value, "level": value["level"].upper()}
        return value


def validate_config(config_dict: dict[str, Any]) -> RootConfig:
    """
    설정 딕셔너리 검증

    Raises:
        ValidationError: 검증 실패 시
    """
    return RootConfig.model_validate(config_dict)
