"""
설정 스키마 패키지

사용 예시:
    from termbase.config.schemas import RootConfig, validate_config

    config = validate_config(config_dict)
    extraction_config = config.extraction.to_extraction_config(scoring=config.scoring)
"""

from .base import BaseConfig
from .extraction import ExtractionSettings, FilterSettings, ScoringSettings, TokenizerSettings
from .root import RootConfig, validate_config

__all__ = [
    "BaseConfig",
    "ExtractionSettings",
    "FilterSettings",
    "RootConfig",
    "ScoringSettings",
    "TokenizerSettings",
    "validate_config",
]
