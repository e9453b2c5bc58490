"""
용어 후보 추출기 팩토리

RootConfig의 tokenizer / filter / scoring / extraction 섹션으로
추출기 구성 요소를 조립합니다.

사용 예시:
    config = load_config()
    extractor = TermCandidateExtractorFactory.create(config)
    result = extractor.extract(documents, config.extraction.to_extraction_config(scoring=config.scoring))
"""

from ...config.schemas import RootConfig
from ...lib.logger import get_logger
from .dictionary import DictionaryCandidateDetector
from .extractor import TermCandidateExtractor
from .filter import TermCandidateFilter
from .interfaces import INounSequenceExtractor
from .patterns import load_filter_patterns
from .scoring import TermCandidateScoreCalculator
from .tokenizer import KiwiNounSequenceExtractor

logger = get_logger(__name__)


class TermCandidateExtractorFactory:
    """설정 기반 추출기 생성 팩토리"""

    @staticmethod
    def create_tokenizer(config: RootConfig) -> KiwiNounSequenceExtractor:
        settings = config.tokenizer
        return KiwiNounSequenceExtractor(
            noun_tags=settings.noun_tags,
            html_entities=settings.html_entities,
            max_gap=settings.max_gap,
            min_token_length=settings.min_token_length,
            user_words=settings.user_words,
            model_type=settings.model_type,
        )

    @staticmethod
    def create(
        config: RootConfig,
        tokenizer: INounSequenceExtractor | None = None,
    ) -> TermCandidateExtractor:
        """
        추출기 생성

        Args:
            config: 검증된 전체 설정
            tokenizer: 명사 시퀀스 추출기 (None이면 설정으로 Kiwi 추출기 생성)

        Raises:
            TokenizerError: 형태소 분석기 초기화 실패
            ConfigError: 필터 패턴 테이블 오류
        """
        patterns = load_filter_patterns(config.filter.patterns_path)
        extractor = TermCandidateExtractor(
            extractor=tokenizer if tokenizer is not None else TermCandidateExtractorFactory.create_tokenizer(config),
            score_calculator=TermCandidateScoreCalculator(config.scoring.npmi_weight, config.scoring.tfidf_weight),
            candidate_filter=TermCandidateFilter(patterns),
            max_workers=config.extraction.max_workers,
        )
        logger.debug("용어 후보 추출기 생성", patterns_version=patterns.version)
        return extractor

    @staticmethod
    def create_detector(config: RootConfig) -> DictionaryCandidateDetector:
        return DictionaryCandidateDetector(load_filter_patterns(config.filter.patterns_path).detector)
