"""
용어 후보 추출 모듈

문서 코퍼스에서 형태소 분석기가 잘못 분리했거나 아직 등록되지 않은
도메인 용어(2어절 명사구) 후보를 통계적으로 찾아냅니다.

주요 컴포넌트:
- KiwiNounSequenceExtractor: kiwipiepy 기반 명사 시퀀스 추출
- CorpusAnalyzer: 문서 단위 병렬 빈도 집계 (map-reduce)
- TermCandidateScoreCalculator: PMI / NPMI / IDF / TF-IDF / 관련성 점수
- TermCandidateFilter: 노이즈 제외, 중복 제거, 사전 등록 후보 판별
- DictionaryCandidateDetector: 규칙 점수 기반 사용자 사전 추천
- TermCandidateExtractor: 전체 추출 오케스트레이터
- TermCandidateExtractorFactory: 설정 기반 조립

외부 저장소와 연동하는 배치 서비스는 service 모듈에 있습니다:
    from termbase.modules.extraction.service import TermCandidateExtractionService
"""

from .analyzer import CorpusAnalysis, CorpusAnalyzer, DocumentCounts
from .dictionary import CandidateInfo, DictionaryCandidateDetector, DictionarySuggestion
from .extractor import TermCandidateExtractor
from .filter import TermCandidateFilter
from .interfaces import (
    DocumentPage,
    GlossaryTerm,
    ICandidateStore,
    IDocumentSource,
    INounSequenceExtractor,
    ITermSource,
)
from .models import (
    CandidateStat,
    DictionaryCandidateResult,
    DictionaryCandidateStat,
    DictionaryConfidence,
    DictionaryNeedReason,
    ExtractionConfig,
    ExtractionResult,
    NgramStat,
    NounSequence,
    Token,
    UnigramStat,
)
from .patterns import FilterPatterns, load_filter_patterns
from .scoring import TermCandidateScoreCalculator
from .tokenizer import KiwiNounSequenceExtractor

__all__ = [
    "CandidateInfo",
    "CandidateStat",
    "CorpusAnalysis",
    "CorpusAnalyzer",
    "DictionaryCandidateDetector",
    "DictionaryCandidateResult",
    "DictionaryCandidateStat",
    "DictionaryConfidence",
    "DictionaryNeedReason",
    "DictionarySuggestion",
    "DocumentCounts",
    "DocumentPage",
    "ExtractionConfig",
    "ExtractionResult",
    "FilterPatterns",
    "GlossaryTerm",
    "ICandidateStore",
    "IDocumentSource",
    "INounSequenceExtractor",
    "ITermSource",
    "KiwiNounSequenceExtractor",
    "NgramStat",
    "NounSequence",
    "TermCandidateExtractor",
    "TermCandidateFilter",
    "TermCandidateScoreCalculator",
    "Token",
    "UnigramStat",
    "load_filter_patterns",
]
