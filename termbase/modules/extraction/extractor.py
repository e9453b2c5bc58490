"""
용어 후보 추출기 (TermCandidateExtractor)

코퍼스 분석 → 통계 생성 → 후보 점수 계산 → 필터/중복 제거 → 정렬을
하나의 extract(documents, config) 호출로 묶습니다.

처리 순서:
1. 문서별 명사 시퀀스 집계 (병렬, CorpusAnalyzer)
2. unigram/bigram 통계 생성
3. bigram 후보: 최소 빈도 → 등록/무시 용어 제외 → 필터 제외 → NPMI 하한
4. 관련성 점수 계산 (최대 평균 TF-IDF 기준 정규화) → 관련성 하한
5. 중복 제거 후 관련성 점수 내림차순 정렬 (동점이면 용어 순)
"""

import time
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ...lib.logger import get_logger
from .analyzer import Bigram, CorpusAnalysis, CorpusAnalyzer
from .filter import TermCandidateFilter
from .interfaces import INounSequenceExtractor
from .models import (
    CandidateStat,
    DictionaryCandidateStat,
    ExtractionConfig,
    ExtractionResult,
    NgramStat,
    UnigramStat,
)
from .scoring import ZERO, TermCandidateScoreCalculator

logger = get_logger(__name__)


@dataclass(frozen=True)
class _ScoredBigram:
    """관련성 점수 계산 전 단계의 후보"""

    term: str
    components: Bigram
    count: int
    doc_count: int
    pmi: Decimal
    npmi: Decimal
    idf: Decimal
    avg_tfidf: Decimal


def most_frequent_phrase(phrases: Counter[str] | None, bigram: Bigram) -> str:
    """가장 많이 관측된 원문 구문 (동점이면 사전순, 기록이 없으면 정규화 토큰 결합)"""
    if not phrases:
        return " ".join(bigram)
    return min(phrases.items(), key=lambda item: (-item[1], item[0]))[0]


class TermCandidateExtractor:
    """
    용어 후보 추출 오케스트레이터

    Attributes:
        extractor: 명사 시퀀스 추출기
        score_calculator: 점수 계산기 (None이면 실행 설정의 가중치로 생성)
        candidate_filter: 후보 필터
        max_workers: 코퍼스 분석 워커 수
    """

    def __init__(
        self,
        extractor: INounSequenceExtractor,
        score_calculator: TermCandidateScoreCalculator | None = None,
        candidate_filter: TermCandidateFilter | None = None,
        max_workers: int | None = None,
    ):
        self.extractor = extractor
        self.score_calculator = score_calculator
        self.candidate_filter = candidate_filter if candidate_filter is not None else TermCandidateFilter()
        self.max_workers = max_workers

    def extract(
        self,
        documents: Sequence[str],
        config: ExtractionConfig | None = None,
    ) -> ExtractionResult:
        """
        문서 목록에서 용어 후보 추출

        Args:
            documents: 정제된 원문 텍스트 목록
            config: 실행 설정 (None이면 기본값)

        Raises:
            AnalysisError: 문서 실패 정책이 "raise"이고 문서 분석이 실패한 경우
        """
        config = config if config is not None else ExtractionConfig()
        start = time.perf_counter()

        analyzer = CorpusAnalyzer(
            self.extractor,
            max_workers=self.max_workers,
            on_document_error=config.on_document_error,
        )
        analysis = analyzer.analyze(documents)

        candidates = self._generate_candidates(analysis, config)
        dictionary_candidates = self._dictionary_candidates(candidates) if config.detect_dictionary_candidates else []

        result = ExtractionResult(
            total_documents=analysis.total_documents,
            unigrams=self._unigram_stats(analysis),
            ngrams=self._ngram_stats(analysis),
            candidates=tuple(candidates),
            dictionary_candidates=tuple(dictionary_candidates),
            failed_document_indices=tuple(analysis.failed_document_indices),
        )

        logger.info(
            "용어 후보 추출 완료",
            documents=result.total_documents,
            failed_documents=result.failed_documents,
            candidates=len(result.candidates),
            dictionary_candidates=len(result.dictionary_candidates),
            elapsed_ms=round((time.perf_counter() - start) * 1000),
        )
        return result

    @staticmethod
    def _unigram_stats(analysis: CorpusAnalysis) -> tuple[UnigramStat, ...]:
        stats = [
            UnigramStat(term=term, count=count, doc_count=analysis.unigram_doc_counts[term])
            for term, count in analysis.unigram_counts.items()
        ]
        stats.sort(key=lambda s: (-s.count, s.term))
        return tuple(stats)

    @staticmethod
    def _ngram_stats(analysis: CorpusAnalysis) -> tuple[NgramStat, ...]:
        stats = [
            NgramStat(term1=t1, term2=t2, count=count, doc_count=analysis.bigram_doc_counts[(t1, t2)])
            for (t1, t2), count in analysis.bigram_counts.items()
        ]
        stats.sort(key=lambda s: (-s.count, s.term1, s.term2))
        return tuple(stats)

    def _generate_candidates(self, analysis: CorpusAnalysis, config: ExtractionConfig) -> list[CandidateStat]:
        calculator = self.score_calculator or TermCandidateScoreCalculator(config.npmi_weight, config.tfidf_weight)
        excluded_terms = {term.lower() for term in config.excluded_terms}

        total_unigrams = analysis.total_unigrams
        total_bigrams = analysis.total_bigrams
        total_docs = analysis.total_documents

        stage = Counter[str]()
        scored: list[_ScoredBigram] = []

        for bigram, count in sorted(analysis.bigram_counts.items()):
            if count < config.min_count:
                stage["below_min_count"] += 1
                continue

            term = most_frequent_phrase(analysis.original_phrase_counts.get(bigram), bigram)
            normalized = term.lower()
            if normalized in excluded_terms or normalized.replace(" ", "") in excluded_terms:
                stage["already_known"] += 1
                continue

            if self.candidate_filter.should_exclude(term, bigram, config.stopwords):
                stage["filtered"] += 1
                continue

            t1, t2 = bigram
            pmi = calculator.calculate_pmi(
                count,
                analysis.unigram_counts[t1],
                analysis.unigram_counts[t2],
                total_bigrams,
                total_unigrams,
            )
            npmi = calculator.calculate_npmi(pmi, count, total_bigrams)
            if npmi < config.npmi_threshold:
                stage["below_npmi"] += 1
                continue

            doc_count = analysis.bigram_doc_counts[bigram]
            idf = calculator.calculate_idf(doc_count, total_docs)
            avg_tfidf = calculator.calculate_avg_tfidf(count, total_docs, idf)
            scored.append(_ScoredBigram(term, bigram, count, doc_count, pmi, npmi, idf, avg_tfidf))

        max_avg_tfidf = max((s.avg_tfidf for s in scored), default=ZERO)

        candidates: list[CandidateStat] = []
        for s in scored:
            relevance = calculator.calculate_relevance_score(s.npmi, s.avg_tfidf, max_avg_tfidf)
            if relevance < config.relevance_threshold:
                stage["below_relevance"] += 1
                continue
            candidates.append(
                CandidateStat(
                    term=s.term,
                    components=s.components,
                    count=s.count,
                    doc_count=s.doc_count,
                    pmi=s.pmi,
                    npmi=s.npmi,
                    idf=s.idf,
                    avg_tfidf=s.avg_tfidf,
                    relevance_score=relevance,
                )
            )

        deduplicated = self.candidate_filter.remove_duplicate_candidates(
            candidates,
            term_of=lambda c: c.term,
            score_of=lambda c: c.relevance_score,
        )
        stage["deduplicated"] = len(candidates) - len(deduplicated)
        deduplicated.sort(key=lambda c: (-c.relevance_score, c.term))

        logger.debug(
            "후보 생성 단계별 집계",
            bigrams=len(analysis.bigram_counts),
            max_avg_tfidf=str(max_avg_tfidf),
            **dict(stage),
        )
        return deduplicated

    def _dictionary_candidates(self, candidates: Sequence[CandidateStat]) -> list[DictionaryCandidateStat]:
        result = []
        for candidate in candidates:
            detection = self.candidate_filter.detect_dictionary_candidate(candidate.components, candidate.npmi)
            if not detection.needs_dictionary:
                continue
            result.append(
                DictionaryCandidateStat(
                    original_term=candidate.term,
                    suggested_term="".join(candidate.components),
                    npmi=candidate.npmi,
                    reason=detection.reason,
                    confidence=detection.confidence,
                )
            )
        return result
