"""
코퍼스 분석기 (Corpus Analyzer)

문서마다 명사 시퀀스를 추출해 빈도를 집계합니다.

map-reduce 구조:
- map: 워커가 문서 1개를 분석해 해당 문서의 부분 집계(DocumentCounts)를 반환
- reduce: 단일 reducer가 입력 순서대로 부분 집계를 병합

병합은 덧셈만 사용하므로 최종 집계는 처리 순서와 무관합니다.
워커 간 공유 가변 상태는 없습니다.
"""

import time
from collections import Counter, deque
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field

from ...lib.errors import AnalysisError, ErrorCode
from ...lib.logger import get_logger
from .interfaces import INounSequenceExtractor
from .models import DocumentErrorPolicy

logger = get_logger(__name__)

Bigram = tuple[str, str]

PROGRESS_LOG_INTERVAL = 100


@dataclass
class DocumentCounts:
    """문서 1개의 부분 집계"""

    unigram_counts: Counter[str] = field(default_factory=Counter)
    bigram_counts: Counter[Bigram] = field(default_factory=Counter)
    original_phrase_counts: dict[Bigram, Counter[str]] = field(default_factory=dict)

    @property
    def unigrams(self) -> set[str]:
        """문서에 등장한 고유 unigram"""
        return set(self.unigram_counts)

    @property
    def bigrams(self) -> set[Bigram]:
        """문서에 등장한 고유 bigram"""
        return set(self.bigram_counts)


@dataclass
class CorpusAnalysis:
    """
    코퍼스 전체 집계

    Attributes:
        unigram_counts: 정규화 unigram → 전체 등장 횟수
        bigram_counts: 정규화 bigram → 전체 등장 횟수
        unigram_doc_counts: 정규화 unigram → 등장 문서 수
        bigram_doc_counts: 정규화 bigram → 등장 문서 수
        original_phrase_counts: 정규화 bigram → (원문 구문 → 등장 횟수)
        total_documents: 입력 문서 수
        failed_document_indices: 분석에 실패해 건너뛴 문서 번호
    """

    unigram_counts: Counter[str] = field(default_factory=Counter)
    bigram_counts: Counter[Bigram] = field(default_factory=Counter)
    unigram_doc_counts: Counter[str] = field(default_factory=Counter)
    bigram_doc_counts: Counter[Bigram] = field(default_factory=Counter)
    original_phrase_counts: dict[Bigram, Counter[str]] = field(default_factory=dict)
    total_documents: int = 0
    failed_document_indices: list[int] = field(default_factory=list)

    def merge(self, partial: DocumentCounts) -> None:
        """부분 집계 병합 (빈도는 등장 횟수, 문서 빈도는 문서당 1회)"""
        self.unigram_counts.update(partial.unigram_counts)
        self.bigram_counts.update(partial.bigram_counts)
        self.unigram_doc_counts.update(partial.unigrams)
        self.bigram_doc_counts.update(partial.bigrams)
        for bigram, phrases in partial.original_phrase_counts.items():
            self.original_phrase_counts.setdefault(bigram, Counter()).update(phrases)

    @property
    def total_unigrams(self) -> int:
        return sum(self.unigram_counts.values())

    @property
    def total_bigrams(self) -> int:
        return sum(self.bigram_counts.values())


def count_document(extractor: INounSequenceExtractor, text: str) -> DocumentCounts:
    """
    문서 1개를 분석해 부분 집계를 만듭니다.

    토큰은 소문자로 정규화하고, bigram마다 원문 구문(조사/공백 보존)을 함께 기록합니다.
    """
    counts = DocumentCounts()

    for sequence in extractor.tokenize(text):
        normalized = [token.term.lower() for token in sequence.tokens]
        counts.unigram_counts.update(normalized)

        for i in range(len(normalized) - 1):
            bigram = (normalized[i], normalized[i + 1])
            counts.bigram_counts[bigram] += 1
            phrase = sequence.bigram_phrase(text, i)
            counts.original_phrase_counts.setdefault(bigram, Counter())[phrase] += 1

    return counts


class CorpusAnalyzer:
    """
    문서 단위 병렬 코퍼스 분석기

    모든 워커가 끝난 뒤에만 결과를 반환합니다 (부분 집계로 점수를 계산하지 않음).
    취소/타임아웃은 지원하지 않으며 호출자가 analyze 전체를 감싸야 합니다.
    """

    def __init__(
        self,
        extractor: INounSequenceExtractor,
        max_workers: int | None = None,
        on_document_error: DocumentErrorPolicy = "raise",
    ):
        """
        Args:
            extractor: 명사 시퀀스 추출기
            max_workers: 워커 스레드 수 (None이면 ThreadPoolExecutor 기본값)
            on_document_error: "raise"면 문서 하나의 실패로 전체 중단,
                "skip"이면 실패 문서 번호를 기록하고 계속 진행
        """
        self.extractor = extractor
        self.max_workers = max_workers
        self.on_document_error = on_document_error

    def analyze(self, documents: Sequence[str]) -> CorpusAnalysis:
        """
        문서 목록을 분석해 코퍼스 집계를 반환

        Raises:
            AnalysisError: on_document_error="raise"이고 문서 분석이 실패한 경우
        """
        start = time.perf_counter()
        analysis = CorpusAnalysis(total_documents=len(documents))

        if not documents:
            return analysis

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending = deque(executor.submit(count_document, self.extractor, text) for text in documents)
            self._reduce(pending, analysis)

        logger.info(
            "코퍼스 분석 완료",
            documents=analysis.total_documents,
            failed_documents=len(analysis.failed_document_indices),
            unigrams=len(analysis.unigram_counts),
            bigrams=len(analysis.bigram_counts),
            elapsed_ms=round((time.perf_counter() - start) * 1000),
        )
        return analysis

    def _reduce(self, pending: deque[Future[DocumentCounts]], analysis: CorpusAnalysis) -> None:
        """입력 순서대로 병합 (병합한 future는 큐에서 제거)"""
        for index in range(len(pending)):
            future = pending.popleft()
            try:
                partial = future.result()
            except Exception as e:
                if self.on_document_error == "raise":
                    for rest in pending:
                        rest.cancel()
                    raise AnalysisError(ErrorCode.ANALYSIS_001, document_index=index, reason=str(e)) from e

                logger.warning("문서 분석 실패, 건너뜀", document_index=index, error=str(e))
                analysis.failed_document_indices.append(index)
                continue

            analysis.merge(partial)

            processed = index + 1
            if processed % PROGRESS_LOG_INTERVAL == 0:
                logger.debug("문서 분석 진행", processed=processed, total=analysis.total_documents)
