"""
용어 후보 추출 서비스

순수 추출 로직은 TermCandidateExtractor에 위임하고,
이 서비스는 문서 조회, 제외 용어 수집, 결과 저장만 담당합니다.

실행 결과는 예외 대신 ExtractionRunSuccess / ExtractionRunFailure로 반환합니다.
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ...config.schemas import ExtractionSettings, ScoringSettings
from ...lib.errors import DocumentSourceError, ErrorCode, wrap_exception
from ...lib.logger import get_logger
from .extractor import TermCandidateExtractor
from .interfaces import ICandidateStore, IDocumentSource, ITermSource
from .models import CandidateStat, ExtractionResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionRunSuccess:
    batch_id: str
    total_documents: int
    total_candidates: int
    failed_documents: int = 0
    dictionary_candidates: int = 0
    finished_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ExtractionRunFailure:
    batch_id: str
    error_message: str
    error_code: str | None = None
    finished_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


ExtractionRunResult = ExtractionRunSuccess | ExtractionRunFailure


class TermCandidateExtractionService:
    """
    용어 후보 추출 배치 서비스

    Attributes:
        document_source: 원문 문서 저장소
        term_source: 용어집/무시 목록 저장소
        candidate_store: 추출 후보 저장소
        extractor: 용어 후보 추출기
    """

    def __init__(
        self,
        document_source: IDocumentSource,
        term_source: ITermSource,
        candidate_store: ICandidateStore,
        extractor: TermCandidateExtractor,
        scoring: ScoringSettings | None = None,
    ):
        self.document_source = document_source
        self.term_source = term_source
        self.candidate_store = candidate_store
        self.extractor = extractor
        self.scoring = scoring if scoring is not None else ScoringSettings()

    def extract_candidates(self, settings: ExtractionSettings | None = None) -> ExtractionRunResult:
        """
        전체 문서에서 후보를 추출해 새 후보만 저장

        실패는 예외로 전파하지 않고 ExtractionRunFailure로 반환합니다.
        """
        settings = settings if settings is not None else ExtractionSettings()
        batch_id = uuid.uuid4().hex
        total_start = time.perf_counter()

        try:
            start = time.perf_counter()
            documents = self.load_all_documents(settings.page_size)
            logger.debug(
                "문서 로드 완료",
                batch_id=batch_id,
                documents=len(documents),
                elapsed_ms=round((time.perf_counter() - start) * 1000),
            )

            config = settings.to_extraction_config(
                excluded_terms=self.collect_excluded_terms(),
                scoring=self.scoring,
            )
            result = self.extractor.extract(documents, config)

            saved = self.save_extraction_result(result)
        except Exception as e:
            error = wrap_exception(e, ErrorCode.EXTRACTION_001, reason=str(e) or type(e).__name__)
            logger.error(
                "용어 후보 추출 실패",
                batch_id=batch_id,
                error_code=error.error_code,
                error=str(error),
                exc_info=True,
            )
            return ExtractionRunFailure(
                batch_id=batch_id,
                error_message=str(error),
                error_code=error.error_code,
            )

        logger.info(
            "용어 후보 추출 배치 완료",
            batch_id=batch_id,
            documents=result.total_documents,
            saved_candidates=len(saved),
            elapsed_ms=round((time.perf_counter() - total_start) * 1000),
        )
        return ExtractionRunSuccess(
            batch_id=batch_id,
            total_documents=result.total_documents,
            total_candidates=len(saved),
            failed_documents=result.failed_documents,
            dictionary_candidates=len(result.dictionary_candidates),
        )

    def load_all_documents(self, page_size: int) -> list[str]:
        """
        문서 저장소를 페이지 단위로 끝까지 조회

        Raises:
            DocumentSourceError: 페이지 조회가 실패한 경우
        """
        documents: list[str] = []
        page = 0

        while True:
            try:
                document_page = self.document_source.find_all(page, page_size)
            except Exception as e:
                raise DocumentSourceError(ErrorCode.SOURCE_001, page=page, reason=str(e)) from e

            documents.extend(document_page.documents)
            page += 1
            if not document_page.has_next:
                break

        return documents

    def collect_excluded_terms(self) -> set[str]:
        """용어집 용어명, 동의어, 무시 용어 (소문자)"""
        excluded: set[str] = set()
        for term in self.term_source.find_glossary_terms():
            excluded.add(term.name.lower())
            excluded.update(synonym.lower() for synonym in term.synonyms)
        excluded.update(name.lower() for name in self.term_source.find_ignored_terms())
        return excluded

    def save_extraction_result(self, result: ExtractionResult) -> list[CandidateStat]:
        """이미 저장된 용어를 제외하고 후보 저장"""
        existing_terms = self.candidate_store.find_all_terms()
        to_save = [candidate for candidate in result.candidates if candidate.term not in existing_terms]
        return self.candidate_store.save_all(to_save)
