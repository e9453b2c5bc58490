"""
용어 후보 추출 데이터 모델

추출 1회 실행 동안만 메모리에 존재하는 값 객체들입니다.
저장은 외부 저장소(ICandidateStore)의 책임입니다.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Literal

DocumentErrorPolicy = Literal["raise", "skip"]


@dataclass(frozen=True)
class Token:
    """원문 위치 정보를 가진 명사 토큰 (term은 정규화 전 표면형)"""

    term: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class NounSequence:
    """
    원문에서 인접한 명사 토큰의 연속 구간

    토큰 사이에 조사("의")나 공백 정도의 작은 간격은 허용합니다.
    길이 2 미만의 구간은 생성되지 않습니다.
    """

    tokens: tuple[Token, ...]

    def __post_init__(self) -> None:
        if len(self.tokens) < 2:
            raise ValueError(f"NounSequence requires at least 2 tokens, got {len(self.tokens)}")

    def __len__(self) -> int:
        return len(self.tokens)

    def terms(self) -> list[str]:
        """토큰 문자열 목록"""
        return [token.term for token in self.tokens]

    def original_phrase(self, text: str, from_index: int, to_index: int) -> str:
        """
        원문에서 토큰 범위(양 끝 포함)에 해당하는 구문을 추출합니다.

        토큰 사이의 조사와 공백을 그대로 보존합니다.
        예: "모두의 주차장" → tokens ["모두", "주차장"] → "모두의 주차장"

        Raises:
            ValueError: 인덱스가 범위를 벗어나거나 from_index > to_index인 경우
        """
        if not 0 <= from_index < len(self.tokens):
            raise ValueError(f"from_index out of range: {from_index}")
        if not 0 <= to_index < len(self.tokens):
            raise ValueError(f"to_index out of range: {to_index}")
        if from_index > to_index:
            raise ValueError("from_index must be <= to_index")

        return text[self.tokens[from_index].start_offset : self.tokens[to_index].end_offset]

    def bigram_phrase(self, text: str, index: int) -> str:
        """index, index + 1 토큰의 원문 구문"""
        return self.original_phrase(text, index, index + 1)


@dataclass(frozen=True)
class UnigramStat:
    term: str
    count: int
    doc_count: int


@dataclass(frozen=True)
class NgramStat:
    term1: str
    term2: str
    count: int
    doc_count: int


@dataclass(frozen=True)
class ExtractionConfig:
    """
    추출 1회 실행 설정 (불변)

    Attributes:
        min_count: 후보가 되기 위한 최소 bigram 빈도
        npmi_threshold: NPMI 하한
        relevance_threshold: 관련성 점수 하한
        stopwords: 기본 불용어에 추가되는 불용어
        excluded_terms: 이미 등록/무시된 용어 (소문자)
        on_document_error: 문서 단위 분석 실패 정책 ("raise" 중단, "skip" 기록 후 계속)
        detect_dictionary_candidates: 사용자 사전 추천 목록 생성 여부
        npmi_weight: 관련성 점수의 NPMI 가중치
        tfidf_weight: 관련성 점수의 TF-IDF 가중치
    """

    min_count: int = 3
    npmi_threshold: Decimal = Decimal("0.2")
    relevance_threshold: Decimal = Decimal("0.3")
    stopwords: frozenset[str] = frozenset()
    excluded_terms: frozenset[str] = frozenset()
    on_document_error: DocumentErrorPolicy = "raise"
    detect_dictionary_candidates: bool = True
    npmi_weight: Decimal = Decimal("0.6")
    tfidf_weight: Decimal = Decimal("0.4")


@dataclass(frozen=True)
class CandidateStat:
    term: str
    components: tuple[str, ...]
    count: int
    doc_count: int
    pmi: Decimal
    npmi: Decimal
    idf: Decimal
    avg_tfidf: Decimal
    relevance_score: Decimal


class DictionaryNeedReason(str, Enum):
    """사전 등록이 필요한 사유"""

    LOANWORD_SPLIT = "LOANWORD_SPLIT"
    HIGH_COOCCURRENCE = "HIGH_COOCCURRENCE"
    SINGLE_SYLLABLE_SPLIT = "SINGLE_SYLLABLE_SPLIT"

    @property
    def description(self) -> str:
        return _REASON_DESCRIPTIONS[self]


_REASON_DESCRIPTIONS = {
    DictionaryNeedReason.LOANWORD_SPLIT: "외래어 분리 오류 - 형태소 분석기가 외래어를 잘못 분리",
    DictionaryNeedReason.HIGH_COOCCURRENCE: "높은 동시 출현율 - 두 단어가 거의 항상 함께 사용됨",
    DictionaryNeedReason.SINGLE_SYLLABLE_SPLIT: "단일 음절 분리 - 복합어가 잘못 분리되어 1음절 조각 발생",
}


class DictionaryConfidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class DictionaryCandidateResult:
    """사전 등록 필요 여부 판별 결과"""

    needs_dictionary: bool
    reason: DictionaryNeedReason | None = None
    confidence: DictionaryConfidence | None = None


@dataclass(frozen=True)
class DictionaryCandidateStat:
    """사용자 사전 추가 추천 용어 (예: "버네 티스" → "버네티스")"""

    original_term: str
    suggested_term: str
    npmi: Decimal
    reason: DictionaryNeedReason
    confidence: DictionaryConfidence


@dataclass(frozen=True)
class ExtractionResult:
    """용어 추출 결과 (실행 후 불변)"""

    total_documents: int
    unigrams: tuple[UnigramStat, ...]
    ngrams: tuple[NgramStat, ...]
    candidates: tuple[CandidateStat, ...]
    dictionary_candidates: tuple[DictionaryCandidateStat, ...] = ()
    failed_document_indices: tuple[int, ...] = field(default=())

    @property
    def failed_documents(self) -> int:
        return len(self.failed_document_indices)
