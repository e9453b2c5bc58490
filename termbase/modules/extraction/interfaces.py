"""
용어 추출 인터페이스 정의 (Protocol 기반)

형태소 분석기와 외부 저장소를 플러그인 형태로 교체할 수 있도록
runtime_checkable Protocol로 경계를 정의합니다.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .models import CandidateStat, NounSequence


@dataclass(frozen=True)
class DocumentPage:
    """문서 저장소의 한 페이지"""

    documents: list[str]
    has_next: bool


@dataclass(frozen=True)
class GlossaryTerm:
    """용어집에 등록된 용어와 동의어"""

    name: str
    synonyms: list[str] = field(default_factory=list)


@runtime_checkable
class INounSequenceExtractor(Protocol):
    """
    명사 시퀀스 추출기 인터페이스

    구현 예시:
    - KiwiNounSequenceExtractor: kiwipiepy 형태소 분석기 기반
    - 테스트용 공백 분리 추출기
    """

    def tokenize(self, text: str) -> list[NounSequence]:
        """
        텍스트에서 인접한 명사 시퀀스를 추출

        Args:
            text: 분석할 원문

        Returns:
            길이 2 이상인 명사 시퀀스 목록 (빈 텍스트면 빈 목록)
        """
        ...

    def extract_terms(self, text: str) -> list[list[str]]:
        """명사 시퀀스를 토큰 문자열 목록으로 반환"""
        ...


@runtime_checkable
class IDocumentSource(Protocol):
    """페이지 단위 원문 조회 인터페이스 (예: Elasticsearch 문서 저장소)"""

    def find_all(self, page: int, size: int) -> DocumentPage:
        ...


@runtime_checkable
class ITermSource(Protocol):
    """이미 등록된 용어와 무시 목록 조회 인터페이스"""

    def find_glossary_terms(self) -> Sequence[GlossaryTerm]:
        ...

    def find_ignored_terms(self) -> Sequence[str]:
        ...


@runtime_checkable
class ICandidateStore(Protocol):
    """추출된 후보 저장 인터페이스"""

    def find_all_terms(self) -> set[str]:
        """이미 저장된 후보 용어"""
        ...

    def save_all(self, candidates: Sequence[CandidateStat]) -> list[CandidateStat]:
        """후보 저장 후 저장된 목록 반환"""
        ...
