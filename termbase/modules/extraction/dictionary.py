"""
사용자 사전 추천 탐지기

형태소 분석기가 잘못 분리한 복합어("정산 역서", "쿠버 네티스")를 규칙 점수로 찾아
사용자 사전에 추가할 결합형("정산역서")을 추천합니다.

규칙 (일치할 때마다 점수 가산):
1. NPMI가 매우 높음                         +0.3
2. 한쪽 단어가 단독으로 의미 없는 조각      +0.3
3. 결합형이 알려진 복합어 접미사로 끝남     +0.2
4. 결합형이 외래어 음차 패턴                +0.2
5. 개별 빈도 대비 결합 빈도가 높음          +0.2

최소 규칙 수와 최소 점수를 모두 넘어야 추천합니다.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from ...lib.logger import get_logger
from .models import CandidateStat
from .patterns import DetectorPatterns, load_filter_patterns

logger = get_logger(__name__)

NPMI_RULE_WEIGHT = 0.3
INCOMPLETE_RULE_WEIGHT = 0.3
SUFFIX_RULE_WEIGHT = 0.2
LOANWORD_RULE_WEIGHT = 0.2
COOCCURRENCE_RULE_WEIGHT = 0.2


@dataclass(frozen=True)
class CandidateInfo:
    """탐지기 입력 (용어는 공백으로 구분된 두 단어)"""

    term: str
    count: int
    npmi: Decimal

    @classmethod
    def from_candidate(cls, candidate: CandidateStat) -> "CandidateInfo":
        return cls(term=" ".join(candidate.components), count=candidate.count, npmi=candidate.npmi)


@dataclass(frozen=True)
class DictionarySuggestion:
    """사용자 사전 추가 추천"""

    original_term: str
    suggested_term: str
    npmi: Decimal
    reasons: list[str] = field(default_factory=list)
    confidence: float = 0.0


class DictionaryCandidateDetector:
    """규칙 점수 기반 사용자 사전 추천 탐지기"""

    def __init__(self, patterns: DetectorPatterns | None = None):
        self.patterns = patterns if patterns is not None else load_filter_patterns().detector

    def detect(
        self,
        candidates: Iterable[CandidateInfo],
        unigram_counts: Mapping[str, int],
    ) -> list[DictionarySuggestion]:
        """
        사전 추천 목록 (신뢰도 내림차순, 동점이면 원래 용어 순)

        Args:
            candidates: 점수 계산을 마친 후보
            unigram_counts: 정규화 unigram 빈도
        """
        suggestions = [
            suggestion
            for candidate in candidates
            if (suggestion := self._evaluate(candidate, unigram_counts)) is not None
        ]
        suggestions.sort(key=lambda s: (-s.confidence, s.original_term))

        logger.debug("사전 추천 탐지 완료", suggestions=len(suggestions))
        return suggestions

    def _evaluate(
        self,
        candidate: CandidateInfo,
        unigram_counts: Mapping[str, int],
    ) -> DictionarySuggestion | None:
        parts = candidate.term.split(" ")
        if len(parts) != 2:
            return None

        first, second = parts
        combined = first + second
        reasons: list[str] = []
        score = 0.0

        if candidate.npmi >= self.patterns.npmi_threshold:
            reasons.append(f"NPMI가 매우 높음 ({candidate.npmi})")
            score += NPMI_RULE_WEIGHT

        incomplete = next((word for word in parts if self.is_incomplete_word(word)), None)
        if incomplete is not None:
            reasons.append(f"불완전한 단어 포함: '{incomplete}'")
            score += INCOMPLETE_RULE_WEIGHT

        suffix = next((s for s in self.patterns.known_suffixes if combined.endswith(s)), None)
        if suffix is not None:
            reasons.append(f"알려진 접미사 패턴: -{suffix}")
            score += SUFFIX_RULE_WEIGHT

        if self.is_loanword_pattern(combined):
            reasons.append("외래어 음차 패턴")
            score += LOANWORD_RULE_WEIGHT

        min_count = min(unigram_counts.get(first, 0), unigram_counts.get(second, 0))
        if min_count > 0 and candidate.count / min_count >= self.patterns.cooccurrence_ratio:
            reasons.append(f"항상 함께 출현 ({candidate.count}/{min_count})")
            score += COOCCURRENCE_RULE_WEIGHT

        score = round(score, 6)
        if len(reasons) < self.patterns.min_rules or score < self.patterns.min_score:
            return None

        return DictionarySuggestion(
            original_term=candidate.term,
            suggested_term=combined,
            npmi=candidate.npmi,
            reasons=reasons,
            confidence=min(score, 1.0),
        )

    def is_incomplete_word(self, word: str) -> bool:
        """한글 1음절, 알려진 불완전 조각, 접미사 음절로 끝나는 2글자 이하 단어"""
        if len(word) == 1 and "가" <= word <= "힣":
            return True
        if word in self.patterns.incomplete_patterns:
            return True
        return len(word) <= 2 and word.endswith(tuple(self.patterns.suffix_syllables))

    def is_loanword_pattern(self, combined: str) -> bool:
        return combined.endswith(tuple(self.patterns.loanword_suffixes)) or any(
            pattern in combined for pattern in self.patterns.loanword_patterns
        )
