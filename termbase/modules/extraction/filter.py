"""
용어 후보 필터 (TermCandidateFilter)

형태소 분석기 오류와 원문 노이즈로 생긴 후보를 걸러냅니다:
- 제외 규칙: URL, 기술 노이즈, 코드 문법, 불용어, 단일 ASCII 문자,
  16진수 조각, 화이트리스트 밖의 한글 1음절, 에코 패턴
- 중복 제거: 공백 변형 통합 + 부분 분해형 제거
- 사전 등록 후보 판별: 외래어/복합어 분리 오류 추정

각 규칙은 독립된 술어 함수이고 should_exclude는 이들의 OR입니다.
"""

from collections.abc import Callable, Iterable, Sequence
from decimal import Decimal
from re import Pattern
from typing import TypeVar

from .models import DictionaryCandidateResult, DictionaryConfidence, DictionaryNeedReason
from .patterns import FilterPatterns, load_filter_patterns

T = TypeVar("T")


def is_korean_char(ch: str) -> bool:
    """한글 음절(가-힣) 또는 호환 자모(ㄱ-ㅣ)"""
    code = ord(ch)
    return 0xAC00 <= code <= 0xD7A3 or 0x3131 <= code <= 0x3163


def is_all_korean(word: str) -> bool:
    return all(is_korean_char(ch) for ch in word)


def normalize_term(term: str) -> str:
    """공백 제거 + 소문자 (중복 판정 기준 형태)"""
    return term.replace(" ", "").lower()


# ========================================
# 제외 규칙 술어
# ========================================


def contains_url_pattern(term: str, url_patterns: Iterable[str]) -> bool:
    return any(pattern in term for pattern in url_patterns)


def contains_technical_noise(term: str, noise_patterns: Iterable[str]) -> bool:
    return any(pattern in term for pattern in noise_patterns)


def is_code_syntax(term: str, code_syntax_patterns: frozenset[str]) -> bool:
    return term in code_syntax_patterns


def has_stopword(components: Sequence[str], stopwords: frozenset[str]) -> bool:
    return any(component in stopwords for component in components)


def has_single_ascii_char(components: Sequence[str]) -> bool:
    """숫자가 아닌 ASCII 1글자 컴포넌트 (한글 1글자는 별도 규칙)"""
    return any(len(c) == 1 and ord(c) < 128 and not c.isdigit() for c in components)


def has_hex_component(components: Sequence[str], hex_pattern: Pattern[str]) -> bool:
    return any(hex_pattern.match(component) for component in components)


def has_unlisted_single_syllable(components: Sequence[str], meaningful: frozenset[str]) -> bool:
    """
    화이트리스트에 없는 한글 1음절 컴포넌트

    예: ["버", "젼"] → True (버전의 잘못된 분리)
        ["일", "차"] → False (수사/단위)
    """
    return any(
        len(component) == 1 and is_korean_char(component) and component not in meaningful
        for component in components
    )


def has_echo_pattern(components: Sequence[str]) -> bool:
    """
    한 컴포넌트가 다른 컴포넌트의 접두사/접미사로 반복되는 경우

    예: ["공휴일", "공휴"] → True, ["담당자", "담당"] → True
    """
    for i, a in enumerate(components):
        for j, b in enumerate(components):
            if i != j and len(a) > len(b) and (a.startswith(b) or a.endswith(b)):
                return True
    return False


def is_redundant_decomposition(normalized: str, all_normalized: Iterable[str]) -> bool:
    """더 긴 다른 용어의 접두사/접미사이면 불필요한 분해형 (예: "공휴일"이 있을 때 "공휴")"""
    return any(
        len(other) > len(normalized) and (other.startswith(normalized) or other.endswith(normalized))
        for other in all_normalized
    )


class TermCandidateFilter:
    """
    용어 후보 필터

    Attributes:
        patterns: 키워드/패턴 테이블 (기본값: 패키지 filter_patterns.yaml)
    """

    def __init__(self, patterns: FilterPatterns | None = None):
        self.patterns = patterns if patterns is not None else load_filter_patterns()

    def should_exclude(
        self,
        term: str,
        components: Sequence[str],
        stopwords: Iterable[str] = (),
    ) -> bool:
        """
        후보 제외 여부

        Args:
            term: 후보 용어 (원문 구문)
            components: 정규화된 구성 토큰
            stopwords: 기본 불용어에 더할 불용어

        Returns:
            하나의 규칙이라도 일치하면 True
        """
        rules = self.patterns.exclusion
        lower_term = term.lower()
        lower_components = [component.lower() for component in components]
        all_stopwords = rules.default_stopwords | {word.lower() for word in stopwords}

        return (
            contains_url_pattern(lower_term, rules.url_patterns)
            or contains_technical_noise(lower_term, rules.technical_noise_patterns)
            or is_code_syntax(lower_term, rules.code_syntax_patterns)
            or has_stopword(lower_components, all_stopwords)
            or has_single_ascii_char(lower_components)
            or has_hex_component(lower_components, rules.hex_pattern)
            or has_unlisted_single_syllable(lower_components, rules.meaningful_single_syllables)
            or has_echo_pattern(lower_components)
        )

    def remove_duplicate_candidates(
        self,
        candidates: Sequence[T],
        term_of: Callable[[T], str],
        score_of: Callable[[T], Decimal],
    ) -> list[T]:
        """
        형태소 분리로 생긴 중복 후보 제거

        1단계: 공백 제거/소문자 형태가 같은 후보 중 점수가 가장 높은 것만 유지
               (동점이면 용어 사전순으로 앞선 것)
               예: "주차장 주차"(0.9), "주차 장주차"(0.7) → "주차장 주차"
        2단계: 남은 후보 중 다른 후보의 접두사/접미사인 것 제거
               예: "마이그레이션"이 있으면 "마이그레이" 제거

        같은 결과에 다시 적용해도 결과가 바뀌지 않습니다.
        """
        if not candidates:
            return []

        best_by_normalized: dict[str, T] = {}
        for candidate in candidates:
            key = normalize_term(term_of(candidate))
            current = best_by_normalized.get(key)
            if current is None or _ranks_higher(candidate, current, term_of, score_of):
                best_by_normalized[key] = candidate

        normalized_forms = set(best_by_normalized)

        return [
            candidate
            for normalized, candidate in best_by_normalized.items()
            if not is_redundant_decomposition(normalized, normalized_forms)
        ]

    def detect_dictionary_candidate(
        self,
        components: Sequence[str],
        npmi: Decimal,
    ) -> DictionaryCandidateResult:
        """
        사용자 사전 등록이 필요해 보이는 후보인지 판별

        판단 기준:
        1. NPMI >= 0.95: 거의 항상 함께 출현
        2. 두 컴포넌트 모두 한글 2-3음절: 외래어 분리 패턴
        3. 결합형이 고유어 접사 패턴에 맞지 않음: 외래어로 추정

        Examples:
            ["버네", "티스"], 0.98 → LOANWORD_SPLIT / HIGH
            ["개발", "하다"], 0.97 → HIGH_COOCCURRENCE / MEDIUM
        """
        rules = self.patterns.dictionary

        high_npmi = npmi >= rules.npmi_threshold
        all_korean = all(is_all_korean(component) for component in components)
        has_loanword_split_pattern = (
            len(components) == 2 and all(2 <= len(c) <= 3 for c in components) and all_korean
        )

        combined = "".join(components)
        looks_like_loanword = all_korean and len(combined) >= 4 and not self._is_likely_native_korean(combined)

        if high_npmi and has_loanword_split_pattern and looks_like_loanword:
            return DictionaryCandidateResult(
                needs_dictionary=True,
                reason=DictionaryNeedReason.LOANWORD_SPLIT,
                confidence=DictionaryConfidence.HIGH,
            )
        if high_npmi and has_loanword_split_pattern:
            return DictionaryCandidateResult(
                needs_dictionary=True,
                reason=DictionaryNeedReason.HIGH_COOCCURRENCE,
                confidence=DictionaryConfidence.MEDIUM,
            )
        if high_npmi and all_korean and any(len(c) == 1 for c in components):
            return DictionaryCandidateResult(
                needs_dictionary=True,
                reason=DictionaryNeedReason.SINGLE_SYLLABLE_SPLIT,
                confidence=DictionaryConfidence.MEDIUM,
            )
        return DictionaryCandidateResult(needs_dictionary=False)

    def _is_likely_native_korean(self, term: str) -> bool:
        """고유어/한자어 접사로 끝나거나 시작하면 외래어가 아닌 것으로 판단"""
        rules = self.patterns.dictionary
        return term.endswith(tuple(rules.native_korean_suffixes)) or term.startswith(
            tuple(rules.native_korean_prefixes)
        )


def _ranks_higher(
    candidate: T,
    current: T,
    term_of: Callable[[T], str],
    score_of: Callable[[T], Decimal],
) -> bool:
    candidate_score, current_score = score_of(candidate), score_of(current)
    if candidate_score != current_score:
        return candidate_score > current_score
    return term_of(candidate) < term_of(current)
