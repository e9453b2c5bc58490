"""
용어 후보 필터 단위 테스트

노이즈 제외 규칙, 중복 제거, 사전 등록 후보 판별을 검증합니다.
"""

from dataclasses import dataclass
from decimal import Decimal

import pytest


@dataclass(frozen=True)
class _Candidate:
    term: str
    score: Decimal


def _dedup(candidate_filter, candidates):
    return candidate_filter.remove_duplicate_candidates(
        candidates,
        term_of=lambda c: c.term,
        score_of=lambda c: c.score,
    )


@pytest.fixture
def candidate_filter():
    from termbase.modules.extraction.filter import TermCandidateFilter

    return TermCandidateFilter()


@pytest.mark.unit
class TestShouldExclude:
    """제외 규칙 테스트"""

    @pytest.mark.parametrize(
        "term",
        [
            "https socarcorp",
            "jira software",
            "daily 비",
            "action item",
            "software c",
            "공휴일 공휴",
            "담당자 담당",
            "fcmermaid diagramf",
            "cdn jsdelivr",
            "sync configs",
            "left join",
            "note right",
            "end subgraph",
            "read write",
            "df bfa",
            "abcdef 123456",
            "버 젼",
            "그루 밍",
            "뤼 버",
        ],
    )
    def test_excludes_noise(self, candidate_filter, term):
        """
        노이즈 후보 제외

        Given: URL/기술 노이즈/코드 문법/불용어/1글자/16진수/에코 패턴 후보
        When: should_exclude 호출
        Then: True
        """
        assert candidate_filter.should_exclude(term, term.split(" ")) is True

    @pytest.mark.parametrize(
        "term",
        [
            "주차 장",
            "버전 2",
            "공유 주차장",
            "엑셀 다운로드",
            "웹 앱",
            "api server",
            "일 차",
            "월 별",
            "상 반기",
        ],
    )
    def test_keeps_valid_terms(self, candidate_filter, term):
        """
        정상 후보 유지

        Given: 의미있는 1음절, 숫자, 일반 명사구
        When: should_exclude 호출
        Then: False
        """
        assert candidate_filter.should_exclude(term, term.split(" ")) is False

    def test_custom_stopword(self, candidate_filter):
        """
        추가 불용어로 제외

        Given: stopwords={"제이콥스"}
        When: "제이콥스 사업부" 판별
        Then: True (추가 불용어가 없으면 False)
        """
        assert candidate_filter.should_exclude("제이콥스 사업부", ["제이콥스", "사업부"]) is False
        assert candidate_filter.should_exclude("제이콥스 사업부", ["제이콥스", "사업부"], {"제이콥스"}) is True

    def test_case_insensitive(self, candidate_filter):
        """
        대소문자 무시

        Given: "Left Join", "DAILY 회의"
        When: should_exclude 호출
        Then: True
        """
        assert candidate_filter.should_exclude("Left Join", ["Left", "Join"]) is True
        assert candidate_filter.should_exclude("DAILY 회의", ["DAILY", "회의"]) is True


@pytest.mark.unit
class TestExclusionPredicates:
    """개별 제외 규칙 술어 테스트"""

    def test_echo_pattern(self):
        """
        한 컴포넌트가 다른 컴포넌트의 접두사/접미사

        Given: ["공휴일", "공휴"], ["공휴일", "휴일"], ["공유", "주차장"]
        When: has_echo_pattern 호출
        Then: True, True, False
        """
        from termbase.modules.extraction.filter import has_echo_pattern

        assert has_echo_pattern(["공휴일", "공휴"]) is True
        assert has_echo_pattern(["공휴일", "휴일"]) is True
        assert has_echo_pattern(["공유", "주차장"]) is False

    def test_single_ascii_char_ignores_digits(self):
        """
        숫자 1글자는 ASCII 규칙에서 제외

        Given: ["버전", "2"], ["software", "c"]
        When: has_single_ascii_char 호출
        Then: False, True
        """
        from termbase.modules.extraction.filter import has_single_ascii_char

        assert has_single_ascii_char(["버전", "2"]) is False
        assert has_single_ascii_char(["software", "c"]) is True

    def test_is_korean_char(self):
        """
        한글 음절과 호환 자모

        Given: "가", "ㄱ", "a", "漢"
        When: is_korean_char 호출
        Then: True, True, False, False
        """
        from termbase.modules.extraction.filter import is_korean_char

        assert is_korean_char("가") is True
        assert is_korean_char("ㄱ") is True
        assert is_korean_char("a") is False
        assert is_korean_char("漢") is False


@pytest.mark.unit
class TestRemoveDuplicateCandidates:
    """중복 제거 테스트"""

    def test_keeps_highest_score_among_spacing_variants(self, candidate_filter):
        """
        공백 변형 중 최고 점수만 유지

        Given: "주차장 주차"(0.9), "주차 장주차"(0.7)
        When: remove_duplicate_candidates 호출
        Then: "주차장 주차"만 남음
        """
        candidates = [_Candidate("주차장 주차", Decimal("0.9")), _Candidate("주차 장주차", Decimal("0.7"))]

        result = _dedup(candidate_filter, candidates)

        assert [c.term for c in result] == ["주차장 주차"]

    def test_removes_prefix_decomposition(self, candidate_filter):
        """
        더 긴 후보의 접두사 제거

        Given: "마이그레이션", "마이그레이"
        When: remove_duplicate_candidates 호출
        Then: "마이그레이션"만 남음
        """
        candidates = [_Candidate("마이그레이션", Decimal("0.5")), _Candidate("마이그레이", Decimal("0.8"))]

        result = _dedup(candidate_filter, candidates)

        assert [c.term for c in result] == ["마이그레이션"]

    def test_removes_suffix_decomposition(self, candidate_filter):
        """
        더 긴 후보의 접미사 제거

        Given: "공휴일", "휴일"
        When: remove_duplicate_candidates 호출
        Then: "공휴일"만 남음
        """
        candidates = [_Candidate("공휴일", Decimal("0.5")), _Candidate("휴일", Decimal("0.6"))]

        result = _dedup(candidate_filter, candidates)

        assert [c.term for c in result] == ["공휴일"]

    def test_keeps_unrelated_terms(self, candidate_filter):
        """
        접두사/접미사 관계가 아니면 모두 유지

        Given: "주차장", "주차비"
        When: remove_duplicate_candidates 호출
        Then: 둘 다 유지
        """
        candidates = [_Candidate("주차장", Decimal("0.5")), _Candidate("주차비", Decimal("0.6"))]

        result = _dedup(candidate_filter, candidates)

        assert {c.term for c in result} == {"주차장", "주차비"}

    def test_empty_input(self, candidate_filter):
        """
        빈 목록

        Given: []
        When: remove_duplicate_candidates 호출
        Then: []
        """
        assert _dedup(candidate_filter, []) == []

    def test_tie_prefers_lexicographically_first_term(self, candidate_filter):
        """
        동점이면 용어 사전순으로 앞선 후보 유지

        Given: "데이터 분석"(0.5), "데이터분석"(0.5)
        When: remove_duplicate_candidates 호출 (입력 순서 두 가지)
        Then: 항상 "데이터 분석"
        """
        a = _Candidate("데이터 분석", Decimal("0.5"))
        b = _Candidate("데이터분석", Decimal("0.5"))

        assert [c.term for c in _dedup(candidate_filter, [a, b])] == ["데이터 분석"]
        assert [c.term for c in _dedup(candidate_filter, [b, a])] == ["데이터 분석"]

    def test_idempotent(self, candidate_filter):
        """
        결과에 다시 적용해도 변화 없음

        Given: 공백 변형과 부분 분해형이 섞인 후보
        When: 중복 제거를 두 번 적용
        Then: 두 결과가 같음
        """
        candidates = [
            _Candidate("주차장 주차", Decimal("0.9")),
            _Candidate("주차 장주차", Decimal("0.7")),
            _Candidate("공휴일", Decimal("0.5")),
            _Candidate("휴일", Decimal("0.6")),
            _Candidate("주차비", Decimal("0.4")),
        ]

        once = _dedup(candidate_filter, candidates)
        twice = _dedup(candidate_filter, once)

        assert once == twice


@pytest.mark.unit
class TestDetectDictionaryCandidate:
    """사전 등록 후보 판별 테스트"""

    def test_loanword_split(self, candidate_filter):
        """
        외래어 분리 패턴

        Given: ["버네", "티스"], NPMI 0.98
        When: detect_dictionary_candidate 호출
        Then: LOANWORD_SPLIT / HIGH
        """
        from termbase.modules.extraction.models import DictionaryConfidence, DictionaryNeedReason

        result = candidate_filter.detect_dictionary_candidate(["버네", "티스"], Decimal("0.98"))

        assert result.needs_dictionary is True
        assert result.reason == DictionaryNeedReason.LOANWORD_SPLIT
        assert result.confidence == DictionaryConfidence.HIGH

    def test_loanword_split_three_syllables(self, candidate_filter):
        """
        3음절 조각도 외래어 분리 패턴

        Given: ["마이", "그레이"], NPMI 0.96
        When: detect_dictionary_candidate 호출
        Then: HIGH 신뢰도
        """
        from termbase.modules.extraction.models import DictionaryConfidence

        result = candidate_filter.detect_dictionary_candidate(["마이", "그레이"], Decimal("0.96"))

        assert result.needs_dictionary is True
        assert result.confidence == DictionaryConfidence.HIGH

    def test_native_korean_is_high_cooccurrence(self, candidate_filter):
        """
        고유어 접사로 끝나면 외래어가 아닌 높은 동시 출현

        Given: ["개발", "하다"], NPMI 0.97
        When: detect_dictionary_candidate 호출
        Then: HIGH_COOCCURRENCE / MEDIUM
        """
        from termbase.modules.extraction.models import DictionaryConfidence, DictionaryNeedReason

        result = candidate_filter.detect_dictionary_candidate(["개발", "하다"], Decimal("0.97"))

        assert result.needs_dictionary is True
        assert result.reason == DictionaryNeedReason.HIGH_COOCCURRENCE
        assert result.confidence == DictionaryConfidence.MEDIUM

    def test_single_syllable_split(self, candidate_filter):
        """
        1음절 조각이 있는 한글 후보

        Given: ["주차", "장"], NPMI 0.99
        When: detect_dictionary_candidate 호출
        Then: SINGLE_SYLLABLE_SPLIT / MEDIUM
        """
        from termbase.modules.extraction.models import DictionaryConfidence, DictionaryNeedReason

        result = candidate_filter.detect_dictionary_candidate(["주차", "장"], Decimal("0.99"))

        assert result.needs_dictionary is True
        assert result.reason == DictionaryNeedReason.SINGLE_SYLLABLE_SPLIT
        assert result.confidence == DictionaryConfidence.MEDIUM

    def test_long_components_do_not_need_dictionary(self, candidate_filter):
        """
        4음절 컴포넌트는 분리 패턴이 아님

        Given: ["비즈니스", "로직"], NPMI 0.97
        When: detect_dictionary_candidate 호출
        Then: needs_dictionary False, 사유/신뢰도 None
        """
        result = candidate_filter.detect_dictionary_candidate(["비즈니스", "로직"], Decimal("0.97"))

        assert result.needs_dictionary is False
        assert result.reason is None
        assert result.confidence is None

    def test_low_npmi_does_not_need_dictionary(self, candidate_filter):
        """
        NPMI가 낮으면 판별하지 않음

        Given: ["공유", "주차장"], NPMI 0.80
        When: detect_dictionary_candidate 호출
        Then: needs_dictionary False
        """
        result = candidate_filter.detect_dictionary_candidate(["공유", "주차장"], Decimal("0.80"))

        assert result.needs_dictionary is False
