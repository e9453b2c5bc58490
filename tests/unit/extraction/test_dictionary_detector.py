"""
사용자 사전 추천 탐지기 단위 테스트
"""

from decimal import Decimal

import pytest


@pytest.fixture
def detector():
    from termbase.modules.extraction.dictionary import DictionaryCandidateDetector

    return DictionaryCandidateDetector()


def _info(term, count, npmi):
    from termbase.modules.extraction.dictionary import CandidateInfo

    return CandidateInfo(term=term, count=count, npmi=Decimal(npmi))


@pytest.mark.unit
class TestDictionaryCandidateDetector:
    """규칙 점수 탐지 테스트"""

    def test_incomplete_fragment_with_high_npmi(self, detector):
        """
        불완전 조각 + 높은 NPMI + 항상 함께 출현

        Given: "정산 역서" (NPMI 0.95, 빈도 10, 역서 단독 빈도 10)
        When: detect 호출
        Then: "정산역서" 추천, 신뢰도 0.8, 사유 3개
        """
        suggestions = detector.detect([_info("정산 역서", 10, "0.95")], {"정산": 30, "역서": 10})

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.original_term == "정산 역서"
        assert suggestion.suggested_term == "정산역서"
        assert suggestion.confidence == pytest.approx(0.8)
        assert len(suggestion.reasons) == 3
        assert "불완전한 단어 포함: '역서'" in suggestion.reasons

    def test_loanword_pattern(self, detector):
        """
        외래어 음차 패턴

        Given: "쿠버 네티스" (NPMI 0.98, 빈도 5)
        When: detect 호출
        Then: "쿠버네티스" 추천, 신뢰도 0.7
        """
        suggestions = detector.detect([_info("쿠버 네티스", 5, "0.98")], {"쿠버": 5, "네티스": 6})

        assert [s.suggested_term for s in suggestions] == ["쿠버네티스"]
        assert suggestions[0].confidence == pytest.approx(0.7)
        assert "외래어 음차 패턴" in suggestions[0].reasons

    def test_confidence_is_capped_at_one(self, detector):
        """
        신뢰도 상한 1.0

        Given: "주차 장" (NPMI, 1음절 조각, 알려진 접미사, 동시 출현 모두 일치)
        When: detect 호출
        Then: 신뢰도 1.0
        """
        suggestions = detector.detect([_info("주차 장", 8, "0.97")], {"주차": 8, "장": 8})

        assert suggestions[0].confidence == pytest.approx(1.0)
        assert "알려진 접미사 패턴: -주차장" in suggestions[0].reasons

    def test_single_rule_is_not_enough(self, detector):
        """
        규칙 1개만 일치하면 추천하지 않음

        Given: "공유 서비스" (NPMI 0.95만 일치)
        When: detect 호출
        Then: []
        """
        suggestions = detector.detect([_info("공유 서비스", 1, "0.95")], {"공유": 10, "서비스": 10})

        assert suggestions == []

    def test_only_two_part_terms(self, detector):
        """
        두 단어로 된 용어만 평가

        Given: "인공 지능 기술"
        When: detect 호출
        Then: []
        """
        suggestions = detector.detect([_info("인공 지능 기술", 10, "0.99")], {})

        assert suggestions == []

    def test_sorted_by_confidence(self, detector):
        """
        신뢰도 내림차순 정렬

        Given: 신뢰도 0.7, 0.8, 1.0 후보
        When: detect 호출
        Then: 주차장, 정산역서, 쿠버네티스 순
        """
        candidates = [
            _info("쿠버 네티스", 5, "0.98"),
            _info("정산 역서", 10, "0.95"),
            _info("주차 장", 8, "0.97"),
        ]
        unigram_counts = {"쿠버": 5, "네티스": 6, "정산": 30, "역서": 10, "주차": 8, "장": 8}

        suggestions = detector.detect(candidates, unigram_counts)

        assert [s.suggested_term for s in suggestions] == ["주차장", "정산역서", "쿠버네티스"]

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("장", True),
            ("역서", True),
            ("주차", False),
            ("비즈니스", False),
        ],
    )
    def test_is_incomplete_word(self, detector, word, expected):
        """
        단독으로 의미 없는 조각 판별

        Given: 1음절, 알려진 조각, 일반 명사
        When: is_incomplete_word 호출
        Then: 기대값과 일치
        """
        assert detector.is_incomplete_word(word) is expected


@pytest.mark.unit
class TestCandidateInfo:
    """CandidateInfo 변환 테스트"""

    def test_from_candidate_uses_components(self):
        """
        구성 토큰을 공백으로 결합

        Given: 용어 "회사의 주차장", 구성 토큰 ("회사", "주차장")
        When: CandidateInfo.from_candidate 호출
        Then: term "회사 주차장", 빈도/NPMI 유지
        """
        from termbase.modules.extraction.dictionary import CandidateInfo
        from termbase.modules.extraction.models import CandidateStat

        candidate = CandidateStat(
            term="회사의 주차장",
            components=("회사", "주차장"),
            count=4,
            doc_count=3,
            pmi=Decimal("2.1"),
            npmi=Decimal("0.91"),
            idf=Decimal("0.5"),
            avg_tfidf=Decimal("0.2"),
            relevance_score=Decimal("0.8"),
        )

        info = CandidateInfo.from_candidate(candidate)

        assert info == CandidateInfo(term="회사 주차장", count=4, npmi=Decimal("0.91"))
