"""
용어 후보 점수 계산기

PMI, NPMI, IDF, 평균 TF-IDF, 관련성 점수를 계산하는 순수 함수 모음입니다.

설계 원칙:
    - 모든 함수는 예외를 던지지 않음 (빈도/전체 수가 0이면 정확히 0 반환)
    - 결과는 소수점 6자리, ROUND_HALF_UP으로 고정 (임계값 비교와 정렬 재현성)
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# 중간 계산 정밀도 (유효숫자 10자리)
MATH_CONTEXT = Context(prec=10, rounding=ROUND_HALF_UP)

SCALE = Decimal("0.000001")

ZERO = Decimal("0")
NPMI_MIN = Decimal("-1.000000")
NPMI_MAX = Decimal("1.000000")

DEFAULT_NPMI_WEIGHT = Decimal("0.6")
DEFAULT_TFIDF_WEIGHT = Decimal("0.4")


def _to_decimal(value: float) -> Decimal:
    return MATH_CONTEXT.create_decimal(value).quantize(SCALE, rounding=ROUND_HALF_UP)


def calculate_pmi(
    bigram_count: int,
    unigram1_count: int,
    unigram2_count: int,
    total_bigrams: int,
    total_unigrams: int,
) -> Decimal:
    """
    PMI (Pointwise Mutual Information) 계산

    PMI(x, y) = log2( P(x,y) / (P(x) × P(y)) )

    Args:
        bigram_count: bigram 등장 빈도
        unigram1_count: 첫 번째 단어 등장 빈도
        unigram2_count: 두 번째 단어 등장 빈도
        total_bigrams: 전체 bigram 수
        total_unigrams: 전체 unigram 수
    """
    if 0 in (bigram_count, unigram1_count, unigram2_count, total_bigrams, total_unigrams):
        return ZERO

    p_xy = bigram_count / total_bigrams
    p_x = unigram1_count / total_unigrams
    p_y = unigram2_count / total_unigrams

    return _to_decimal(math.log2(p_xy / (p_x * p_y)))


def calculate_npmi(pmi: Decimal, bigram_count: int, total_bigrams: int) -> Decimal:
    """
    NPMI (Normalized PMI) 계산

    NPMI = PMI / -log2(P(x,y)), 결과는 -1 ~ 1로 제한

    원식 결과가 범위를 벗어나면 경계값(-1 또는 1)을 반환합니다.
    """
    if bigram_count == 0 or total_bigrams == 0:
        return ZERO

    denominator = -math.log2(bigram_count / total_bigrams)
    if denominator == 0.0:
        return ZERO

    npmi = _to_decimal(float(pmi) / denominator)
    return max(NPMI_MIN, min(NPMI_MAX, npmi))


def calculate_idf(doc_count: int, total_docs: int) -> Decimal:
    """IDF = ln(total_docs / doc_count)"""
    if doc_count == 0 or total_docs == 0:
        return ZERO

    return _to_decimal(math.log(total_docs / doc_count))


def calculate_avg_tfidf(count: int, total_docs: int, idf: Decimal) -> Decimal:
    """평균 TF-IDF = (count / total_docs) × IDF"""
    if count == 0 or total_docs == 0:
        return ZERO

    return _to_decimal((count / total_docs) * float(idf))


def calculate_relevance_score(
    npmi: Decimal,
    avg_tfidf: Decimal,
    max_avg_tfidf: Decimal,
    npmi_weight: Decimal = DEFAULT_NPMI_WEIGHT,
    tfidf_weight: Decimal = DEFAULT_TFIDF_WEIGHT,
) -> Decimal:
    """
    관련성 점수 계산

    relevance = ((NPMI + 1) / 2) × npmi_weight + (avg_tfidf / max_avg_tfidf) × tfidf_weight

    max_avg_tfidf가 0 이하이면 TF-IDF 항은 0으로 처리합니다.

    Examples:
        >>> calculate_relevance_score(Decimal("0.5"), Decimal("0.5"), Decimal("1.0"))
        Decimal('0.650000')
    """
    normalized_npmi = MATH_CONTEXT.divide(npmi + 1, 2)

    if max_avg_tfidf > 0:
        normalized_tfidf = MATH_CONTEXT.divide(avg_tfidf, max_avg_tfidf)
    else:
        normalized_tfidf = ZERO

    relevance = normalized_npmi * npmi_weight + normalized_tfidf * tfidf_weight
    return relevance.quantize(SCALE, rounding=ROUND_HALF_UP)


class TermCandidateScoreCalculator:
    """
    점수 계산기 (관련성 가중치 보관)

    Attributes:
        npmi_weight: 관련성 점수의 NPMI 가중치
        tfidf_weight: 관련성 점수의 TF-IDF 가중치
    """

    def __init__(
        self,
        npmi_weight: Decimal = DEFAULT_NPMI_WEIGHT,
        tfidf_weight: Decimal = DEFAULT_TFIDF_WEIGHT,
    ) -> None:
        self.npmi_weight = npmi_weight
        self.tfidf_weight = tfidf_weight

    calculate_pmi = staticmethod(calculate_pmi)
    calculate_npmi = staticmethod(calculate_npmi)
    calculate_idf = staticmethod(calculate_idf)
    calculate_avg_tfidf = staticmethod(calculate_avg_tfidf)

    def calculate_relevance_score(
        self,
        npmi: Decimal,
        avg_tfidf: Decimal,
        max_avg_tfidf: Decimal,
    ) -> Decimal:
        return calculate_relevance_score(npmi, avg_tfidf, max_avg_tfidf, self.npmi_weight, self.tfidf_weight)

    def __repr__(self) -> str:
        return f"TermCandidateScoreCalculator(npmi_weight={self.npmi_weight}, tfidf_weight={self.tfidf_weight})"
