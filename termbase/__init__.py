"""
termbase - 용어 후보 추출 엔진

한국어 문서 코퍼스에서 도메인 복합 명사 후보를 통계적으로 추출합니다.
"""

__version__ = "0.4.0"
