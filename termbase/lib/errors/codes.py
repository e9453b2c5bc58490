"""에러 코드 정의.

코드 형식은 {DOMAIN}-{NUMBER}이고, DOMAIN 접두사로 예외 클래스가 정해집니다.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """용어 추출 엔진 에러 코드."""

    # 설정 파일 / 설정 값 / 패턴 테이블
    CONFIG_001 = "CONFIG-001"
    CONFIG_002 = "CONFIG-002"
    CONFIG_003 = "CONFIG-003"

    # 형태소 분석기 초기화 / 분석 호출
    TOKENIZER_001 = "TOKENIZER-001"
    TOKENIZER_002 = "TOKENIZER-002"

    # 문서 단위 코퍼스 분석
    ANALYSIS_001 = "ANALYSIS-001"

    EXTRACTION_001 = "EXTRACTION-001"

    # 문서 조회 / 입력 파일 형식
    SOURCE_001 = "SOURCE-001"
    SOURCE_002 = "SOURCE-002"

    GENERAL_001 = "GENERAL-001"

    @property
    def domain(self) -> str:
        """코드 접두사 (예: "TOKENIZER")"""
        return self.value.split("-", 1)[0]
