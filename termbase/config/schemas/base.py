"""
설정 스키마 공통 부분

섹션 스키마는 BaseConfig를 상속하고, 점수/임계값 필드는 coerce_decimal로 받습니다.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """설정 섹션 기본 클래스 (모르는 키 허용, 할당 시 재검증)"""

    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """None 값을 뺀 dict (CLI 오버라이드 병합용)"""
        return self.model_dump(exclude_none=True)


def coerce_decimal(value: Any) -> Any:
    """
    float를 str 경유로 Decimal 변환

    YAML에서 따옴표 없이 쓴 0.3이 Decimal("0.299999...")이 되지 않게 합니다.
    """
    if isinstance(value, float):
        return Decimal(str(value))
    return value
