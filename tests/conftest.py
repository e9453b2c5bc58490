"""
테스트 공통 설정 및 픽스처

pytest conftest.py - 모든 테스트에서 공유되는 설정과 픽스처 정의.
"""

import os
import re
import sys
from pathlib import Path

import pytest

# 프로젝트 루트 경로를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def pytest_configure(config: pytest.Config) -> None:
    """
    pytest 설정 훅

    테스트 환경임을 명시하고 로그 파일 출력을 끕니다.
    """
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_TO_FILE"] = "false"


class WhitespaceNounSequenceExtractor:
    """
    결정적인 테스트용 명사 시퀀스 추출기

    공백 한 칸으로 이어진 단어를 하나의 시퀀스로 보고, " / "처럼 두 칸 이상
    떨어진 구간은 다른 시퀀스로 나눕니다. fail_marker가 포함된 문서는 분석 실패로 처리합니다.
    """

    def __init__(self, fail_marker: str | None = None):
        self.fail_marker = fail_marker

    def tokenize(self, text: str):
        from termbase.modules.extraction.models import Token
        from termbase.modules.extraction.tokenizer import group_sequences

        if self.fail_marker is not None and self.fail_marker in text:
            raise RuntimeError(f"cannot analyze: {text}")

        tokens = [Token(m.group(), m.start(), m.end()) for m in re.finditer(r"[^\s/]+", text)]
        return group_sequences(tokens, max_gap=1)

    def extract_terms(self, text: str) -> list[list[str]]:
        return [sequence.terms() for sequence in self.tokenize(text)]


@pytest.fixture
def whitespace_extractor() -> WhitespaceNounSequenceExtractor:
    """공백 분리 명사 시퀀스 추출기"""
    return WhitespaceNounSequenceExtractor()


@pytest.fixture
def failing_extractor() -> WhitespaceNounSequenceExtractor:
    """"ERROR"가 포함된 문서에서 실패하는 추출기"""
    return WhitespaceNounSequenceExtractor(fail_marker="ERROR")
