"""
필터 패턴 테이블 로더 단위 테스트
"""

from decimal import Decimal

import pytest


@pytest.mark.unit
class TestLoadFilterPatterns:
    """load_filter_patterns 테스트"""

    def test_loads_packaged_table(self):
        """
        패키지 기본 테이블 로드

        Given: 경로 미지정
        When: load_filter_patterns() 호출
        Then: 버전, 불용어, 정규식, 사전 판별 임계값이 채워짐
        """
        from termbase.modules.extraction.patterns import load_filter_patterns

        patterns = load_filter_patterns()

        assert patterns.version >= 1
        assert "daily" in patterns.exclusion.default_stopwords
        assert "left join" in patterns.exclusion.code_syntax_patterns
        assert patterns.exclusion.hex_pattern.match("abcdef")
        assert "장" in patterns.exclusion.meaningful_single_syllables
        assert patterns.dictionary.npmi_threshold == Decimal("0.95")
        assert patterns.detector.min_rules == 2

    def test_loads_custom_table(self, tmp_path):
        """
        사용자 테이블로 필터 동작 변경

        Given: 불용어 "제이콥스"만 있는 테이블
        When: 해당 테이블로 필터 생성
        Then: "제이콥스" 포함 후보 제외, 기본 불용어 "daily"는 통과
        """
        from termbase.modules.extraction.filter import TermCandidateFilter
        from termbase.modules.extraction.patterns import load_filter_patterns

        path = tmp_path / "patterns.yaml"
        path.write_text(
            "version: 1\nexclusion:\n  default_stopwords: [제이콥스]\n",
            encoding="utf-8",
        )

        candidate_filter = TermCandidateFilter(load_filter_patterns(path))

        assert candidate_filter.should_exclude("제이콥스 사업부", ["제이콥스", "사업부"]) is True
        assert candidate_filter.should_exclude("daily 회의", ["daily", "회의"]) is False

    def test_missing_file_raises_config_error(self, tmp_path):
        """
        없는 파일

        Given: 존재하지 않는 경로
        When: load_filter_patterns 호출
        Then: ConfigError(CONFIG-003)
        """
        from termbase.lib.errors import ConfigError
        from termbase.modules.extraction.patterns import load_filter_patterns

        with pytest.raises(ConfigError) as exc_info:
            load_filter_patterns(tmp_path / "missing.yaml")

        assert exc_info.value.error_code == "CONFIG-003"

    def test_invalid_table_raises_config_error(self, tmp_path):
        """
        스키마 위반 (version 누락, 알 수 없는 키)

        Given: version이 없는 테이블
        When: load_filter_patterns 호출
        Then: ConfigError(CONFIG-003)
        """
        from termbase.lib.errors import ConfigError
        from termbase.modules.extraction.patterns import load_filter_patterns

        path = tmp_path / "broken.yaml"
        path.write_text("exclusion:\n  unknown_key: [a]\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_filter_patterns(path)

        assert exc_info.value.error_code == "CONFIG-003"
        assert path.name in str(exc_info.value)

    def test_tables_are_immutable(self):
        """
        로드된 테이블은 불변

        Given: 기본 테이블
        When: 필드 변경 시도
        Then: ValidationError
        """
        from pydantic import ValidationError

        from termbase.modules.extraction.patterns import load_filter_patterns

        patterns = load_filter_patterns()

        with pytest.raises(ValidationError):
            patterns.version = 99  # type: ignore[misc]
