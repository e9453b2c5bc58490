"""
구조화 로깅 설정 테스트
"""

import logging

import pytest


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


@pytest.mark.unit
class TestLogOptions:
    """환경 변수 기반 로깅 옵션"""

    def test_defaults(self, monkeypatch):
        """
        환경 변수 없음

        Given: LOG_* / ENVIRONMENT 미설정
        When: LogOptions.from_env
        Then: INFO, 콘솔 출력, 파일 없음
        """
        from termbase.lib.logger import LogOptions

        for name in ("LOG_LEVEL", "LOG_FORMAT", "LOG_TO_FILE", "LOG_DIR", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        options = LogOptions.from_env()

        assert options.level == "INFO"
        assert options.json_output is False
        assert options.log_file is None
        assert options.environment == "development"

    def test_production_and_file(self, monkeypatch, tmp_path):
        """
        운영 환경 + 파일 로그

        Given: ENVIRONMENT=production, LOG_FORMAT=JSON, LOG_TO_FILE=true
        When: LogOptions.from_env
        Then: WARNING, JSON, LOG_DIR/termbase.log
        """
        from termbase.lib.logger import LogOptions

        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("LOG_TO_FILE", "true")
        monkeypatch.setenv("LOG_DIR", str(tmp_path))

        options = LogOptions.from_env()

        assert options.level == "WARNING"
        assert options.json_output is True
        assert options.log_file == tmp_path / "termbase.log"


@pytest.mark.unit
class TestConfigureLogging:
    """configure_logging / get_logger"""

    def test_level_argument_sets_root_level(self, restore_root_level):
        """
        설정 파일 레벨 적용

        Given: level="debug"
        When: configure_logging
        Then: 루트 로거 DEBUG
        """
        from termbase.lib.logger import configure_logging

        configure_logging(level="debug")

        assert restore_root_level.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_level):
        from termbase.lib.logger import configure_logging

        configure_logging(level="chatty")

        assert restore_root_level.level == logging.INFO

    def test_get_logger_binds_name(self):
        from termbase.lib.logger import get_logger

        logger = get_logger("termbase.test")

        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")
