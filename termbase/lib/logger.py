"""
termbase 구조화 로깅

structlog를 표준 logging 위에 얹어 씁니다. 실행 환경은 환경 변수로 정합니다.

- LOG_LEVEL: 로그 레벨 (기본 INFO, production 환경은 WARNING)
- LOG_FORMAT: console | json
- LOG_TO_FILE / LOG_DIR: 파일 핸들러 추가 여부와 위치 (LOG_DIR/termbase.log)

설정 파일의 logging.level은 configure_logging(level=...)으로 나중에 적용합니다.
"""

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, cast

import structlog
from structlog.stdlib import LoggerFactory

KST = timezone(timedelta(hours=9))

SERVICE_NAME = "termbase"


@dataclass(frozen=True)
class LogOptions:
    """환경 변수에서 읽은 로깅 옵션"""

    level: str
    json_output: bool
    log_file: Path | None
    environment: str

    @classmethod
    def from_env(cls) -> "LogOptions":
        environment = os.getenv("ENVIRONMENT", "development")
        default_level = "WARNING" if environment == "production" else "INFO"
        log_file = None
        if os.getenv("LOG_TO_FILE", "false").lower() == "true":
            log_file = Path(os.getenv("LOG_DIR", "./logs")) / f"{SERVICE_NAME}.log"
        return cls(
            level=os.getenv("LOG_LEVEL", default_level).upper(),
            json_output=os.getenv("LOG_FORMAT", "console").lower() == "json",
            log_file=log_file,
            environment=environment,
        )


def add_kst_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """KST 타임스탬프"""
    event_dict["timestamp"] = datetime.now(KST).isoformat()
    return event_dict


def _service_context(environment: str):
    def add_service_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", environment)
        event_dict["pid"] = os.getpid()
        return event_dict

    return add_service_context


_configured = False


def configure_logging(level: str | None = None, options: LogOptions | None = None) -> None:
    """
    로깅 설정 (재호출 가능)

    Args:
        level: 환경 변수보다 우선하는 로그 레벨 (예: 설정 파일의 logging.level)
        options: 테스트 등에서 환경 변수 대신 쓸 옵션
    """
    global _configured

    opts = options or LogOptions.from_env()
    level_name = (level or opts.level).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    if not _configured:
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if opts.log_file is not None:
            opts.log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(opts.log_file, encoding="utf-8"))
        logging.basicConfig(format="%(message)s", handlers=handlers)

        renderer = (
            structlog.processors.JSONRenderer(ensure_ascii=False)
            if opts.json_output
            else structlog.dev.ConsoleRenderer()
        )
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                add_kst_timestamp,  # type: ignore[list-item]
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                _service_context(opts.environment),  # type: ignore[list-item]
                renderer,
            ],
            context_class=dict,
            logger_factory=LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        _configured = True

    root.setLevel(numeric_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """구조화 로거 반환 (처음 호출 시 환경 변수로 로깅 설정)"""
    if not _configured:
        configure_logging()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name or __name__))
