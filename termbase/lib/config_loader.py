"""
termbase 설정 로더

설정은 아래 순서로 쌓이고 마지막에 RootConfig로 검증됩니다.

1. 프로젝트 루트의 .env (있을 때만)
2. config/base.yaml
3. config/environments/{ENVIRONMENT}.yaml (깊은 병합)
4. 문자열 안의 ${VAR} / ${VAR:-default} 치환
5. ENV_OVERRIDES에 등록된 환경 변수
"""

import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..config.schemas import RootConfig, validate_config
from .errors import ConfigError, ErrorCode
from .logger import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

KNOWN_ENVIRONMENTS = ("development", "test", "production")

_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")

# 환경 변수 -> (설정 경로, 변환 함수). 임계값은 문자열 그대로 넘겨 Decimal 정밀도를 지킨다.
ENV_OVERRIDES: dict[str, tuple[tuple[str, ...], Callable[[str], Any]]] = {
    "TERMBASE_MIN_COUNT": (("extraction", "min_count"), int),
    "TERMBASE_NPMI_THRESHOLD": (("extraction", "npmi_threshold"), str),
    "TERMBASE_RELEVANCE_THRESHOLD": (("extraction", "relevance_threshold"), str),
    "TERMBASE_MAX_WORKERS": (("extraction", "max_workers"), int),
    "TERMBASE_PAGE_SIZE": (("extraction", "page_size"), int),
    "TERMBASE_ON_DOCUMENT_ERROR": (("extraction", "on_document_error"), str.lower),
    "LOG_LEVEL": (("logging", "level"), str.upper),
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """override의 값이 우선하는 깊은 병합 (입력은 변경하지 않음)"""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def substitute_env_vars(value: Any) -> Any:
    """
    ${VAR} / ${VAR:-default} 치환

    정의되지 않은 ${VAR}는 원문을 남기고, ${VAR:-}는 빈 문자열이 됩니다.
    """
    if isinstance(value, dict):
        return {key: substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def resolve(match: re.Match[str]) -> str:
        name, sep, default = match.group(1).partition(":-")
        if sep:
            return os.getenv(name, default)
        return os.getenv(name, match.group(0))

    return _ENV_REFERENCE.sub(resolve, value)


class ConfigLoader:
    """YAML 설정 로더"""

    def __init__(self, base_path: str | Path | None = None, environment: str | None = None) -> None:
        env_file = PROJECT_ROOT / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.base_path = Path(base_path) if base_path is not None else DEFAULT_CONFIG_DIR
        self.environment = self._resolve_environment(environment)

    @staticmethod
    def _resolve_environment(environment: str | None) -> str:
        name = (environment or os.getenv("ENVIRONMENT") or "development").lower()
        if name not in KNOWN_ENVIRONMENTS:
            logger.warning("알 수 없는 환경, development 사용", environment=name)
            return "development"
        return name

    def load_config(self) -> RootConfig:
        """
        설정 로드 및 검증

        Raises:
            ConfigError: base.yaml 없음(CONFIG-001), YAML/검증 오류(CONFIG-002)
        """
        base_file = self.base_path / "base.yaml"
        if not base_file.exists():
            raise ConfigError(ErrorCode.CONFIG_001, config_path=str(base_file), environment=self.environment)

        try:
            raw = self._read_yaml(base_file)
            env_file = self.base_path / "environments" / f"{self.environment}.yaml"
            if env_file.exists():
                raw = deep_merge(raw, self._read_yaml(env_file))
            raw = self._apply_env_overrides(substitute_env_vars(raw))
            config = validate_config(raw)
        except (ValidationError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(
                ErrorCode.CONFIG_002,
                validation_errors=str(e),
                environment=self.environment,
            ) from e

        logger.info(
            "설정 로드 완료",
            environment=self.environment,
            min_count=config.extraction.min_count,
            npmi_threshold=str(config.extraction.npmi_threshold),
            relevance_threshold=str(config.extraction.relevance_threshold),
        )
        return config

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                ErrorCode.CONFIG_002,
                validation_errors=f"{path}: top-level must be a mapping",
                environment=self.environment,
            )
        return data

    @staticmethod
    def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
        for env_var, (path, convert) in ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            section = config
            for key in path[:-1]:
                if not isinstance(section.get(key), dict):
                    section[key] = {}
                section = section[key]
            section[path[-1]] = convert(value)
        return config


def load_config(base_path: str | Path | None = None, environment: str | None = None) -> RootConfig:
    """
    설정 로드 단축 함수

    Examples:
        >>> load_config(environment="test").extraction.max_workers
        2
    """
    return ConfigLoader(base_path=base_path, environment=environment).load_config()
