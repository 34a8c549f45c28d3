"""TOML 설정 파일 및 환경변수 기본값 관리.

``~/.namecrop/config.toml`` 에서 사용자 설정을 로드하고,
환경변수 Shim 패턴으로 설정값을 주입한다.

우선순위::

    CLI 옵션 > 환경변수 > config.toml > 기본값

환경변수에서 개별 기본값을 읽어오는 헬퍼 함수
(``get_default_max_len``, ``get_default_dry_run``)도 이 모듈에서 제공한다.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from namecrop.utils.validators import DEFAULT_MAX_LEN, ValidationError, validate_max_len

logger = logging.getLogger(__name__)

# 환경변수 매핑
ENV_MAX_LEN = "NAMECROP_MAX_LEN"
ENV_DRY_RUN = "NAMECROP_DRY_RUN"


@dataclass(frozen=True)
class GeneralConfig:
    """``config.toml`` 의 ``[general]`` 섹션.

    모든 필드가 ``None`` 이면 해당 옵션은 환경변수 또는 기본값을 사용한다.
    """

    max_len: int | None = None
    dry_run: bool | None = None


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 전체 설정."""

    general: GeneralConfig = field(default_factory=GeneralConfig)


def _warn_type(field_name: str, expected: str, value: object) -> None:
    """타입 불일치 경고 출력."""
    logger.warning(
        "config: %s 타입 오류 (expected %s, got %s)",
        field_name,
        expected,
        type(value).__name__,
    )


def _parse_bool(data: dict[str, object], key: str, section: str) -> bool | None:
    """TOML dict에서 bool 필드를 안전하게 파싱한다."""
    raw = data.get(key)
    if isinstance(raw, bool):
        return raw
    if raw is not None:
        _warn_type(f"{section}.{key}", "bool", raw)
    return None


def _parse_int(data: dict[str, object], key: str, section: str) -> int | None:
    """TOML dict에서 정수 필드를 안전하게 파싱한다 (bool 제외)."""
    raw = data.get(key)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if raw is not None:
        _warn_type(f"{section}.{key}", "int", raw)
    return None


def get_default_config_path() -> Path:
    """기본 설정 파일 경로 반환."""
    return Path.home() / ".namecrop" / "config.toml"


def _parse_general(data: dict[str, object]) -> GeneralConfig:
    """[general] 섹션 파싱. 타입 오류 시 해당 필드 무시."""
    section = "general"

    # max_len: 양의 정수
    max_len = _parse_int(data, "max_len", section)
    if max_len is not None and max_len < 1:
        logger.warning("config: general.max_len 값 오류: %r (must be >= 1)", max_len)
        max_len = None

    return GeneralConfig(
        max_len=max_len,
        dry_run=_parse_bool(data, "dry_run", section),
    )


def load_config(path: Path | None = None) -> AppConfig:
    """
    TOML 설정 파일 로드.

    Args:
        path: 설정 파일 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig (파일 없음/에러 시 빈 AppConfig)
    """
    config_path = path or get_default_config_path()

    if not config_path.is_file():
        return AppConfig()

    try:
        with config_path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        logger.warning("config: TOML 문법 오류 (%s): %s", config_path, e)
        return AppConfig()
    except OSError as e:
        logger.warning("config: 파일 읽기 실패 (%s): %s", config_path, e)
        return AppConfig()

    general_data = raw.get("general", {})

    if isinstance(general_data, dict):
        general = _parse_general(general_data)
    else:
        if general_data:
            logger.warning(
                "config: [general] 섹션이 테이블이 아닙니다 (got %s)",
                type(general_data).__name__,
            )
        general = GeneralConfig()

    return AppConfig(general=general)


def apply_config_to_env(config: AppConfig) -> None:
    """
    설정값을 환경변수에 주입 (미설정인 경우만).

    이미 설정된 환경변수는 보존된다 (환경변수 > config).
    """
    mappings: list[tuple[str, str]] = []

    if config.general.max_len is not None:
        mappings.append((ENV_MAX_LEN, str(config.general.max_len)))
    # bool → "true"/"false"
    if config.general.dry_run is not None:
        mappings.append((ENV_DRY_RUN, str(config.general.dry_run).lower()))

    for env_key, value in mappings:
        if env_key not in os.environ:
            os.environ[env_key] = value


def generate_default_config() -> str:
    """주석 포함 기본 설정 파일 템플릿 반환."""
    return f"""\
# namecrop 설정 파일
# 위치: ~/.namecrop/config.toml
#
# 우선순위: CLI 옵션 > 환경변수 > 이 파일 > 기본값
# 주석 해제 후 값을 수정하세요.

[general]
# max_len = {DEFAULT_MAX_LEN}                            # 이름 최대 바이트 수 ({ENV_MAX_LEN})
# dry_run = false                          # 변경 예정만 출력 ({ENV_DRY_RUN})
"""


# ---------------------------------------------------------------------------
# 환경변수 기본값 헬퍼
# ---------------------------------------------------------------------------


def parse_env_bool(value: str) -> bool:
    """환경변수 문자열을 bool로 변환한다.

    '1', 'true', 'yes', 'y', 'on' (대소문자 무시)이면 True, 그 외 False.

    Args:
        value: 환경변수 원본 문자열.

    Returns:
        변환된 bool 값.
    """
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def get_default_max_len() -> int:
    """환경변수에서 기본 이름 최대 바이트 수를 가져온다.

    ``NAMECROP_MAX_LEN`` 환경변수에서 양의 정수를 읽어 반환한다.
    유효하지 않은 값이면 경고 후 기본값 **140** 을 반환한다.

    Returns:
        이름 최대 바이트 수 (최소 1).
    """
    env_max_len = os.environ.get(ENV_MAX_LEN)
    if env_max_len:
        try:
            return validate_max_len(env_max_len)
        except ValidationError as e:
            logger.warning("%s=%s 무시됨: %s", ENV_MAX_LEN, env_max_len, e)
    return DEFAULT_MAX_LEN


def get_default_dry_run() -> bool:
    """환경변수 ``NAMECROP_DRY_RUN`` 에서 dry-run 기본값을 가져온다."""
    env_val = os.environ.get(ENV_DRY_RUN)
    if env_val is None:
        return False
    return parse_env_bool(env_val)
