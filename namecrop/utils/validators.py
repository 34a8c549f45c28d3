"""입력 검증 유틸리티.

CLI·설정 파일·환경변수에서 들어온 값을 엔진에 넘기기 전에 검증한다.
"""

# rclone crypt 이름 암호화 기준 기본값
DEFAULT_MAX_LEN = 140


class ValidationError(Exception):
    """입력 검증 실패 시 발생하는 예외."""

    pass


def validate_max_len(value: object) -> int:
    """
    이름 최대 바이트 수 검증.

    Args:
        value: 검증할 값 (int 또는 정수 문자열)

    Returns:
        검증된 양의 정수

    Raises:
        ValidationError: 정수가 아니거나 1 미만
    """
    if isinstance(value, bool):
        raise ValidationError(f"max_len must be an integer, got bool: {value!r}")

    if isinstance(value, int):
        max_len = value
    elif isinstance(value, str):
        try:
            max_len = int(value.strip())
        except ValueError as e:
            raise ValidationError(f"max_len is not a valid integer: {value!r}") from e
    else:
        raise ValidationError(
            f"max_len must be an integer, got {type(value).__name__}: {value!r}"
        )

    if max_len < 1:
        raise ValidationError(f"max_len must be >= 1: {max_len}")

    return max_len
