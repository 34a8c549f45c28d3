"""파일명 바이트 길이 절단 엔진.

경로의 마지막 구성요소(이름)만 바이트 단위로 잘라 ``max_len`` 이하로 맞춘다.
I/O는 전혀 수행하지 않는 순수 함수 모음이다.

절단 규칙::

    1. 이름이 이미 max_len 이하 → 그대로 반환 (identity)
    2. 앞에서 max_len 바이트만 남김
    3. 이름 전체가 유효한 UTF-8이면 잘린 문자(partial code point)가 남지 않도록
       마지막 완전한 문자 경계로 되돌림
    4. 확장자가 있으면 ``.ext`` 만큼 자리를 비우고 원래 확장자를 다시 붙임

주의:
    ``.tar.gz`` 같은 이중 확장자는 마지막 ``.gz`` 만 보존된다.
    확장자 자체가 한도보다 길면 stem 부분이 0바이트로 포화(saturate)되고
    결과가 한도를 넘을 수 있다. 확장자는 절대 버리지 않는다.
"""

import os
from pathlib import Path

TEXT_ENCODING = "utf-8"
EXTENSION_SEPARATOR = b"."


class TruncationError(Exception):
    """절단 길이 계산의 내부 불변식이 깨졌을 때 발생하는 예외."""

    pass


def _is_valid_text(raw: bytes) -> bool:
    """바이트열이 유효한 UTF-8 텍스트인지 확인."""
    try:
        raw.decode(TEXT_ENCODING)
    except UnicodeDecodeError:
        return False
    return True


def _cut(raw: bytes, limit: int, *, snap: bool) -> bytes:
    """앞에서 ``limit`` 바이트를 자른다.

    ``snap`` 이 True이면 디코더가 유효하다고 판단한 지점(valid-up-to)까지
    되돌려 끝에 잘린 문자가 남지 않게 한다.
    """
    cut = raw[:limit]
    if not snap:
        return cut
    try:
        cut.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        # 원본 전체가 유효하므로 오류는 끝의 불완전한 시퀀스에서만 난다
        return cut[: e.start]
    return cut


def split_extension(name: bytes) -> tuple[bytes, bytes | None]:
    """이름을 stem과 확장자로 나눈다.

    마지막 ``.`` 뒤를 확장자로 본다. 점이 없거나 유일한 점이 맨 앞에 있는
    경우(``.bashrc``)는 확장자가 없다. ``name.`` 처럼 점으로 끝나면 빈
    확장자(``b""``)를 반환한다.

    Args:
        name: 경로의 마지막 구성요소 (raw bytes)

    Returns:
        ``(stem, extension)`` 튜플. 확장자가 없으면 ``(name, None)``.
    """
    stem, sep, ext = name.rpartition(EXTENSION_SEPARATOR)
    if not sep or not stem:
        return name, None
    return stem, ext


def truncate_name(name: bytes, max_len: int) -> bytes:
    """
    이름 하나를 ``max_len`` 바이트 이하로 절단.

    Args:
        name: 원본 이름 (raw bytes, 인코딩 유효성 보장 없음)
        max_len: 허용 최대 바이트 수 (1 이상)

    Returns:
        새 이름. 이미 충분히 짧으면 ``name`` 객체 그대로.

    Raises:
        ValueError: ``max_len`` 이 1 미만
        TruncationError: 결과가 원본보다 길어지는 등 길이 계산 오류
    """
    if max_len < 1:
        raise ValueError(f"max_len must be positive: {max_len}")

    if len(name) <= max_len:
        return name

    # 유효성 검사는 한 번만, 이후 두 경로(문자 경계 / raw 바이트)로 분기
    snap = _is_valid_text(name)
    cut = _cut(name, max_len, snap=snap)

    stem, ext = split_extension(name)
    if ext is None:
        new_name = cut
    else:
        # 확장자 + 점 자리를 확보한다. 음수 예산은 0으로 포화.
        stem_budget = max(len(cut) - len(ext) - 1, 0)
        new_name = _cut(stem, stem_budget, snap=snap) + EXTENSION_SEPARATOR + ext

    if len(new_name) > len(name):
        raise TruncationError(
            f"Truncated name is longer than original ({len(new_name)} > {len(name)} bytes)"
        )
    return new_name


def truncate_path(path: Path, max_len: int) -> Path:
    """
    경로의 마지막 구성요소를 ``max_len`` 바이트 이하로 줄인 새 경로 반환.

    부모 디렉토리 부분은 바이트 그대로 보존한다. 파일시스템에 접근하지
    않으므로 존재하지 않는 경로도 계산할 수 있다.

    Args:
        path: 대상 경로
        max_len: 이름의 최대 바이트 수

    Returns:
        새 경로. 변경이 없으면 ``path`` 객체 그대로.

    Raises:
        ValueError: ``max_len`` 이 1 미만
        TruncationError: 이름이 경로 끝과 일치하지 않는 등 내부 불변식 위반
    """
    name = os.fsencode(path.name)
    if not name:
        return path

    new_name = truncate_name(name, max_len)
    if new_name == name:
        return path

    raw_path = os.fsencode(path)
    if not raw_path.endswith(name):
        raise TruncationError(f"Name is not the last component of path: {path}")

    parent = raw_path[: len(raw_path) - len(name)]
    return Path(os.fsdecode(parent + new_name))
