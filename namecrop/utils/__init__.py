"""공용 유틸리티 함수.

프로젝트 전반에서 사용되는 작은 헬퍼 함수들을 모아둔다.
"""

import os
from pathlib import Path


def display_name(path: Path | str | bytes) -> str:
    """경로의 이름 부분을 출력 가능한 문자열로 변환한다.

    파일시스템 이름은 유효한 UTF-8이 아닐 수 있다. 디코딩에 실패한 바이트는
    ``surrogateescape`` 로 보존되어 있어 그대로 ``print`` 하면
    ``UnicodeEncodeError`` 가 나므로 ``\\xNN`` 형태로 바꿔 표시한다.

    Args:
        path: 경로 또는 이름 (``Path``, ``str``, raw ``bytes``).

    Returns:
        출력용 이름 문자열. 예: ``"caf\\xe9.txt"``.
    """
    raw = os.fsencode(path)
    name = os.path.basename(raw.rstrip(b"/")) or raw
    return name.decode("utf-8", errors="backslashreplace")
