"""이름 절단 대상 스캐너.

지정된 파일·디렉토리 목록을 재귀 탐색하여 이름을 검사할 모든 항목의
경로를 **rename 전에** 한꺼번에 수집(snapshot)한다.

방문 순서:
    하위 항목이 항상 상위 디렉토리보다 먼저 나오는 bottom-up(post-order).
    디렉토리 이름을 바꿔도 아직 처리하지 않은 경로가 무효화되지 않는다.

오류 처리:
    존재하지 않는 대상, 읽을 수 없는 디렉토리는 로그만 남기고 건너뛴다.
    하나의 실패가 전체 스캔을 중단시키지 않는다.

심볼릭 링크:
    명령행 대상이 디렉토리 링크이면 따라 들어간다. 탐색 중 만난 디렉토리
    링크는 목록에만 넣고 따라 들어가지 않는다.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def scan_entries(targets: list[Path]) -> list[Path]:
    """
    이름 검사 대상 항목 스캔.

    대상끼리 겹치면(``dir`` 과 ``dir/child``) 같은 항목은 처음 나온 위치에만
    남긴다. 하위 항목이 상위 디렉토리보다 먼저 나오는 순서는 그대로 유지된다.

    Args:
        targets: 스캔할 대상 (파일 또는 디렉토리)

    Returns:
        bottom-up 순서의 경로 리스트. 각 대상 자신은 그 하위 항목 뒤에 온다.
    """
    entries: list[Path] = []
    seen: set[str] = set()

    def add(path: Path) -> None:
        key = os.path.abspath(path)
        if key in seen:
            logger.debug("이미 수집한 항목 건너뜀: %s", path)
            return
        seen.add(key)
        entries.append(path)

    for target in targets:
        if not os.path.lexists(target):
            logger.error("Error getting entry: %s (not found)", target)
            continue

        if target.is_dir():
            # Case 1: 디렉토리 (재귀, 하위 먼저). 디렉토리 링크도 포함
            for entry in _scan_directory(target):
                add(entry)
        # Case 2: 파일·심볼릭 링크 (대상 자신만)
        add(target)

    logger.debug("스캔 완료: %d개 항목", len(entries))
    return entries


def _scan_directory(directory: Path) -> list[Path]:
    """디렉토리 재귀 스캔 (bottom-up, 디렉토리 자신 제외)."""
    found: list[Path] = []

    def on_error(exc: OSError) -> None:
        logger.error("Error getting entry: %s", exc)

    # 하위의 심볼릭 링크 디렉토리는 목록에는 포함하되 따라 들어가지 않는다
    for dirpath, dirnames, filenames in os.walk(directory, topdown=False, onerror=on_error):
        parent = Path(dirpath)
        for filename in sorted(filenames):
            found.append(parent / filename)
        for dirname in sorted(dirnames):
            found.append(parent / dirname)

    return found
