"""이름 절단 적용기.

:func:`~namecrop.core.scanner.scan_entries` 로 수집한 항목마다
:func:`~namecrop.core.truncator.truncate_path` 를 호출하고,
이름이 바뀌면 표준 출력으로 알린 뒤 실제 rename을 수행한다.

흐름::

    scan_entries → truncate_path → print → Path.rename (dry-run이면 생략)

항목 단위 오류(절단 계산 실패, rename 실패, 출력 인코딩 실패)는 로그로 남기고
다음 항목으로 넘어간다. 전체 실행을 중단시키지 않는다.
"""

import logging
import os
from pathlib import Path

from namecrop.core.scanner import scan_entries
from namecrop.core.truncator import TruncationError, truncate_path
from namecrop.models.rename import RenameSummary
from namecrop.utils import display_name

logger = logging.getLogger(__name__)


def rename_entry(path: Path, max_len: int, *, dry_run: bool = False) -> Path | None:
    """
    항목 하나의 이름을 절단.

    Args:
        path: 대상 경로
        max_len: 이름 최대 바이트 수
        dry_run: True이면 출력만 하고 파일시스템은 건드리지 않음

    Returns:
        새 경로. 이름이 이미 충분히 짧으면 None.

    Raises:
        TruncationError: 절단 길이 계산 오류
        FileExistsError: 새 이름의 항목이 이미 존재
        OSError: rename 실패 (권한, 장치 간 이동 등)
    """
    new_path = truncate_path(path, max_len)
    if new_path == path:
        return None

    print(f"Truncating name: {display_name(path)} → {display_name(new_path)}")
    if dry_run:
        return new_path

    # POSIX rename은 기존 파일을 조용히 덮어쓰므로 먼저 확인한다
    if os.path.lexists(new_path):
        raise FileExistsError(f"Target already exists: {new_path}")

    path.rename(new_path)
    logger.debug("renamed: %s -> %s", path, new_path)
    return new_path


def rename_tree(targets: list[Path], max_len: int, *, dry_run: bool = False) -> RenameSummary:
    """
    대상 경로들을 재귀적으로 돌며 긴 이름을 절단.

    Args:
        targets: 파일 또는 디렉토리 경로 리스트
        max_len: 이름 최대 바이트 수
        dry_run: True이면 변경 예정만 출력

    Returns:
        실행 결과 집계
    """
    summary = RenameSummary(dry_run=dry_run)

    for entry in scan_entries(targets):
        summary.scanned += 1
        try:
            new_path = rename_entry(entry, max_len, dry_run=dry_run)
        except TruncationError as e:
            logger.error("Error while truncating %s: %s", entry, e)
            summary.failed += 1
            continue
        except OSError as e:
            logger.error("Error while renaming %s: %s", entry, e)
            summary.failed += 1
            continue
        except UnicodeEncodeError as e:
            logger.error("Error while reporting %s: %s", entry, e)
            summary.failed += 1
            continue

        if new_path is not None:
            summary.record_change(entry, new_path)

    return summary
