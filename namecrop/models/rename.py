"""이름 절단 작업 결과 도메인 모델.

클래스:
    - :class:`RenameChange`: 한 항목의 원래 경로 → 새 경로
    - :class:`RenameSummary`: 한 번의 실행(run) 전체 집계
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class RenameChange:
    """이름 변경 한 건.

    Attributes:
        source: 변경 전 경로
        target: 변경 후 경로 (같은 부모 디렉토리)
    """

    source: Path
    target: Path


@dataclass
class RenameSummary:
    """``rename_tree`` 실행 결과 집계.

    Attributes:
        scanned: 방문한 항목 수
        renamed: 이름이 바뀐 항목 수 (dry-run이면 바뀔 예정인 항목 수)
        failed: 절단 계산 또는 rename에 실패한 항목 수
        dry_run: dry-run 모드 여부
        changes: 변경(예정) 목록
    """

    scanned: int = 0
    renamed: int = 0
    failed: int = 0
    dry_run: bool = False
    changes: list[RenameChange] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        """실패한 항목이 하나라도 있는지 여부."""
        return self.failed > 0

    def record_change(self, source: Path, target: Path) -> None:
        """변경 한 건 기록."""
        self.changes.append(RenameChange(source=source, target=target))
        self.renamed += 1
