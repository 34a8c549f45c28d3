"""pytest 설정 및 공통 fixture."""

from collections.abc import Generator
from pathlib import Path

import pytest

from namecrop.config import ENV_DRY_RUN, ENV_MAX_LEN


@pytest.fixture(autouse=True)
def isolate_environment(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[Path]:
    """
    테스트용 설정 격리.

    - HOME을 임시 디렉토리로 바꿔 사용자의 ``~/.namecrop/config.toml`` 을 읽지 않음
    - ``NAMECROP_*`` 환경변수 제거 (``apply_config_to_env`` 주입분 포함, 테스트 후 복원)
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for env_key in (ENV_MAX_LEN, ENV_DRY_RUN):
        # setenv 먼저: 원래 값이 없어도 테스트 후 삭제되도록 기록
        monkeypatch.setenv(env_key, "")
        monkeypatch.delenv(env_key)
    yield home


@pytest.fixture
def long_tree(tmp_path: Path) -> Path:
    """
    긴 이름이 섞인 임시 디렉토리 트리.

    구조::

        tree/
          short.txt
          <a*200>.txt
          <d*150>/
            <b*160>
            keep.md
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "short.txt").write_text("short")
    (root / ("a" * 200 + ".txt")).write_text("long file")
    long_dir = root / ("d" * 150)
    long_dir.mkdir()
    (long_dir / ("b" * 160)).write_text("nested")
    (long_dir / "keep.md").write_text("keep")
    return root
