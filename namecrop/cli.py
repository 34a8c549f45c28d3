"""namecrop CLI 진입점.

이름 바이트 길이가 한도를 넘는 파일·디렉토리를 찾아 마지막 구성요소만
잘라 rename한다. rclone crypt처럼 암호화된 이름 길이에 제한이 있는
원격 스토리지로 옮기기 전에 사용한다.

흐름::

    create_parser → load_config → validate_args → rename_tree → 요약 로그

주의:
    ``.tar.gz`` 같은 이중 확장자는 마지막 확장자만 보존된다.
"""

import argparse
import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from namecrop import __version__
from namecrop.config import (
    ENV_DRY_RUN,
    ENV_MAX_LEN,
    apply_config_to_env,
    get_default_dry_run,
    get_default_max_len,
    load_config,
)
from namecrop.core.renamer import rename_tree
from namecrop.models.rename import RenameSummary
from namecrop.utils.validators import ValidationError, validate_max_len

logger = logging.getLogger(__name__)


@dataclass
class ValidatedArgs:
    """검증된 CLI 인자.

    ``argparse.Namespace`` 를 타입 안전하게 변환한 데이터클래스.
    :func:`validate_args` 에서 생성된다.
    """

    targets: list[Path]
    max_len: int
    dry_run: bool


def _max_len_type(value: str) -> int:
    """``--max-len`` 인자 변환. 검증 실패는 argparse 오류로 보고한다."""
    try:
        return validate_max_len(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser() -> argparse.ArgumentParser:
    """
    CLI 파서 생성.

    Returns:
        argparse.ArgumentParser 인스턴스
    """
    parser = argparse.ArgumentParser(
        prog="namecrop",
        description=(
            "Rename files and directories to fit length limits.\n\n"
            "WARNING: Will not preserve secondary extensions like .tar.gz"
        ),
        epilog=(
            "예시:\n"
            "  namecrop ~/Sync/                # 140바이트 초과 이름 절단\n"
            "  namecrop -n ~/Sync/             # 변경 예정만 출력\n"
            "  namecrop --max-len 100 a.txt b/ # 한도 지정"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "targets",
        nargs="*",
        default=[],
        help="Paths to rename (recursively, if directories)",
    )

    parser.add_argument(
        "--max-len",
        type=_max_len_type,
        default=None,
        metavar="N",
        help=(
            "Length to truncate to, in bytes. "
            f"(기본: 140, rclone name encryption 기준. 환경변수: {ENV_MAX_LEN})"
        ),
    )

    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        default=None,
        help=f"Don't actually rename files. Just print. (환경변수: {ENV_DRY_RUN})",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="상세 로그 출력",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="설정 파일 경로 (기본: ~/.namecrop/config.toml)",
    )

    parser.add_argument(
        "--init-config",
        action="store_true",
        help="기본 설정 파일(config.toml) 템플릿 생성 후 종료",
    )

    return parser


def validate_args(args: argparse.Namespace) -> ValidatedArgs:
    """CLI 인자를 검증하고 :class:`ValidatedArgs` 로 변환한다.

    각 설정의 우선순위: **CLI 옵션 > 환경변수 > config.toml > 기본값**.
    ``get_default_*()`` 헬퍼가 환경변수·config.toml을 이미 반영하므로,
    여기서는 CLI 인자가 명시되었는지만 확인한다.

    대상 경로의 존재 여부는 검증하지 않는다. 없는 경로는 스캔 단계에서
    로그로 남기고 건너뛴다.

    Args:
        args: ``argparse`` 파싱 결과

    Returns:
        타입-안전하게 검증된 인자 데이터클래스

    Raises:
        ValidationError: max_len이 1 미만
    """
    targets = [Path(target) for target in args.targets]

    max_len = args.max_len if args.max_len is not None else get_default_max_len()
    max_len = validate_max_len(max_len)

    dry_run = args.dry_run if args.dry_run is not None else get_default_dry_run()

    return ValidatedArgs(targets=targets, max_len=max_len, dry_run=dry_run)


def setup_logging(verbose: bool = False) -> None:
    """
    로깅 설정.

    Args:
        verbose: 상세 로그 여부
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_output_streams() -> None:
    """표준 출력·에러가 인코딩할 수 없는 문자를 만나도 예외를 내지 않게 한다.

    latin-1 로케일 등에서 ``→`` 나 한글 이름을 출력하면 ``UnicodeEncodeError``
    로 전체 실행이 중단되므로 ``\\uXXXX`` 형태로 바꿔 출력한다.
    """
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="backslashreplace")


def cmd_init_config(config_path: Path | None = None) -> None:
    """
    --init-config 옵션 처리.

    기본 설정 파일(config.toml) 템플릿을 생성합니다. 이미 있으면 덮어쓰지 않는다.
    """
    from namecrop.config import generate_default_config, get_default_config_path

    config_path = config_path or get_default_config_path()

    if config_path.exists():
        print(f"이미 존재합니다: {config_path}")
        return

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    print(f"설정 파일 생성됨: {config_path}")


def _log_summary(summary: RenameSummary) -> None:
    """실행 결과 요약 로그."""
    if summary.dry_run:
        logger.info(
            "Dry run: %d개 항목 중 %d개 변경 예정 (실패 %d)",
            summary.scanned,
            summary.renamed,
            summary.failed,
        )
    else:
        logger.info(
            "완료: %d개 항목 중 %d개 이름 변경 (실패 %d)",
            summary.scanned,
            summary.renamed,
            summary.failed,
        )
    if summary.has_failures:
        logger.warning("%d개 항목 처리 실패. 위 오류 로그를 확인하세요.", summary.failed)


def main(argv: list[str] | None = None) -> None:
    """CLI 진입점.

    인자를 파싱하고 설정 파일을 로드한 뒤 :func:`rename_tree` 를 실행한다.
    항목 단위 실패는 종료 코드에 영향을 주지 않는다. 인자 오류만
    즉시 종료한다 (argparse: 2, 검증 오류: 1).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config) if args.config else None

    # --init-config 처리 (로깅/설정 로드 전)
    if args.init_config:
        cmd_init_config(config_path)
        return

    if not args.targets:
        parser.error("the following arguments are required: targets")

    configure_output_streams()
    setup_logging(args.verbose)

    # 설정 파일 로드 및 환경변수 적용
    config = load_config(config_path)
    apply_config_to_env(config)

    try:
        validated_args = validate_args(args)

        if validated_args.dry_run:
            logger.info("Dry run mode - no files will be renamed")

        summary = rename_tree(
            validated_args.targets,
            validated_args.max_len,
            dry_run=validated_args.dry_run,
        )
        _log_summary(summary)

    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("\nInterrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
