"""이름 절단 엔진 테스트."""

import os
from pathlib import Path

import pytest

from namecrop.core import truncator
from namecrop.core.truncator import (
    TruncationError,
    split_extension,
    truncate_name,
    truncate_path,
)

HANGUL = "가"  # UTF-8 3바이트


class TestSplitExtension:
    """확장자 분리 테스트."""

    def test_simple_extension(self) -> None:
        """일반 확장자."""
        assert split_extension(b"file.txt") == (b"file", b"txt")

    def test_only_last_suffix(self) -> None:
        """이중 확장자는 마지막 것만."""
        assert split_extension(b"archive.tar.gz") == (b"archive.tar", b"gz")

    def test_no_dot(self) -> None:
        """점이 없으면 확장자 없음."""
        assert split_extension(b"README") == (b"README", None)

    def test_leading_dot_only(self) -> None:
        """맨 앞 점만 있는 숨김 파일은 확장자 없음."""
        assert split_extension(b".bashrc") == (b".bashrc", None)

    def test_hidden_file_with_extension(self) -> None:
        """숨김 파일도 뒤쪽 점은 확장자."""
        assert split_extension(b".config.toml") == (b".config", b"toml")

    def test_trailing_dot(self) -> None:
        """점으로 끝나면 빈 확장자."""
        assert split_extension(b"name.") == (b"name", b"")


class TestTruncateNameIdentity:
    """한도 이하 이름은 그대로."""

    @pytest.mark.parametrize(
        "name",
        [b"short.txt", b"x" * 140, b"y" * 136 + b".txt", b"", "가".encode() * 46],
    )
    def test_within_limit_returns_same_object(self, name: bytes) -> None:
        """한도 이하면 입력 객체 그대로 반환."""
        assert truncate_name(name, 140) is name

    def test_invalid_max_len(self) -> None:
        """max_len < 1 은 ValueError."""
        with pytest.raises(ValueError):
            truncate_name(b"abc", 0)


class TestTruncateNameAscii:
    """ASCII 이름 절단."""

    def test_extension_boundary_scenario(self) -> None:
        """145자 + .txt, 한도 140 → 정확히 140바이트, .txt 보존."""
        name = b"a" * 145 + b".txt"

        result = truncate_name(name, 140)

        assert len(result) == 140
        assert result.endswith(b".txt")
        assert result[:-4] == b"a" * 136

    def test_no_extension_plain_cut(self) -> None:
        """점 없는 200바이트 이름 → 140바이트 접두어."""
        name = b"x" * 200

        result = truncate_name(name, 140)

        assert result == b"x" * 140
        assert b"." not in result

    def test_hidden_file_no_extension(self) -> None:
        """맨 앞 점은 확장자로 취급하지 않음."""
        name = b"." + b"h" * 200

        result = truncate_name(name, 140)

        assert result == b"." + b"h" * 139

    def test_compound_extension_keeps_last_only(self) -> None:
        """.tar.gz 는 .gz 만 보존."""
        name = b"b" * 200 + b".tar.gz"

        result = truncate_name(name, 140)

        assert result == b"b" * 137 + b".gz"

    def test_trailing_dot_preserved(self) -> None:
        """점으로 끝나는 이름은 끝의 점 유지."""
        name = b"t" * 200 + b"."

        result = truncate_name(name, 140)

        assert result == b"t" * 139 + b"."

    def test_extension_longer_than_limit_saturates(self) -> None:
        """확장자가 한도보다 길면 stem이 비고 결과가 한도를 넘을 수 있음."""
        name = b"stem." + b"e" * 20

        result = truncate_name(name, 10)

        assert result == b"." + b"e" * 20
        assert len(result) > 10
        assert len(result) < len(name)


class TestTruncateNameMultibyte:
    """멀티바이트 UTF-8 이름 절단."""

    def test_cut_snaps_to_character_boundary(self) -> None:
        """3바이트 문자 반복 → 140바이트 미만의 유효한 텍스트."""
        name = (HANGUL * 50).encode()

        result = truncate_name(name, 140)

        assert result.decode("utf-8") == HANGUL * 46
        assert len(result) == 138

    def test_four_byte_characters(self) -> None:
        """4바이트 이모지도 문자 경계에서 자름."""
        name = ("😀" * 40).encode()

        result = truncate_name(name, 141)

        assert result.decode("utf-8") == "😀" * 35

    def test_stem_snapped_after_extension_reserve(self) -> None:
        """확장자 자리 확보 후에도 stem 끝에 잘린 문자가 없음."""
        name = (HANGUL * 50 + ".txt").encode()

        result = truncate_name(name, 140)

        text = result.decode("utf-8")
        assert text == HANGUL * 44 + ".txt"
        assert len(result) <= 140

    def test_mixed_ascii_and_multibyte_prefix(self) -> None:
        """결과는 원본의 문자 단위 접두어."""
        original = "보고서_" * 30 + "최종"
        name = original.encode()

        result = truncate_name(name, 100)

        text = result.decode("utf-8")
        assert original.startswith(text)
        assert len(result) <= 100


class TestTruncateNameInvalidUtf8:
    """유효하지 않은 UTF-8 이름은 raw 바이트 절단."""

    def test_raw_cut_without_boundary_correction(self) -> None:
        """원본이 깨진 텍스트면 문자 경계 보정 없이 자름."""
        name = b"\xff" + HANGUL.encode() * 60

        result = truncate_name(name, 140)

        assert result == name[:140]
        with pytest.raises(UnicodeDecodeError):
            result.decode("utf-8")

    def test_raw_cut_keeps_extension(self) -> None:
        """깨진 이름도 확장자는 보존."""
        name = b"\xfe" * 200 + b".bin"

        result = truncate_name(name, 140)

        assert result == b"\xfe" * 136 + b".bin"


class TestTruncateNameInvariant:
    """내부 길이 불변식 검사."""

    def test_longer_result_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """계산 결과가 원본보다 길면 TruncationError."""

        def broken_split(name: bytes) -> tuple[bytes, bytes | None]:
            return name, b"e" * 1000

        monkeypatch.setattr(truncator, "split_extension", broken_split)

        with pytest.raises(TruncationError):
            truncate_name(b"x" * 200, 140)


class TestTruncatePath:
    """경로 단위 절단."""

    def test_unchanged_returns_same_object(self) -> None:
        """짧은 이름은 같은 Path 객체 반환."""
        path = Path("/data/photos/short.jpg")

        assert truncate_path(path, 140) is path

    def test_parent_preserved(self) -> None:
        """부모 디렉토리는 그대로, 이름만 절단."""
        long_dir = "d" * 300
        path = Path("/data") / long_dir / ("a" * 145 + ".txt")

        result = truncate_path(path, 140)

        assert result.parent == path.parent
        assert result.name == "a" * 136 + ".txt"

    def test_relative_path(self) -> None:
        """상대 경로."""
        path = Path("sub") / ("z" * 200)

        result = truncate_path(path, 140)

        assert result == Path("sub") / ("z" * 140)

    def test_bare_name(self) -> None:
        """부모 없는 이름."""
        result = truncate_path(Path("q" * 150 + ".md"), 140)

        assert result == Path("q" * 137 + ".md")

    @pytest.mark.parametrize("path", [Path("/"), Path("."), Path("")])
    def test_no_name_component(self, path: Path) -> None:
        """이름 없는 경로(루트 등)는 그대로."""
        assert truncate_path(path, 1) is path

    def test_multibyte_name(self) -> None:
        """한글 이름 경로."""
        path = Path("/tmp") / (HANGUL * 60 + ".mp4")

        result = truncate_path(path, 140)

        assert result.name == HANGUL * 44 + ".mp4"
        assert len(result.name.encode()) <= 140

    def test_non_utf8_name(self) -> None:
        """surrogateescape로 표현된 깨진 이름도 바이트 그대로 자름."""
        raw_name = b"\xff" * 150
        path = Path("/tmp") / os.fsdecode(raw_name)

        result = truncate_path(path, 140)

        assert os.fsencode(result.name) == b"\xff" * 140
        assert result.parent == Path("/tmp")


class TestIdempotence:
    """절단 결과에 다시 적용해도 변화 없음."""

    @pytest.mark.parametrize(
        "name",
        [
            "a" * 145 + ".txt",
            "x" * 200,
            HANGUL * 50,
            HANGUL * 50 + ".txt",
            "보고서_" * 30 + ".pdf",
            "b" * 200 + ".tar.gz",
            "." + "h" * 200,
        ],
    )
    def test_truncate_twice(self, name: str) -> None:
        """두 번 적용한 결과는 한 번 적용한 결과와 같음."""
        path = Path("/data") / name

        once = truncate_path(path, 140)
        twice = truncate_path(once, 140)

        assert twice == once
        assert len(once.name.encode()) <= 140

    @pytest.mark.parametrize("ext", ["txt", "jpeg", "md", "x", "flac"])
    def test_extension_preserved(self, ext: str) -> None:
        """한도보다 짧은 확장자는 바이트 그대로 보존."""
        path = Path("c" * 300 + "." + ext)

        result = truncate_path(path, 140)

        assert result.suffix == "." + ext
        assert result.name.startswith("c")
