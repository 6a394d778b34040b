"""Tests for bf.platform.files module."""

from __future__ import annotations

from pathlib import Path

from bf.core.result import Err, Ok
from bf.output.console import MockConsole
from bf.platform.file_errors import BasePathNotFound, InvalidPattern
from bf.platform.files import recursive_copy, recursive_remove, walk
from bf.platform.patterns import WildcardMode


def _touch(path: Path, content: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestWalk:
    def test_skips_hidden_and_sorts(self, tmp_path: Path) -> None:
        _touch(tmp_path / "b.txt")
        _touch(tmp_path / "a" / "c.txt")
        _touch(tmp_path / ".hidden" / "d.txt")
        _touch(tmp_path / ".e.txt")

        result = walk(tmp_path)

        assert isinstance(result, Ok)
        assert [e.rel for e in result.value] == ["a", "a/c.txt", "b.txt"]
        assert [e.depth for e in result.value] == [1, 2, 1]

    def test_missing_base(self, tmp_path: Path) -> None:
        assert isinstance(walk(tmp_path / "missing"), Err)


class TestRecursiveCopy:
    def test_first_mode_keeps_structure(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        _touch(src / "a" / "b" / "c" / "file1.txt")
        _touch(src / "a" / "b" / "c" / "file2.md")
        dest = tmp_path / "dest"

        result = recursive_copy(f"{src.as_posix()}/*/*/c/*.txt", dest)

        assert result == Ok(1)
        assert (dest / "a" / "b" / "c" / "file1.txt").is_file()
        assert not (dest / "a" / "b" / "c" / "file2.md").exists()

    def test_last_mode_flattens(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        _touch(src / "a" / "b" / "c" / "file1.txt")
        dest = tmp_path / "dest"

        result = recursive_copy(f"{src.as_posix()}/*/*/c/*.txt", dest, wildcard_mode=WildcardMode.LAST)

        assert result == Ok(1)
        assert (dest / "file1.txt").is_file()

    def test_single_file(self, tmp_path: Path) -> None:
        source = _touch(tmp_path / "one.txt", "payload")
        dest = tmp_path / "dest"

        assert recursive_copy(source.as_posix(), dest) == Ok(1)
        assert (dest / "one.txt").read_text(encoding="utf-8") == "payload"

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        _touch(tmp_path / "src" / "a.txt", "new")
        _touch(tmp_path / "dest" / "a.txt", "old")

        recursive_copy(f"{(tmp_path / 'src').as_posix()}/*.txt", tmp_path / "dest")

        assert (tmp_path / "dest" / "a.txt").read_text(encoding="utf-8") == "new"

    def test_zero_matches_is_not_an_error(self, tmp_path: Path) -> None:
        _touch(tmp_path / "src" / "a.md")
        assert recursive_copy(f"{(tmp_path / 'src').as_posix()}/*.txt", tmp_path / "dest") == Ok(0)

    def test_missing_base(self, tmp_path: Path) -> None:
        result = recursive_copy(f"{(tmp_path / 'nope').as_posix()}/*.txt", tmp_path / "dest")
        assert isinstance(result, Err)
        assert isinstance(result.error, BasePathNotFound)

    def test_invalid_pattern(self, tmp_path: Path) -> None:
        result = recursive_copy("*.txt", tmp_path / "dest")
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidPattern)

    def test_reports_progress(self, tmp_path: Path) -> None:
        _touch(tmp_path / "src" / "a.txt")
        console = MockConsole()

        recursive_copy(f"{(tmp_path / 'src').as_posix()}/*.txt", tmp_path / "dest", console=console)

        assert console.messages == ["Copied: a.txt", "Copy finished. 1 files copied."]


class TestRecursiveRemove:
    def test_removes_children_before_directory(self, tmp_path: Path) -> None:
        base = tmp_path / "build"
        _touch(base / "cache" / "a.o")
        _touch(base / "cache" / "deep" / "b.o")
        _touch(base / "keep.txt")

        result = recursive_remove(f"{base.as_posix()}/cache**")

        assert result == Ok(4)
        assert not (base / "cache").exists()
        assert (base / "keep.txt").is_file()

    def test_without_wildcard_removes_tree(self, tmp_path: Path) -> None:
        base = tmp_path / "out"
        _touch(base / "x" / "y.txt")

        assert recursive_remove(base.as_posix()) == Ok(1)
        assert not base.exists()

    def test_pattern_only_removes_matches(self, tmp_path: Path) -> None:
        base = tmp_path / "logs"
        _touch(base / "a.log")
        _touch(base / "b.txt")

        assert recursive_remove(f"{base.as_posix()}/*.log") == Ok(1)
        assert not (base / "a.log").exists()
        assert (base / "b.txt").exists()

    def test_missing_base(self, tmp_path: Path) -> None:
        result = recursive_remove(f"{(tmp_path / 'missing').as_posix()}/*")
        assert isinstance(result, Err)
        assert isinstance(result.error, BasePathNotFound)
