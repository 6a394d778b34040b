"""Pattern-driven copy and remove.

Both operations resolve their pattern with ``parse_pattern``, walk the base
path (hidden entries are skipped, entries are visited in sorted order) and act
on every entry whose relative path matches. Finding nothing is not an error;
the number of affected entries is returned.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bf.core.result import Err, Ok, Result

from .file_errors import (
    BasePathNotFound,
    CopyFailed,
    DirectoryCreationFailed,
    EnumerationFailed,
    FileOpError,
    RemovalFailed,
)
from .patterns import WildcardMode, compile_pattern, destination_relative_path, parse_pattern

if TYPE_CHECKING:
    from bf.output.console import ConsoleProtocol

__all__ = ["WalkEntry", "recursive_copy", "recursive_remove", "walk"]


@dataclass(frozen=True, slots=True)
class WalkEntry:
    path: Path
    rel: str
    is_dir: bool

    @property
    def depth(self) -> int:
        return self.rel.count("/") + 1


def walk(base: Path) -> Result[list[WalkEntry], EnumerationFailed]:
    """List every non-hidden entry below ``base``, sorted by relative path."""
    errors: list[OSError] = []
    entries: list[WalkEntry] = []

    for root, dirnames, filenames in os.walk(base, onerror=errors.append):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        root_path = Path(root)
        rel_root = root_path.relative_to(base).as_posix()
        prefix = "" if rel_root == "." else f"{rel_root}/"
        for name in dirnames:
            entries.append(WalkEntry(root_path / name, prefix + name, True))
        for name in filenames:
            if name.startswith("."):
                continue
            entries.append(WalkEntry(root_path / name, prefix + name, False))

    if errors:
        err = errors[0]
        return Err(EnumerationFailed(path=str(err.filename or base), reason=err.strerror or str(err)))
    entries.sort(key=lambda e: e.rel)
    return Ok(entries)


def _ensure_dir(path: Path) -> Result[None, DirectoryCreationFailed]:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(DirectoryCreationFailed(path=str(path), reason=e.strerror or str(e)))
    return Ok(None)


def _remove_entry(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _copy_file(source: Path, destination: Path) -> Result[None, CopyFailed]:
    try:
        if destination.exists() or destination.is_symlink():
            _remove_entry(destination)
        shutil.copy2(source, destination)
    except OSError as e:
        return Err(CopyFailed(path=str(source), reason=e.strerror or str(e)))
    return Ok(None)


def recursive_copy(
    source_pattern: str,
    destination_dir: Path,
    *,
    wildcard_mode: WildcardMode = WildcardMode.FIRST,
    console: ConsoleProtocol | None = None,
) -> Result[int, FileOpError]:
    """Copy every file matching ``source_pattern`` into ``destination_dir``.

    A base path that is a plain file is copied directly under its own name.
    Otherwise matched files keep the part of their path selected by
    ``wildcard_mode``. Existing destination entries are overwritten.

    Returns:
        Ok(number of copied files), or Err(FileOpError).
    """
    parsed = parse_pattern(source_pattern)
    if isinstance(parsed, Err):
        return parsed
    base_path, match_pattern = parsed.value

    base = Path(base_path)
    if not base.exists():
        if console is not None:
            console.warning(f"Source path {base_path} does not exist, nothing copied")
        return Err(BasePathNotFound(base_path=base_path))

    created = _ensure_dir(destination_dir)
    if isinstance(created, Err):
        return created

    if not base.is_dir():
        copied = _copy_file(base, destination_dir / base.name)
        if isinstance(copied, Err):
            return copied
        if console is not None:
            console.print(f"Copied: {base.name}")
            console.print("Copy finished. 1 files copied.")
        return Ok(1)

    listing = walk(base)
    if isinstance(listing, Err):
        return listing

    matcher = compile_pattern(match_pattern)
    count = 0
    for entry in listing.value:
        if entry.is_dir or matcher.fullmatch(entry.rel) is None:
            continue

        rel_dest = destination_relative_path(entry.rel, match_pattern, wildcard_mode)
        target = destination_dir / rel_dest
        created = _ensure_dir(target.parent)
        if isinstance(created, Err):
            return created
        copied = _copy_file(entry.path, target)
        if isinstance(copied, Err):
            return copied

        count += 1
        if console is not None:
            console.print(f"Copied: {rel_dest}")

    if console is not None:
        console.print(f"Copy finished. {count} files copied.")
    return Ok(count)


def recursive_remove(pattern: str, *, console: ConsoleProtocol | None = None) -> Result[int, FileOpError]:
    """Remove every file and directory matching ``pattern``.

    A pattern without wildcards removes that single file or directory tree.
    Matches are deleted deepest first, so children go before the directories
    that hold them.

    Returns:
        Ok(number of removed entries), or Err(FileOpError).
    """
    parsed = parse_pattern(pattern)
    if isinstance(parsed, Err):
        return parsed
    base_path, match_pattern = parsed.value

    base = Path(base_path)
    if not base.exists() and not base.is_symlink():
        if console is not None:
            console.warning(f"Source path {base_path} does not exist, nothing removed")
        return Err(BasePathNotFound(base_path=base_path))

    if base_path == pattern:
        try:
            _remove_entry(base)
        except OSError as e:
            return Err(RemovalFailed(path=str(base), reason=e.strerror or str(e)))
        if console is not None:
            console.print(f"Removed: {base.name}")
            console.print("Remove finished. 1 items removed.")
        return Ok(1)

    listing = walk(base)
    if isinstance(listing, Err):
        return listing

    matcher = compile_pattern(match_pattern)
    matches = [e for e in listing.value if matcher.fullmatch(e.rel) is not None]
    # Stable sort keeps the walk order among entries of equal depth.
    matches.sort(key=lambda e: e.depth, reverse=True)

    count = 0
    for entry in matches:
        if not entry.path.exists() and not entry.path.is_symlink():
            continue
        try:
            _remove_entry(entry.path)
        except OSError as e:
            return Err(RemovalFailed(path=str(entry.path), reason=e.strerror or str(e)))
        count += 1
        if console is not None:
            console.print(f"Removed: {entry.rel}")

    if console is not None:
        console.print(f"Remove finished. {count} items removed.")
    return Ok(count)
