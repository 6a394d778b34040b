"""Tar and zip packaging steps.

A single source file is archived under its own name. A source directory is
walked (hidden entries excluded); files whose path relative to it matches one
of ``include`` (all files when empty) and none of ``exclude`` are written under
that relative path.
"""

from __future__ import annotations

import asyncio
import tarfile
import zipfile
from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.flow.action import Action
from bf.flow.errors import ActionError, ActionFailed, ArgumentMissing, FileOpFailed
from bf.platform.detection import Platform
from bf.platform.files import WalkEntry, walk
from bf.platform.patterns import compile_pattern

from .argument import Argument, argument_key, resolve_argument

TAR_MODES = {"": "w", "gz": "w:gz", "bz2": "w:bz2", "xz": "w:xz"}


def _selected(entries: list[WalkEntry], include: Sequence[str], exclude: Sequence[str]) -> list[WalkEntry]:
    includes = [compile_pattern(p) for p in include]
    excludes = [compile_pattern(p) for p in exclude]
    selected = []
    for entry in entries:
        if entry.is_dir:
            continue
        if includes and not any(r.fullmatch(entry.rel) for r in includes):
            continue
        if any(r.fullmatch(entry.rel) for r in excludes):
            continue
        selected.append(entry)
    return selected


class _ArchiveAction(Action):
    def __init__(
        self,
        source_dir: Argument,
        archive_path: Argument,
        *,
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
        hint: str = "-",
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.source_dir = source_dir
        self.archive_path = archive_path
        self.include = tuple(include)
        self.exclude = tuple(exclude)

    @classmethod
    def is_supported(cls, platform: Platform) -> bool:
        return platform.is_desktop

    @abstractmethod
    def _write(self, archive: Path, entries: list[WalkEntry]) -> None:
        """Write ``entries`` into ``archive``; runs in a worker thread."""

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        source = resolve_argument(context, self.source_dir)
        if source is None:
            return Err(ArgumentMissing(action=self.name, key=argument_key(self.source_dir)))
        target = resolve_argument(context, self.archive_path)
        if target is None:
            return Err(ArgumentMissing(action=self.name, key=argument_key(self.archive_path)))

        source_path = Path(source)
        if source_path.is_file():
            entries = [WalkEntry(source_path, source_path.name, False)]
        else:
            walked = await asyncio.to_thread(walk, source_path)
            if isinstance(walked, Err):
                return Err(FileOpFailed(action=self.name, error=walked.error))
            entries = _selected(walked.value, self.include, self.exclude)

        archive = Path(target)
        try:
            archive.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(self._write, archive, entries)
        except (OSError, tarfile.TarError, zipfile.BadZipFile) as e:
            return Err(ActionFailed(action=self.name, message=f"cannot write {archive}: {e}"))

        context.console.print(f"Archived {len(entries)} files into {archive}")
        return Ok(None)


class TarAction(_ArchiveAction):
    name = "tar"
    description = "Packs a directory into a tar archive"

    def __init__(
        self,
        source_dir: Argument,
        archive_path: Argument,
        *,
        compression: str = "gz",
        include: Sequence[str] = (),
        exclude: Sequence[str] = (),
        hint: str = "-",
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        if compression not in TAR_MODES:
            raise ValueError(f"Unknown tar compression: {compression!r}")
        super().__init__(
            source_dir,
            archive_path,
            include=include,
            exclude=exclude,
            hint=hint,
            mutual_exclusivity_key=mutual_exclusivity_key,
        )
        self.compression = compression

    def _write(self, archive: Path, entries: list[WalkEntry]) -> None:
        with tarfile.open(archive, TAR_MODES[self.compression]) as tar:
            for entry in entries:
                tar.add(entry.path, arcname=entry.rel, recursive=False)


class ZipAction(_ArchiveAction):
    name = "zip"
    description = "Packs a directory into a zip archive"

    def _write(self, archive: Path, entries: list[WalkEntry]) -> None:
        with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False) as zf:
            for entry in entries:
                zf.write(entry.path, arcname=entry.rel)
