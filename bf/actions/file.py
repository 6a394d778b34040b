"""File operations as flow steps.

Copy and remove go through the wildcard pattern engine; relative paths are
taken from ``working_directory`` when one is given.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.flow.action import Action
from bf.flow.errors import ActionError, ActionFailed, ArgumentMissing, FileOpFailed
from bf.platform.detection import Platform
from bf.platform.files import recursive_copy, recursive_remove
from bf.platform.patterns import WildcardMode

from .argument import Argument, argument_key, resolve_argument


@dataclass(frozen=True, slots=True)
class MakeDirectory:
    path: Argument
    ensure_created: bool = True


@dataclass(frozen=True, slots=True)
class Copy:
    source: Argument
    destination: Argument
    wildcard_mode: WildcardMode = WildcardMode.FIRST


@dataclass(frozen=True, slots=True)
class Remove:
    pattern: Argument


type FileJob = MakeDirectory | Copy | Remove


class FileAction(Action):
    name = "file"
    description = "Creates directories, copies and removes files by pattern"

    def __init__(
        self,
        job: FileJob,
        *,
        working_directory: Path | None = None,
        verbose: bool = False,
        hint: str = "-",
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.job = job
        self.working_directory = working_directory
        self.verbose = verbose

    def _resolve(self, context: Context, argument: Argument) -> Result[str, ActionError]:
        value = resolve_argument(context, argument)
        if value is None:
            return Err(ArgumentMissing(action=self.name, key=argument_key(argument)))
        if self.working_directory is None or value.startswith("/") or Path(value).is_absolute():
            return Ok(value)
        return Ok(f"{self.working_directory.as_posix()}/{value}")

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        console = context.console if self.verbose else None
        match self.job:
            case MakeDirectory(path=path, ensure_created=ensure_created):
                resolved = self._resolve(context, path)
                if isinstance(resolved, Err):
                    return resolved
                try:
                    Path(resolved.value).mkdir(parents=ensure_created, exist_ok=ensure_created)
                except OSError as e:
                    return Err(ActionFailed(action=self.name, message=f"cannot create {resolved.value}: {e}"))
                return Ok(None)

            case Copy(source=source, destination=destination, wildcard_mode=mode):
                src = self._resolve(context, source)
                if isinstance(src, Err):
                    return src
                dst = self._resolve(context, destination)
                if isinstance(dst, Err):
                    return dst
                copied = await asyncio.to_thread(
                    recursive_copy, src.value, Path(dst.value), wildcard_mode=mode, console=console
                )
                if isinstance(copied, Err):
                    return Err(FileOpFailed(action=self.name, error=copied.error))
                return Ok(None)

            case Remove(pattern=pattern):
                resolved = self._resolve(context, pattern)
                if isinstance(resolved, Err):
                    return resolved
                removed = await asyncio.to_thread(recursive_remove, resolved.value, console=console)
                if isinstance(removed, Err):
                    return Err(FileOpFailed(action=self.name, error=removed.error))
                return Ok(None)
