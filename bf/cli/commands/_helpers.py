"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from bf.core.errors import ErrorCode
from bf.output.console import ConsoleProtocol


def resolve_folder(folder: Path, console: ConsoleProtocol) -> Path:
    """Absolute form of ``folder``; exits with an I/O error if it is not a directory."""
    try:
        resolved = folder.expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --input-folder: {e}")
        exit_with_code(int(ErrorCode.USER_ERROR))
    if not resolved.is_dir():
        console.error(f"input folder not found: {resolved}")
        exit_with_code(int(ErrorCode.IO_ERROR))
    return resolved


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
