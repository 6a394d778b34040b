from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ManifestInvalid:
    path: Path | None
    reason: str


@dataclass(frozen=True, slots=True)
class ProductNotDefined:
    name: str
    available: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class BuildCommandFailed:
    command: tuple[str, ...]
    returncode: int
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class BinaryProductMissing:
    product: str
    output_dir: Path


@dataclass(frozen=True, slots=True)
class AmbiguousProduct:
    product: str
    candidates: tuple[str, ...]


PackageError = ManifestInvalid | ProductNotDefined | BuildCommandFailed | BinaryProductMissing | AmbiguousProduct


@dataclass(frozen=True, slots=True)
class InvalidContextParameter:
    """A ``--context`` seed that is not ``key=value``."""

    raw: str


@dataclass(frozen=True, slots=True)
class UnknownPlatform:
    name: str


RunError = InvalidContextParameter | UnknownPlatform
