from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BasePathNotFound:
    base_path: str


@dataclass(frozen=True, slots=True)
class DirectoryCreationFailed:
    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class InvalidPattern:
    pattern: str
    message: str


@dataclass(frozen=True, slots=True)
class EnumerationFailed:
    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class RemovalFailed:
    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class CopyFailed:
    path: str
    reason: str


FileOpError = (
    BasePathNotFound
    | DirectoryCreationFailed
    | InvalidPattern
    | EnumerationFailed
    | RemovalFailed
    | CopyFailed
)


def describe_file_error(error: FileOpError) -> str:
    """One-line description of a pattern/file operation error."""
    match error:
        case BasePathNotFound(base_path=base):
            return f"source path does not exist: {base}"
        case DirectoryCreationFailed(path=path, reason=reason):
            return f"cannot create directory {path}: {reason}"
        case InvalidPattern(message=message):
            return message
        case EnumerationFailed(path=path, reason=reason):
            return f"cannot list {path}: {reason}"
        case RemovalFailed(path=path, reason=reason):
            return f"cannot remove {path}: {reason}"
        case CopyFailed(path=path, reason=reason):
            return f"cannot copy {path}: {reason}"
