"""Wildcard path patterns.

Syntax (``/`` is the only separator):
- ``?``  exactly one character other than ``/``
- ``*``  zero or more characters other than ``/``
- ``**`` zero or more characters, ``/`` included

A pattern such as ``build/out/**/*.txt`` is split into a base path
(``build/out``, the components before the first wildcard) that is walked on
disk, and a match pattern (``**/*.txt``) tested against paths relative to it.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from pathlib import PurePath

from bf.core.result import Err, Ok, Result

from .file_errors import InvalidPattern

__all__ = [
    "WILDCARD_CHARS",
    "WildcardMode",
    "compile_pattern",
    "destination_relative_path",
    "has_wildcard",
    "matches_pattern",
    "parse_pattern",
    "relative_path",
]

WILDCARD_CHARS = ("*", "?")

# Escaped literally when they appear in a pattern.
_REGEX_SPECIALS = frozenset(".+()[]{}^$|\\")


class WildcardMode(Enum):
    """How much of a matched path is kept under the copy destination."""

    FIRST = "first"  # keep everything below the base path
    LAST = "last"  # keep only components from the last wildcard component on

    def __str__(self) -> str:
        return self.value


def has_wildcard(component: str) -> bool:
    return any(ch in component for ch in WILDCARD_CHARS)


def parse_pattern(pattern: str) -> Result[tuple[str, str], InvalidPattern]:
    """Split ``pattern`` into ``(base_path, match_pattern)``.

    Without any wildcard the whole pattern is the base path and the match
    pattern is ``*``.
    """
    components = pattern.split("/")
    first = next((i for i, c in enumerate(components) if has_wildcard(c)), None)
    if first is None:
        return Ok((pattern, "*"))

    base_path = "/".join(components[:first])
    if not base_path:
        return Err(
            InvalidPattern(
                pattern=pattern,
                message=f"Can't autodetect base path from pattern: {pattern}",
            )
        )
    return Ok((base_path, "/".join(components[first:])))


@lru_cache(maxsize=128)
def compile_pattern(match_pattern: str) -> re.Pattern[str]:
    """Translate a match pattern into an anchored regular expression."""
    parts: list[str] = ["^"]
    i = 0
    while i < len(match_pattern):
        ch = match_pattern[i]
        if ch == "*":
            if i + 1 < len(match_pattern) and match_pattern[i + 1] == "*":
                parts.append(".*")
                i += 1
            else:
                parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch in _REGEX_SPECIALS:
            parts.append("\\" + ch)
        else:
            parts.append(ch)
        i += 1
    parts.append("$")
    return re.compile("".join(parts), re.DOTALL)


def relative_path(path: str | PurePath, base_path: str | PurePath) -> str:
    """``path`` relative to ``base_path`` in ``/`` form, no leading separator."""
    pure = PurePath(path)
    try:
        rel = pure.relative_to(base_path).as_posix()
    except ValueError:
        # Not below the base: match against the whole path.
        rel = pure.as_posix()
    return "" if rel == "." else rel.lstrip("/")


def matches_pattern(path: str | PurePath, base_path: str | PurePath, match_pattern: str) -> bool:
    """Return True if ``path`` (below ``base_path``) matches ``match_pattern``."""
    return compile_pattern(match_pattern).fullmatch(relative_path(path, base_path)) is not None


def destination_relative_path(rel_path: str, match_pattern: str, mode: WildcardMode) -> str:
    """Compute where a matched file lands below the copy destination.

    ``FIRST`` keeps ``rel_path`` whole. ``LAST`` drops the components that sit
    before the last wildcard-bearing component of ``match_pattern``; for
    ``*/*/c/*.txt`` and ``a/b/c/file1.txt`` that leaves ``file1.txt``.
    """
    if mode == WildcardMode.FIRST:
        return rel_path

    pattern_components = match_pattern.split("/")
    wildcard_indexes = [i for i, c in enumerate(pattern_components) if has_wildcard(c)]
    if not wildcard_indexes:
        return rel_path

    last = wildcard_indexes[-1]
    rel_components = rel_path.split("/")
    if len(rel_components) <= last:
        return rel_path
    return "/".join(rel_components[last:])
