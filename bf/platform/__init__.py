"""Platform abstraction layer: targets, processes and file patterns."""

from .detection import (
    Platform,
    parse_platform,
)
from .files import recursive_copy, recursive_remove
from .patterns import WildcardMode, matches_pattern, parse_pattern
from .process import (
    ProcessError,
    ProcessOutput,
    run,
    run_async,
)

__all__ = [
    # detection
    "Platform",
    "parse_platform",
    # files
    "recursive_copy",
    "recursive_remove",
    # patterns
    "WildcardMode",
    "matches_pattern",
    "parse_pattern",
    # process
    "ProcessError",
    "ProcessOutput",
    "run",
    "run_async",
]
