"""Target platforms.

Flows declare the platforms they target; the runner executes them once per
declared platform, or on the single platform given with ``--platform``.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "Platform",
    "parse_platform",
]


class Platform(Enum):
    """Platform a flow (or a single action) can target."""

    IOS = "ios"
    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def is_desktop(self) -> bool:
        """True for platforms whose builds run on the host itself."""
        return self in (Platform.MACOS, Platform.LINUX, Platform.WINDOWS)

    @property
    def display_name(self) -> str:
        return {
            Platform.IOS: "iOS",
            Platform.MACOS: "macOS",
            Platform.LINUX: "Linux",
            Platform.WINDOWS: "Windows",
            Platform.UNKNOWN: "unknown",
        }[self]


def parse_platform(name: str) -> Platform | None:
    """Parse a platform name case-insensitively; None if unknown."""
    try:
        platform = Platform(name.strip().lower())
    except ValueError:
        return None
    return None if platform == Platform.UNKNOWN else platform
