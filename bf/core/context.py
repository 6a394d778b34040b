"""Typed key/value store threaded through a flow run.

Every action of a run receives the same ``Context``. Values are boxed in
``OptionValue`` so that lookups can be checked against the runtime type of the
stored value: ``get(key, str)`` returns the value only when it is exactly a
``str``, and ``None`` otherwise. A type mismatch is never an error.

The context also carries the console that actions write to. The console is not
part of the key/value storage and never shows up in ``describe()``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from bf.output.console import ConsoleProtocol

__all__ = ["Context", "OptionValue", "MISSING", "MISSING_TEXT"]

MISSING_TEXT = "<missing>"


@dataclass(frozen=True, slots=True)
class OptionValue[T]:
    """Immutable box around one context value."""

    value: T

    @property
    def kind(self) -> type:
        """Runtime type tag compared by ``Context.get``."""
        return type(self.value)

    def __repr__(self) -> str:
        return repr(self.value)


MISSING: OptionValue[str] = OptionValue(MISSING_TEXT)


class Context:
    """Mutable store shared by all actions of one run."""

    def __init__(self, *, console: ConsoleProtocol | None = None) -> None:
        if console is None:
            from bf.output.console import RichConsole

            console = RichConsole()
        self.console: ConsoleProtocol = console
        self._storage: dict[str, OptionValue[object]] = {}

    def put(self, key: str, value: object) -> None:
        """Store ``value`` under ``key``, replacing whatever was there."""
        self._storage[key] = OptionValue(value)

    def put_option(self, key: str, option: OptionValue[object]) -> None:
        self._storage[key] = option

    def get[T](self, key: str, kind: type[T]) -> T | None:
        """Return the value under ``key`` if its type is exactly ``kind``."""
        option = self._storage.get(key)
        if option is None or option.kind is not kind:
            return None
        return cast(T, option.value)

    def drop(self, key: str) -> bool:
        """Remove ``key``; return True if it existed."""
        return self._storage.pop(key, None) is not None

    def option(self, key: str) -> OptionValue[object] | None:
        return self._storage.get(key)

    def extract_subset(self, keys: Iterable[str]) -> dict[str, OptionValue[object]]:
        """Return one entry per requested key.

        Absent keys map to ``MISSING`` so the result always has the requested
        shape.
        """
        return {key: self._storage.get(key, MISSING) for key in keys}

    def keys(self) -> list[str]:
        return list(self._storage)

    def describe(self) -> list[str]:
        """Render the storage as ``key => value`` lines, in insertion order."""
        return [f"{key} => {option!r}" for key, option in self._storage.items()]

    def __contains__(self, key: object) -> bool:
        return key in self._storage

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)
