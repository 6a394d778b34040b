"""Plugin loading errors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LibraryLoadingError:
    """The artifact could not be imported."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class SymbolLoadingError:
    """The module has no callable with the entry point's name."""

    entry_point: str


@dataclass(frozen=True, slots=True)
class PluginNotLoaded:
    path: str


@dataclass(frozen=True, slots=True)
class HandleConsumed:
    """``FlowHandle.take`` was called a second time."""


@dataclass(frozen=True, slots=True)
class InvalidHandle:
    """The entry point failed or returned something other than a ``FlowHandle``."""

    entry_point: str
    message: str


type PluginError = LibraryLoadingError | SymbolLoadingError | PluginNotLoaded | HandleConsumed | InvalidHandle


def describe_plugin_error(error: PluginError) -> str:
    match error:
        case LibraryLoadingError(path=path, message=message):
            return f"Cannot load plugin {path}: {message}"
        case SymbolLoadingError(entry_point=entry_point):
            return f"Plugin has no callable entry point '{entry_point}'"
        case PluginNotLoaded(path=path):
            return f"Plugin {path} is not loaded"
        case HandleConsumed():
            return "Flow handle was already consumed"
        case InvalidHandle(entry_point=entry_point, message=message):
            return f"Entry point '{entry_point}' did not vend a flow: {message}"
