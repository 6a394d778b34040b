"""Loading flows from separately built artifacts."""

from .errors import (
    HandleConsumed,
    InvalidHandle,
    LibraryLoadingError,
    PluginError,
    PluginNotLoaded,
    SymbolLoadingError,
    describe_plugin_error,
)
from .handle import FlowHandle, export_flow
from .loader import ARTIFACT_SUFFIXES, Plugin, PluginLoader

__all__ = [
    "ARTIFACT_SUFFIXES",
    "FlowHandle",
    "HandleConsumed",
    "InvalidHandle",
    "LibraryLoadingError",
    "Plugin",
    "PluginError",
    "PluginLoader",
    "PluginNotLoaded",
    "SymbolLoadingError",
    "describe_plugin_error",
    "export_flow",
]
