"""Loading flow plugins from built artifacts.

An artifact is a Python source file or a zip archive (``.pyz``/``.zip``) whose
top-level module (or package) is named after the archive stem. Source files are
registered in ``sys.modules`` under a private name. Archives are imported with
the archive on the import path, so their modules keep their own names and may
import their siblings; the top-level module is also registered under the
private name. Every module a plugin brought in is dropped when it is released.

Usage:
    with PluginLoader() as loader:
        match loader.load(artifact):
            case Ok(plugin):
                flow = plugin.build("make_flow")
            case Err(error):
                ...
"""

from __future__ import annotations

import importlib
import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType, TracebackType

from bf.core.config import DEFAULT_ENTRY_POINT
from bf.core.result import Err, Ok, Result
from bf.flow.flow import Flow, FlowBuilder

from .errors import InvalidHandle, LibraryLoadingError, PluginError, PluginNotLoaded, SymbolLoadingError
from .handle import FlowHandle

__all__ = ["ARTIFACT_SUFFIXES", "Plugin", "PluginLoader"]

ARTIFACT_SUFFIXES = (".pyz", ".zip", ".py")
MODULE_PREFIX = "_bf_plugin_"


class Plugin:
    """A loaded artifact and the builder it vended."""

    def __init__(
        self,
        path: Path,
        module_name: str,
        module: ModuleType,
        owned: dict[str, ModuleType] | None = None,
    ) -> None:
        self.path = path
        self.module_name = module_name
        self._module: ModuleType | None = module
        self._owned: dict[str, ModuleType] = owned if owned is not None else {module_name: module}
        self._builder: FlowBuilder | None = None

    @property
    def is_loaded(self) -> bool:
        return self._module is not None

    @property
    def module_names(self) -> tuple[str, ...]:
        """Every ``sys.modules`` name this plugin registered."""
        return tuple(self._owned)

    def make_flow_builder(self, entry_point: str = DEFAULT_ENTRY_POINT) -> Result[FlowBuilder, PluginError]:
        """Call ``entry_point`` and take ownership of the builder it returns."""
        module = self._module
        if module is None:
            return Err(PluginNotLoaded(path=str(self.path)))

        function = getattr(module, entry_point, None)
        if not callable(function):
            return Err(SymbolLoadingError(entry_point=entry_point))

        try:
            handle = function()
        except Exception as e:
            return Err(InvalidHandle(entry_point=entry_point, message=f"{type(e).__name__}: {e}"))
        if not isinstance(handle, FlowHandle):
            return Err(InvalidHandle(entry_point=entry_point, message=f"got {type(handle).__name__}"))

        taken = handle.take()
        if isinstance(taken, Err):
            return taken
        self._builder = taken.value
        return Ok(taken.value)

    def build(self, entry_point: str = DEFAULT_ENTRY_POINT) -> Result[Flow, PluginError]:
        builder = self.make_flow_builder(entry_point)
        if isinstance(builder, Err):
            return builder
        try:
            return Ok(builder.value.build())
        except Exception as e:
            return Err(InvalidHandle(entry_point=entry_point, message=f"{type(e).__name__}: {e}"))

    def _unload(self) -> None:
        self._builder = None
        self._module = None
        _forget(self._owned)
        self._owned = {}

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "released"
        return f"Plugin({self.path.name}, {state})"


def _forget(modules: dict[str, ModuleType]) -> None:
    # A later load may have replaced a name; only drop our own module.
    for name, module in modules.items():
        if sys.modules.get(name) is module:
            del sys.modules[name]


def _modules_from(archive: str) -> dict[str, ModuleType]:
    prefix = archive + os.sep
    return {
        name: module
        for name, module in list(sys.modules.items())
        if (getattr(module, "__file__", None) or "").startswith(prefix)
    }


def _import_source(path: Path, module_name: str) -> dict[str, ModuleType]:
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {path.name}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return {module_name: module}


def _import_archive(path: Path, module_name: str) -> dict[str, ModuleType]:
    archive = str(path)
    # Modules left by an earlier load of the same archive must not be reused.
    for name in _modules_from(archive):
        del sys.modules[name]

    sys.path.insert(0, archive)
    try:
        module = importlib.import_module(path.stem)
    except BaseException:
        _forget(_modules_from(archive))
        raise
    finally:
        sys.path.remove(archive)
        sys.path_importer_cache.pop(archive, None)

    owned = _modules_from(archive)
    if owned.get(path.stem) is not module:
        _forget(owned)
        raise ImportError(f"no module '{path.stem}' in archive")
    sys.modules[module_name] = module
    return {module_name: module, **owned}


class PluginLoader:
    """Owns every plugin it loads until released."""

    def __init__(self) -> None:
        self._plugins: list[Plugin] = []
        self._counter = 0

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return tuple(self._plugins)

    def load(self, path: Path) -> Result[Plugin, PluginError]:
        if not path.is_file():
            return Err(LibraryLoadingError(path=str(path), message="file not found"))
        if path.suffix not in ARTIFACT_SUFFIXES:
            return Err(LibraryLoadingError(path=str(path), message=f"unsupported artifact type '{path.suffix}'"))

        self._counter += 1
        module_name = f"{MODULE_PREFIX}{path.stem.replace('-', '_').replace('.', '_')}_{self._counter}"

        importer = _import_source if path.suffix == ".py" else _import_archive
        try:
            owned = importer(path, module_name)
        except Exception as e:
            return Err(LibraryLoadingError(path=str(path), message=f"{type(e).__name__}: {e}"))

        plugin = Plugin(path, module_name, owned[module_name], owned)
        self._plugins.append(plugin)
        return Ok(plugin)

    def release(self, plugin: Plugin) -> None:
        plugin._unload()
        if plugin in self._plugins:
            self._plugins.remove(plugin)

    def release_all(self) -> None:
        for plugin in reversed(self._plugins):
            plugin._unload()
        self._plugins.clear()

    def __enter__(self) -> PluginLoader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release_all()
