"""Error presentation utilities.

Centralized error formatting and exit code mapping for ``bf run``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bf.core.errors import ErrorCode
from bf.flow.errors import FlowExecutionFailed, ResolveFailed, describe_action_error, root_cause
from bf.output.console import Style
from bf.output.summary import print_execution_summary
from bf.plugins.errors import (
    HandleConsumed,
    InvalidHandle,
    LibraryLoadingError,
    PluginNotLoaded,
    SymbolLoadingError,
    describe_plugin_error,
)
from bf.services.errors import (
    AmbiguousProduct,
    BinaryProductMissing,
    BuildCommandFailed,
    InvalidContextParameter,
    ManifestInvalid,
    ProductNotDefined,
    UnknownPlatform,
)

if TYPE_CHECKING:
    from bf.output.console import ConsoleProtocol
    from bf.services.run import RunFailure

__all__ = ["print_run_error", "run_error_exit_code"]


def print_run_error(error: RunFailure, console: ConsoleProtocol) -> None:
    """Print a failed run to console with appropriate formatting."""
    match error:
        case InvalidContextParameter(raw=raw):
            console.error(f"Invalid context parameter: {raw!r}")
            console.print("hint: use --context key=value", Style.DIM)
        case UnknownPlatform(name=name):
            console.error(f"Unknown platform: {name}")
            console.print("Available: ios, macos, linux, windows", Style.DIM)
        case ManifestInvalid(path=path, reason=reason):
            console.error(f"Invalid package manifest: {reason}")
            if path is not None:
                console.print(str(path), Style.DIM)
        case ProductNotDefined(name=name, available=available):
            if name:
                console.error(f"Product not defined: {name}")
            else:
                console.error("No product given and the manifest does not declare exactly one")
            if available:
                console.print(f"Available: {', '.join(available)}", Style.DIM)
        case BuildCommandFailed(command=command, returncode=rc, stderr=stderr):
            console.error(f"build command failed (exit {rc}): {' '.join(command)}")
            if stderr.strip():
                console.print(stderr.strip(), Style.DIM)
        case BinaryProductMissing(product=product, output_dir=output_dir):
            console.error(f"No artifact for {product} in {output_dir}")
        case AmbiguousProduct(product=product, candidates=candidates):
            console.error(f"Several artifacts match {product}: {', '.join(candidates)}")
        case LibraryLoadingError() | SymbolLoadingError() | PluginNotLoaded() | HandleConsumed() | InvalidHandle():
            console.error(describe_plugin_error(error))
        case ResolveFailed():
            console.error(describe_action_error(error))
        case FlowExecutionFailed(partial=partial):
            console.error(f"Flow {error.flow_name} failed on {error.platform}")
            console.print(describe_action_error(root_cause(error)), Style.DIM)
            if partial.action_timings:
                print_execution_summary([partial], console)


def run_error_exit_code(error: RunFailure) -> int:
    """Get exit code for a failed run."""
    match error:
        case InvalidContextParameter() | UnknownPlatform() | ProductNotDefined() | AmbiguousProduct():
            return int(ErrorCode.USER_ERROR)
        case ManifestInvalid():
            return int(ErrorCode.USER_ERROR)
        case LibraryLoadingError() | SymbolLoadingError() | PluginNotLoaded() | HandleConsumed() | InvalidHandle():
            return int(ErrorCode.ENV_ERROR)
        case BuildCommandFailed() | ResolveFailed() | FlowExecutionFailed():
            return int(ErrorCode.BUILD_ERROR)
        case BinaryProductMissing():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.BUILD_ERROR)
