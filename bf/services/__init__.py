"""Package building and flow runs."""

from .errors import (
    AmbiguousProduct,
    BinaryProductMissing,
    BuildCommandFailed,
    InvalidContextParameter,
    ManifestInvalid,
    PackageError,
    ProductNotDefined,
    RunError,
    UnknownPlatform,
)
from .package import PackageBuilder, find_artifact
from .run import RunFailure, RunOutcome, RunRequest, RunService, parse_context_params, print_context

__all__ = [
    "AmbiguousProduct",
    "BinaryProductMissing",
    "BuildCommandFailed",
    "InvalidContextParameter",
    "ManifestInvalid",
    "PackageBuilder",
    "PackageError",
    "ProductNotDefined",
    "RunError",
    "RunFailure",
    "RunOutcome",
    "RunRequest",
    "RunService",
    "UnknownPlatform",
    "find_artifact",
    "parse_context_params",
    "print_context",
]
