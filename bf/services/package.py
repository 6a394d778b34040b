"""Building a flow package and locating the artifact it produced."""

from __future__ import annotations

from pathlib import Path

from bf.core.config import Config, ProductConfig, load_config_or_default
from bf.core.result import Err, Ok, Result
from bf.output.console import ConsoleProtocol, Style
from bf.platform.process import run
from bf.plugins.loader import ARTIFACT_SUFFIXES

from .errors import (
    AmbiguousProduct,
    BinaryProductMissing,
    BuildCommandFailed,
    ManifestInvalid,
    PackageError,
    ProductNotDefined,
)

__all__ = ["PackageBuilder", "find_artifact"]

_BUILD_TIMEOUT_SECONDS = 30 * 60.0


def find_artifact(output_dir: Path, product: str) -> Result[Path, PackageError]:
    """Pick the artifact built for ``product`` in ``output_dir``.

    Candidates are visible files whose name contains the product name and
    whose suffix is an artifact suffix, sorted by name. A single candidate, or
    the one whose stem equals the product name, wins.
    """
    try:
        entries = sorted(output_dir.iterdir(), key=lambda p: p.name)
    except OSError:
        return Err(BinaryProductMissing(product=product, output_dir=output_dir))

    candidates = [
        p
        for p in entries
        if p.is_file() and not p.name.startswith(".") and product in p.name and p.suffix in ARTIFACT_SUFFIXES
    ]
    if not candidates:
        return Err(BinaryProductMissing(product=product, output_dir=output_dir))
    if len(candidates) == 1:
        return Ok(candidates[0])
    for candidate in candidates:
        if candidate.stem == product:
            return Ok(candidate)
    return Err(AmbiguousProduct(product=product, candidates=tuple(p.name for p in candidates)))


class PackageBuilder:
    """Builds a product declared in a package folder's ``buildflow.toml``."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def load_manifest(self, folder: Path) -> Result[Config, PackageError]:
        loaded = load_config_or_default(folder)
        if isinstance(loaded, Err):
            return Err(ManifestInvalid(path=loaded.error.path, reason=loaded.error.message))
        return Ok(loaded.value)

    def build(self, folder: Path, product: str) -> Result[Path, PackageError]:
        """Build ``product`` in ``folder`` and return the artifact path."""
        manifest = self.load_manifest(folder)
        if isinstance(manifest, Err):
            return manifest

        config = manifest.value.product(product)
        if config is None:
            return Err(ProductNotDefined(name=product, available=manifest.value.product_names))

        built = self._run_build(folder, config)
        if isinstance(built, Err):
            return built

        output_dir = folder / config.output
        return find_artifact(output_dir, product)

    def _run_build(self, folder: Path, config: ProductConfig) -> Result[None, PackageError]:
        if not config.build:
            self._console.print(f"Product {config.name} has no build command, using existing output", Style.DIM)
            return Ok(None)

        self._console.print(f"Building {config.name}: {' '.join(config.build)}", Style.DIM)
        result = run(list(config.build), cwd=folder, timeout=_BUILD_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            error = result.error
            return Err(BuildCommandFailed(command=error.command, returncode=error.returncode, stderr=error.stderr))
        return Ok(None)
