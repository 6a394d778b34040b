"""Running a packaged flow end to end.

``RunService.run`` turns a ``RunRequest`` into executed flows: it seeds the
context from ``key=value`` pairs, builds the product (unless an artifact is
given), loads the plugin, runs its flow and reports the summary. The plugin is
released only after the flow object has been dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from bf.core.config import Config
from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.flow.errors import FlowError
from bf.flow.runner import FlowRunner
from bf.flow.summary import ExecutionSummary
from bf.output.console import ConsoleProtocol
from bf.output.summary import print_execution_summary
from bf.platform.detection import Platform, parse_platform
from bf.plugins.errors import PluginError
from bf.plugins.loader import PluginLoader

from .errors import InvalidContextParameter, PackageError, ProductNotDefined, RunError, UnknownPlatform
from .package import PackageBuilder

__all__ = [
    "RunFailure",
    "RunOutcome",
    "RunRequest",
    "RunService",
    "parse_context_params",
    "print_context",
]

type RunFailure = RunError | PackageError | PluginError | FlowError


@dataclass(frozen=True, slots=True)
class RunRequest:
    """What to run. ``None`` fields fall back to ``buildflow.toml``, then defaults."""

    input_folder: Path
    product: str | None = None
    artifact: Path | None = None
    entry_point: str | None = None
    context_params: tuple[str, ...] = ()
    platform: str | None = None
    print_context: bool | None = None
    display_summary: bool | None = None


@dataclass(frozen=True, slots=True)
class RunOutcome:
    summaries: tuple[ExecutionSummary, ...]
    context: Context


def parse_context_params(params: tuple[str, ...] | list[str]) -> Result[dict[str, str], InvalidContextParameter]:
    """Parse ``key=value`` pairs; the value may itself contain ``=``."""
    seeds: dict[str, str] = {}
    for raw in params:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            return Err(InvalidContextParameter(raw=raw))
        seeds[key.strip()] = value
    return Ok(seeds)


def print_context(context: Context, console: ConsoleProtocol) -> None:
    console.header("Context")
    lines = context.describe()
    if not lines:
        console.print("(empty)")
    for line in lines:
        console.print(line)


class RunService:
    def __init__(self, console: ConsoleProtocol, *, builder: PackageBuilder | None = None) -> None:
        self._console = console
        self._builder = builder or PackageBuilder(console)

    def run(self, request: RunRequest, context: Context | None = None) -> Result[RunOutcome, RunFailure]:
        """Run ``request``.

        Pass ``context`` to keep a handle on the final context, including after
        a failed run. With print-context on, it is printed whether or not the
        flow succeeded.
        """
        seeds = parse_context_params(request.context_params)
        if isinstance(seeds, Err):
            return seeds

        platform: Platform | None = None
        if request.platform is not None:
            platform = parse_platform(request.platform)
            if platform is None:
                return Err(UnknownPlatform(name=request.platform))

        manifest = self._builder.load_manifest(request.input_folder)
        if isinstance(manifest, Err):
            return manifest
        config = manifest.value

        artifact = self._locate_artifact(request, config)
        if isinstance(artifact, Err):
            return artifact

        if context is None:
            context = Context(console=self._console)
        for key, value in seeds.value.items():
            context.put(key, value)

        entry_point = request.entry_point or config.run.entry_point
        with PluginLoader() as loader:
            result = self._execute(loader, artifact.value, entry_point, context, platform)

        display_summary = config.run.display_summary if request.display_summary is None else request.display_summary
        show_context = config.run.print_context if request.print_context is None else request.print_context
        if isinstance(result, Err):
            if show_context:
                print_context(context, self._console)
            return result

        if display_summary:
            print_execution_summary(result.value, self._console)
        if show_context:
            print_context(context, self._console)
        return Ok(RunOutcome(summaries=tuple(result.value), context=context))

    def _locate_artifact(self, request: RunRequest, config: Config) -> Result[Path, RunFailure]:
        if request.artifact is not None:
            return Ok(request.artifact)

        product = request.product
        if product is None:
            if len(config.products) != 1:
                return Err(ProductNotDefined(name="", available=config.product_names))
            product = config.products[0].name
        return self._builder.build(request.input_folder, product)

    def _execute(
        self,
        loader: PluginLoader,
        artifact: Path,
        entry_point: str,
        context: Context,
        platform: Platform | None,
    ) -> Result[list[ExecutionSummary], RunFailure]:
        plugin = loader.load(artifact)
        if isinstance(plugin, Err):
            return plugin
        built = plugin.value.build(entry_point)
        if isinstance(built, Err):
            return built

        flow = built.value
        runner = FlowRunner(self._console)
        if platform is None:
            outcome = asyncio.run(runner.execute_all_platforms(flow, context))
        else:
            single = asyncio.run(runner.execute_on_platform(flow, context, platform))
            outcome = single if isinstance(single, Err) else Ok([single.value])
        del flow, built
        return outcome
