"""Run command - build a flow package, load it and execute its flow."""

from __future__ import annotations

from pathlib import Path

import typer

from bf.cli.commands._helpers import exit_with_code, resolve_folder
from bf.cli.context import build_context
from bf.core.result import Err, Ok
from bf.output.errors import print_run_error, run_error_exit_code
from bf.services.run import RunRequest, RunService


def run(
    input_folder: Path = typer.Option(
        Path("."), "--input-folder", "-i", help="Folder holding buildflow.toml"
    ),
    product: str | None = typer.Option(
        None, "--product", "-p", help="Product to build (default: the only declared one)", show_default=False
    ),
    artifact: Path | None = typer.Option(
        None, "--artifact", help="Load this artifact instead of building", show_default=False
    ),
    entry_point: str | None = typer.Option(
        None, "--entry-point", "-e", help="Plugin entry point (default: make_flow)", show_default=False
    ),
    context: list[str] | None = typer.Option(
        None, "--context", "-c", help="Context seed as key=value (repeatable)", show_default=False
    ),
    platform: str | None = typer.Option(
        None, "--platform", help="Run on this platform only (default: every declared one)", show_default=False
    ),
    print_context: bool | None = typer.Option(
        None, "--print-context/--no-print-context", help="Print the final context", show_default=False
    ),
    summary: bool | None = typer.Option(
        None, "--summary/--no-summary", help="Print the execution summary", show_default=False
    ),
) -> None:
    """Build a flow package and run its flow."""
    ctx = build_context()
    folder = resolve_folder(input_folder, ctx.console)

    request = RunRequest(
        input_folder=folder,
        product=product,
        artifact=artifact.expanduser().resolve() if artifact is not None else None,
        entry_point=entry_point,
        context_params=tuple(context or ()),
        platform=platform,
        print_context=print_context,
        display_summary=summary,
    )

    match RunService(ctx.console).run(request):
        case Ok(outcome):
            names = ", ".join(str(s.platform) for s in outcome.summaries)
            ctx.console.success(f"Flow finished on {names or 'no platform'}")
        case Err(error):
            print_run_error(error, ctx.console)
            exit_with_code(run_error_exit_code(error))
