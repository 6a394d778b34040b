"""Execution summary rendering."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from bf.flow.summary import ExecutionSummary

from .console import Style

if TYPE_CHECKING:
    from .console import ConsoleProtocol

__all__ = ["SUMMARY_COLUMNS", "print_execution_summary", "summary_rows"]

SUMMARY_COLUMNS = ("Step", "Action", "Hint", "Time (in s)")


def summary_rows(summaries: Sequence[ExecutionSummary]) -> list[list[str]]:
    """One section row per platform, then one row per timed action."""
    rows: list[list[str]] = []
    for summary in summaries:
        rows.append([f"Platform: {summary.platform.display_name}"])
        for step, timing in enumerate(summary.action_timings, start=1):
            rows.append([str(step), timing.action_name, timing.hint, f"{timing.elapsed:.3f}"])
    return rows


def print_execution_summary(summaries: Sequence[ExecutionSummary], console: ConsoleProtocol) -> None:
    if not summaries:
        return
    title = f"Summary for {summaries[0].flow_name}"
    console.table(title, SUMMARY_COLUMNS, summary_rows(summaries))
    total = sum(s.total_time for s in summaries)
    console.print(f"Total time: {total:.3f}s", Style.BOLD)
