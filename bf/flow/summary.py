"""Timing records produced by a flow run."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from bf.platform.detection import Platform

__all__ = ["ActionTiming", "ExecutionSummary", "merge_summaries"]


@dataclass(frozen=True, slots=True)
class ActionTiming:
    action_name: str
    hint: str
    elapsed: float


@dataclass(frozen=True, slots=True)
class ExecutionSummary:
    """Ordered per-action timings of one flow on one platform.

    Timings of flows called through ``CallFlowAction`` are flattened in right
    after the timing of the calling step.
    """

    flow_name: str
    platform: Platform
    action_timings: tuple[ActionTiming, ...]
    total_time: float

    @property
    def action_names(self) -> list[str]:
        return [t.action_name for t in self.action_timings]

    @property
    def hints(self) -> list[str]:
        return [t.hint for t in self.action_timings]


def merge_summaries(summaries: Sequence[ExecutionSummary]) -> ExecutionSummary | None:
    """Chain the timings of several nested runs into one summary, in order."""
    if not summaries:
        return None
    first = summaries[0]
    if len(summaries) == 1:
        return first
    return ExecutionSummary(
        flow_name=first.flow_name,
        platform=first.platform,
        action_timings=tuple(t for s in summaries for t in s.action_timings),
        total_time=sum(s.total_time for s in summaries),
    )
