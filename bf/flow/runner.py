"""Flow execution.

The runner resolves a flow's actions for one platform and awaits them one at a
time, strictly in the resolved order. Skipped actions leave no timing. The
first failing action stops the run; its error comes back wrapped in
``FlowExecutionFailed`` together with the timings collected so far.
"""

from __future__ import annotations

import time

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.output.console import ConsoleProtocol, Style
from bf.platform.detection import Platform

from .action import passes_gates
from .errors import FlowDefinitionError, FlowError, FlowExecutionFailed, ResolveFailed
from .flow import Flow
from .summary import ActionTiming, ExecutionSummary

__all__ = ["FlowRunner"]


class FlowRunner:
    """Runs flows against a context."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    async def execute_on_platform(
        self,
        flow: Flow,
        context: Context,
        platform: Platform,
    ) -> Result[ExecutionSummary, FlowError]:
        """Run every action of ``flow`` for ``platform``.

        Returns:
            Ok(ExecutionSummary), or Err(ResolveFailed | FlowExecutionFailed).
        """
        try:
            actions = list(flow.actions(context, platform))
        except FlowDefinitionError as e:
            return Err(ResolveFailed(flow_name=flow.name, platform=platform, message=str(e)))

        timings: list[ActionTiming] = []
        flow_start = time.perf_counter()

        for action in actions:
            if not passes_gates(action, context, platform):
                continue

            self._console.print(f"Executing {action.name} action [{action.hint}]...", Style.DIM)
            start = time.perf_counter()
            result = await action.execute(context, platform)
            elapsed = time.perf_counter() - start

            if isinstance(result, Err):
                return Err(
                    FlowExecutionFailed(
                        flow_name=flow.name,
                        platform=platform,
                        action_name=action.name,
                        hint=action.hint,
                        cause=result.error,
                        partial=ExecutionSummary(
                            flow_name=flow.name,
                            platform=platform,
                            action_timings=tuple(timings),
                            total_time=time.perf_counter() - flow_start,
                        ),
                    )
                )

            timings.append(ActionTiming(action_name=action.name, hint=action.hint, elapsed=elapsed))
            nested = action.nested_summary
            if nested is not None:
                timings.extend(nested.action_timings)

        return Ok(
            ExecutionSummary(
                flow_name=flow.name,
                platform=platform,
                action_timings=tuple(timings),
                total_time=time.perf_counter() - flow_start,
            )
        )

    async def execute_all_platforms(
        self,
        flow: Flow,
        context: Context,
    ) -> Result[list[ExecutionSummary], FlowError]:
        """Run ``flow`` on each declared platform in order, stopping at the first failure."""
        self._console.info(f"Executing {flow.name} flow...")
        summaries: list[ExecutionSummary] = []
        for platform in flow.platforms:
            self._console.info(f"Executing {flow.name} flow on platform {platform}...")
            result = await self.execute_on_platform(flow, context, platform)
            if isinstance(result, Err):
                return result
            summaries.append(result.value)
        return Ok(summaries)
