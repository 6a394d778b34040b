from __future__ import annotations

import time
from collections.abc import Sequence

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.platform.detection import Platform

from .action import Action
from .errors import ActionError
from .flow import Flow
from .measurements import Measurement, add_measurement
from .runner import FlowRunner
from .summary import ExecutionSummary


class CallFlowAction(Action):
    """Runs another flow on the same context and platform.

    The nested flow's summary is kept so the calling runner can splice its
    timings in after this step. With ``measure_keys`` the step also records a
    ``Measurement`` of its own span, keyed by hint, holding those context keys
    as they are once the nested flow is done.
    """

    name = "call-flow"
    description = "Executes another flow"

    def __init__(
        self,
        flow: Flow,
        *,
        hint: str = "-",
        measure_keys: Sequence[str] | None = None,
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.flow = flow
        self.measure_keys = tuple(measure_keys) if measure_keys is not None else None
        self._summary: ExecutionSummary | None = None

    @property
    def nested_summary(self) -> ExecutionSummary | None:
        return self._summary

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        self._summary = None
        started_at = time.time()
        start = time.perf_counter()

        result = await FlowRunner(context.console).execute_on_platform(self.flow, context, platform)
        if isinstance(result, Err):
            return result
        self._summary = result.value

        if self.measure_keys is not None:
            add_measurement(
                context,
                Measurement(
                    context_data=context.extract_subset(self.measure_keys),
                    start_time=started_at,
                    execution_time=time.perf_counter() - start,
                    hint=self.hint,
                ),
                key=self.hint,
            )
        return Ok(None)
