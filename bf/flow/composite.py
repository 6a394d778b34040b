from __future__ import annotations

from collections.abc import Sequence

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.platform.detection import Platform

from .action import Action, run_gated
from .errors import ActionError, describe_action_error
from .flow import ActionsFactory, resolve_actions
from .summary import ExecutionSummary, merge_summaries


class CompositeAction(Action):
    """Runs a series of actions in sequence.

    Children are resolved on every execution, so a factory sees the context as
    it is when the composite starts. With ``swallow_errors`` a failing child is
    reported and the next child still runs; otherwise the first failure ends
    the composite and is returned to the caller. Nested summaries of children
    that ran (``CallFlowAction`` included) are forwarded to the caller.
    """

    name = "composite"
    description = "Executes a series of actions in sequence"

    def __init__(
        self,
        actions: Sequence[Action] | ActionsFactory,
        *,
        hint: str = "-",
        swallow_errors: bool = False,
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.swallow_errors = swallow_errors
        self._actions = actions
        self._nested: list[ExecutionSummary] = []

    @property
    def nested_summary(self) -> ExecutionSummary | None:
        return merge_summaries(self._nested)

    def actions(self, context: Context, platform: Platform) -> list[Action]:
        return resolve_actions(self._actions, context, platform)

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        self._nested = []
        for action in self.actions(context, platform):
            result = await run_gated(action, context, platform)
            if isinstance(result, Ok):
                if result.value and action.nested_summary is not None:
                    self._nested.append(action.nested_summary)
                continue
            if not self.swallow_errors:
                return result
            context.console.warning(
                f"Composite [{self.hint}]: ignoring failure of {action.name} [{action.hint}]: "
                f"{describe_action_error(result.error)}"
            )
        return Ok(None)
