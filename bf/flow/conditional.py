from __future__ import annotations

from collections.abc import Callable

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.platform.detection import Platform

from .action import Action, run_gated
from .errors import ActionError
from .summary import ExecutionSummary

type Predicate = Callable[[Context, Platform], bool]


class ConditionalAction(Action):
    """Runs ``action`` when the predicate holds, ``else_action`` (if any) otherwise.

    The selected branch goes through its own exclusivity and platform gates,
    and its nested summary (if it ran one) is forwarded to the caller.
    """

    name = "conditional"
    description = "Executes an action only if a condition is met, with optional else action"

    def __init__(
        self,
        predicate: Predicate,
        action: Action,
        else_action: Action | None = None,
        *,
        hint: str = "-",
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.predicate = predicate
        self.action = action
        self.else_action = else_action
        self._nested: ExecutionSummary | None = None

    @property
    def nested_summary(self) -> ExecutionSummary | None:
        return self._nested

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        self._nested = None
        branch = self.action if self.predicate(context, platform) else self.else_action
        if branch is None:
            return Ok(None)
        result = await run_gated(branch, context, platform)
        if isinstance(result, Err):
            return result
        if result.value:
            self._nested = branch.nested_summary
        return Ok(None)
