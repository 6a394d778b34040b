from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable

from bf.core.context import Context
from bf.core.result import Ok, Result
from bf.flow.action import Action
from bf.flow.errors import ActionError
from bf.platform.detection import Platform

type AdHocResult = Result[None, ActionError] | None
type AdHocBody = Callable[[Context, Platform], AdHocResult | Awaitable[AdHocResult]]


class AdHocAction(Action):
    """Wraps a plain function (sync or async) as a flow step.

    The function returns None for success, or a Result.
    """

    name = "adhoc"
    description = "Adhoc action to plug into flow"

    def __init__(self, body: AdHocBody, *, hint: str = "-", mutual_exclusivity_key: str | None = None) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self._body = body

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        outcome = self._body(context, platform)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        if outcome is None:
            return Ok(None)
        return outcome
