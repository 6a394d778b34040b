from __future__ import annotations

from bf.core.context import MISSING_TEXT, Context
from bf.core.result import Ok, Result
from bf.flow.action import Action
from bf.flow.errors import ActionError
from bf.platform.detection import Platform

from .argument import Argument, resolve_argument


class EchoAction(Action):
    """Prints a literal or a context value (``<missing>`` when absent)."""

    name = "echo"
    description = "Prints a message or a context value"

    def __init__(self, content: Argument, *, hint: str = "-", mutual_exclusivity_key: str | None = None) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.content = content

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        value = resolve_argument(context, self.content)
        context.console.print(MISSING_TEXT if value is None else value)
        return Ok(None)
