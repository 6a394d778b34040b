"""Action contract and the gates applied before an action runs.

``Action`` is the open interface every step implements, whether it ships with
the engine or comes from a separately built plugin. Before an action executes
it must pass two gates, in this order:

1. exclusivity: an action whose ``mutual_exclusivity_key`` was already
   registered in this run is skipped; otherwise its key is registered;
2. platform: an action whose class does not support the platform is skipped.

A skipped action produces a console note and nothing else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from bf.core.context import Context
from bf.core.result import Ok, Result
from bf.platform.detection import Platform

from .errors import ActionError
from .exclusivity import is_key_executed, register_key
from .summary import ExecutionSummary

__all__ = ["Action", "passes_gates", "run_gated"]


class Action(ABC):
    """One step of a flow."""

    name: ClassVar[str] = "action"
    description: ClassVar[str] = ""

    def __init__(self, *, hint: str = "-", mutual_exclusivity_key: str | None = None) -> None:
        self.hint = hint
        self.mutual_exclusivity_key = mutual_exclusivity_key

    @classmethod
    def is_supported(cls, platform: Platform) -> bool:
        return True

    @abstractmethod
    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        """Run the step against ``context`` for ``platform``."""

    @property
    def nested_summary(self) -> ExecutionSummary | None:
        """Summary of a flow this action ran, spliced into the caller's timings."""
        return None

    def passes_exclusivity_gate(self, context: Context) -> bool:
        key = self.mutual_exclusivity_key
        if key is None:
            return True
        if is_key_executed(context, key):
            context.console.warning(
                f"Skipping {self.name} action [{self.hint}]: "
                f"mutual exclusivity key '{key}' already executed"
            )
            return False
        register_key(context, key)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(hint={self.hint!r})"


def passes_gates(action: Action, context: Context, platform: Platform) -> bool:
    """Apply the exclusivity gate, then the platform gate."""
    if not action.passes_exclusivity_gate(context):
        return False
    if not action.is_supported(platform):
        context.console.warning(f"Action {action.name} [{action.hint}] is not supported on {platform}, skipping")
        return False
    return True


async def run_gated(action: Action, context: Context, platform: Platform) -> Result[bool, ActionError]:
    """Run ``action`` if it passes its gates.

    Returns:
        Ok(True) when it ran, Ok(False) when it was skipped, Err on failure.
    """
    if not passes_gates(action, context, platform):
        return Ok(False)
    result = await action.execute(context, platform)
    if not isinstance(result, Ok):
        return result
    return Ok(True)
