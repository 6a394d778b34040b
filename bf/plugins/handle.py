"""Handle passed from a plugin's entry point to the loader.

A plugin exports a zero-argument callable that returns a ``FlowHandle``. The
handle wraps the plugin's ``FlowBuilder`` and gives it up exactly once:

    @export_flow
    def make_flow() -> Flow:
        return BasicFlow(name="app", platforms=[Platform.LINUX], actions=[...])
"""

from __future__ import annotations

import functools
from collections.abc import Callable

from bf.core.result import Err, Ok, Result
from bf.flow.flow import Flow, FlowBuilder

from .errors import HandleConsumed

__all__ = ["FlowHandle", "export_flow"]


class FlowHandle:
    """Opaque owner of a ``FlowBuilder`` until ``take()`` is called."""

    __slots__ = ("_builder",)

    def __init__(self, builder: FlowBuilder) -> None:
        self._builder: FlowBuilder | None = builder

    @property
    def consumed(self) -> bool:
        return self._builder is None

    def take(self) -> Result[FlowBuilder, HandleConsumed]:
        builder = self._builder
        if builder is None:
            return Err(HandleConsumed())
        self._builder = None
        return Ok(builder)

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else "pending"
        return f"FlowHandle({state})"


def export_flow(factory: Callable[[], Flow]) -> Callable[[], FlowHandle]:
    """Turn a flow factory into a plugin entry point."""

    @functools.wraps(factory)
    def entry_point() -> FlowHandle:
        return FlowHandle(FlowBuilder(factory))

    return entry_point
