"""Flow definitions.

A flow is a named pipeline targeting one or more platforms. Its action list is
computed per platform from the context, so a flow can shape its steps from
values seeded on the command line or left behind by an earlier flow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from bf.core.context import Context
from bf.platform.detection import Platform

from .action import Action

__all__ = ["ActionsFactory", "BasicFlow", "Flow", "FlowBuilder", "resolve_actions"]

type ActionsFactory = Callable[[Context, Platform], Sequence[Action]]


def resolve_actions(
    source: Sequence[Action] | ActionsFactory,
    context: Context,
    platform: Platform,
) -> list[Action]:
    """Materialize a static action list or call a factory for a fresh one."""
    if callable(source):
        return list(source(context, platform))
    return list(source)


class Flow(ABC):
    """Named, platform-scoped pipeline."""

    name: str = "flow"
    description: str = ""
    platforms: tuple[Platform, ...] = ()

    @abstractmethod
    def actions(self, context: Context, platform: Platform) -> Sequence[Action]:
        """Return the ordered steps for ``platform``.

        Raises:
            FlowDefinitionError: The steps cannot be built from this context.
        """


class BasicFlow(Flow):
    """Flow assembled from a list of actions or a factory producing one."""

    def __init__(
        self,
        *,
        name: str,
        platforms: Sequence[Platform],
        actions: Sequence[Action] | ActionsFactory,
        description: str = "",
    ) -> None:
        self.name = name
        self.platforms = tuple(platforms)
        self.description = description
        self._actions = actions

    def actions(self, context: Context, platform: Platform) -> list[Action]:
        return resolve_actions(self._actions, context, platform)

    def __repr__(self) -> str:
        platforms = ", ".join(str(p) for p in self.platforms)
        return f"BasicFlow(name={self.name!r}, platforms=[{platforms}])"


class FlowBuilder:
    """Object vended by a plugin; ``build()`` produces its flow."""

    def __init__(self, factory: Callable[[], Flow]) -> None:
        self._factory = factory

    def build(self) -> Flow:
        return self._factory()
