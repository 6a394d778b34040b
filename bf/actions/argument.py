"""Action arguments resolved against the run context.

A plain ``str`` is used as-is; ``Key`` reads a string stored by an earlier
step; ``Modified`` reads a string and passes it through a function first.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from bf.core.context import Context


@dataclass(frozen=True, slots=True)
class Raw:
    value: str


@dataclass(frozen=True, slots=True)
class Key:
    key: str


@dataclass(frozen=True, slots=True)
class Modified:
    key: str
    modifier: Callable[[Context, str], str]


type Argument = str | Raw | Key | Modified


def resolve_argument(context: Context, argument: Argument) -> str | None:
    """Return the argument's value; None when its context key holds no string."""
    match argument:
        case str():
            return argument
        case Raw(value=value):
            return value
        case Key(key=key):
            return context.get(key, str)
        case Modified(key=key, modifier=modifier):
            value = context.get(key, str)
            return None if value is None else modifier(context, value)


def argument_key(argument: Argument) -> str:
    """Context key an argument reads from, or its literal value."""
    match argument:
        case Key(key=key) | Modified(key=key):
            return key
        case Raw(value=value):
            return value
        case str():
            return argument
