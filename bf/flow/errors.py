"""Errors returned by actions and flows.

An action returns one of the ``ActionError`` variants. The runner wraps the
first failing action's error in ``FlowExecutionFailed`` together with the
timings gathered so far; nested flows wrap again, so the chain can be walked
with ``root_cause``.
"""

from __future__ import annotations

from dataclasses import dataclass

from bf.platform.detection import Platform
from bf.platform.file_errors import FileOpError, describe_file_error
from bf.platform.process import ProcessError

from .summary import ExecutionSummary


@dataclass(frozen=True, slots=True)
class ActionFailed:
    action: str
    message: str


@dataclass(frozen=True, slots=True)
class ArgumentMissing:
    action: str
    key: str


@dataclass(frozen=True, slots=True)
class ProcessFailed:
    action: str
    error: ProcessError


@dataclass(frozen=True, slots=True)
class FileOpFailed:
    action: str
    error: FileOpError


@dataclass(frozen=True, slots=True)
class ResolveFailed:
    """The flow could not produce its action list."""

    flow_name: str
    platform: Platform
    message: str


@dataclass(frozen=True, slots=True)
class FlowExecutionFailed:
    """An action of ``flow_name`` failed; ``partial`` holds the timings before it."""

    flow_name: str
    platform: Platform
    action_name: str
    hint: str
    cause: ActionError
    partial: ExecutionSummary


type FlowError = ResolveFailed | FlowExecutionFailed

type ActionError = ActionFailed | ArgumentMissing | ProcessFailed | FileOpFailed | ResolveFailed | FlowExecutionFailed


class FlowDefinitionError(Exception):
    """Raised by ``Flow.actions`` when it cannot build its action list.

    The runner turns it into ``ResolveFailed`` before any action runs.
    """


def root_cause(error: ActionError) -> ActionError:
    """Follow ``FlowExecutionFailed.cause`` down to the original error."""
    while isinstance(error, FlowExecutionFailed):
        error = error.cause
    return error


def describe_action_error(error: ActionError) -> str:
    match error:
        case ActionFailed(action=action, message=message):
            return f"{action}: {message}"
        case ArgumentMissing(action=action, key=key):
            return f"{action}: context value '{key}' is missing"
        case ProcessFailed(action=action, error=process_error):
            details = process_error.stderr.strip()
            text = f"{action}: {process_error}"
            return f"{text}: {details}" if details else text
        case FileOpFailed(action=action, error=file_error):
            return f"{action}: {describe_file_error(file_error)}"
        case ResolveFailed(flow_name=flow_name, platform=platform, message=message):
            return f"flow '{flow_name}' on {platform}: {message}"
        case FlowExecutionFailed(flow_name=flow_name, platform=platform, action_name=name, hint=hint, cause=cause):
            return f"flow '{flow_name}' on {platform} failed at {name} [{hint}]: {describe_action_error(cause)}"
