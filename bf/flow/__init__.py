"""Action/flow model and the flow runner."""

from .action import Action, passes_gates, run_gated
from .call_flow import CallFlowAction
from .composite import CompositeAction
from .conditional import ConditionalAction
from .errors import (
    ActionError,
    ActionFailed,
    ArgumentMissing,
    FileOpFailed,
    FlowDefinitionError,
    FlowError,
    FlowExecutionFailed,
    ProcessFailed,
    ResolveFailed,
    describe_action_error,
    root_cause,
)
from .flow import BasicFlow, Flow, FlowBuilder
from .measurements import Measurement, add_measurement, get_measurements
from .runner import FlowRunner
from .summary import ActionTiming, ExecutionSummary

__all__ = [
    # action
    "Action",
    "passes_gates",
    "run_gated",
    # combinators
    "CallFlowAction",
    "CompositeAction",
    "ConditionalAction",
    # errors
    "ActionError",
    "ActionFailed",
    "ArgumentMissing",
    "FileOpFailed",
    "FlowDefinitionError",
    "FlowError",
    "FlowExecutionFailed",
    "ProcessFailed",
    "ResolveFailed",
    "describe_action_error",
    "root_cause",
    # flow
    "BasicFlow",
    "Flow",
    "FlowBuilder",
    # measurements
    "Measurement",
    "add_measurement",
    "get_measurements",
    # runner
    "FlowRunner",
    # summary
    "ActionTiming",
    "ExecutionSummary",
]
