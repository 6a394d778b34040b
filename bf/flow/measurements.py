"""Measurements of long steps, kept in the run context for later audit."""

from __future__ import annotations

from dataclasses import dataclass

from bf.core.context import Context, OptionValue

MEASUREMENTS_KEY = "measurements"


@dataclass(frozen=True, slots=True)
class Measurement:
    """What a step saw and how long it took.

    Attributes:
        context_data: Requested context keys; absent ones hold ``MISSING``.
        start_time: Wall-clock start, seconds since the epoch.
        execution_time: Monotonic duration in seconds.
        hint: Hint of the measured step.
    """

    context_data: dict[str, OptionValue[object]]
    start_time: float
    execution_time: float
    hint: str


def get_measurements(context: Context) -> dict[str, Measurement]:
    return dict(context.get(MEASUREMENTS_KEY, dict) or {})


def add_measurement(context: Context, measurement: Measurement, *, key: str) -> None:
    """Store ``measurement`` under ``key``, replacing an older one."""
    measurements = get_measurements(context)
    measurements[key] = measurement
    context.put(MEASUREMENTS_KEY, measurements)
