"""Tests for bf.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from bf.core.errors import ErrorCode
from bf.flow.errors import ActionFailed, FlowExecutionFailed, ResolveFailed
from bf.flow.summary import ActionTiming, ExecutionSummary
from bf.output.console import MockConsole
from bf.output.errors import print_run_error, run_error_exit_code
from bf.platform.detection import Platform
from bf.plugins.errors import HandleConsumed, LibraryLoadingError, SymbolLoadingError
from bf.services.errors import (
    AmbiguousProduct,
    BinaryProductMissing,
    BuildCommandFailed,
    InvalidContextParameter,
    ManifestInvalid,
    ProductNotDefined,
    UnknownPlatform,
)
from bf.services.run import RunFailure


def _failed_flow() -> FlowExecutionFailed:
    return FlowExecutionFailed(
        flow_name="release",
        platform=Platform.IOS,
        action_name="sh",
        hint="archive",
        cause=ActionFailed(action="sh", message="signing failed"),
        partial=ExecutionSummary(
            flow_name="release",
            platform=Platform.IOS,
            action_timings=(ActionTiming("echo", "start", 0.1),),
            total_time=0.2,
        ),
    )


class TestRunErrorExitCode:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (InvalidContextParameter(raw="x"), ErrorCode.USER_ERROR),
            (UnknownPlatform(name="amiga"), ErrorCode.USER_ERROR),
            (ProductNotDefined(name="app", available=()), ErrorCode.USER_ERROR),
            (AmbiguousProduct(product="app", candidates=("a", "b")), ErrorCode.USER_ERROR),
            (ManifestInvalid(path=None, reason="bad"), ErrorCode.USER_ERROR),
            (LibraryLoadingError(path="a.py", message="boom"), ErrorCode.ENV_ERROR),
            (SymbolLoadingError(entry_point="make_flow"), ErrorCode.ENV_ERROR),
            (HandleConsumed(), ErrorCode.ENV_ERROR),
            (BuildCommandFailed(command=("make",), returncode=2), ErrorCode.BUILD_ERROR),
            (ResolveFailed(flow_name="f", platform=Platform.LINUX, message="m"), ErrorCode.BUILD_ERROR),
            (_failed_flow(), ErrorCode.BUILD_ERROR),
            (BinaryProductMissing(product="app", output_dir=Path("out")), ErrorCode.IO_ERROR),
        ],
    )
    def test_mapping(self, error: RunFailure, expected: ErrorCode) -> None:
        assert run_error_exit_code(error) == int(expected)


class TestPrintRunError:
    def test_flow_failure_shows_cause_and_partial_summary(self) -> None:
        console = MockConsole()

        print_run_error(_failed_flow(), console)

        assert console.messages[0] == "error: Flow release failed on ios"
        assert console.messages[1] == "sh: signing failed"
        assert "Summary for release" in console.messages
        assert "1 | echo | start | 0.100" in console.messages

    def test_product_not_defined_lists_available(self) -> None:
        console = MockConsole()

        print_run_error(ProductNotDefined(name="app", available=("lib", "tool")), console)

        assert console.messages == ["error: Product not defined: app", "Available: lib, tool"]

    def test_plugin_error(self) -> None:
        console = MockConsole()

        print_run_error(SymbolLoadingError(entry_point="make_flow"), console)

        assert console.messages == ["error: Plugin has no callable entry point 'make_flow'"]

    def test_every_error_prints_something(self) -> None:
        errors: list[RunFailure] = [
            InvalidContextParameter(raw="x"),
            UnknownPlatform(name="amiga"),
            ManifestInvalid(path=Path("buildflow.toml"), reason="bad"),
            BuildCommandFailed(command=("make",), returncode=2, stderr="oops"),
            BinaryProductMissing(product="app", output_dir=Path("out")),
            AmbiguousProduct(product="app", candidates=("a", "b")),
            ResolveFailed(flow_name="f", platform=Platform.LINUX, message="m"),
        ]
        for error in errors:
            console = MockConsole()
            print_run_error(error, console)
            assert console.has_error(), error
