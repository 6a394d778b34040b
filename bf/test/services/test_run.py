"""Tests for bf.services.run module."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from bf.core.config import CONFIG_FILE_NAME
from bf.core.context import Context
from bf.core.result import Err, Ok
from bf.flow.errors import FlowExecutionFailed
from bf.output.console import MockConsole
from bf.platform.detection import Platform
from bf.plugins.errors import LibraryLoadingError, SymbolLoadingError
from bf.services.errors import InvalidContextParameter, ProductNotDefined, UnknownPlatform
from bf.services.run import RunRequest, RunService, parse_context_params, print_context

PLUGIN_SOURCE = textwrap.dedent(
    """
    from bf.actions import AdHocAction, EchoAction, Key
    from bf.core.result import Err
    from bf.flow import ActionFailed, BasicFlow
    from bf.platform import Platform
    from bf.plugins import export_flow


    def _fail(context, platform):
        context.put("progress", str(platform))
        if context.get("fail", str) == "yes":
            return Err(ActionFailed(action="adhoc", message="asked to fail"))
        context.put("done", str(platform))


    @export_flow
    def make_flow():
        return BasicFlow(
            name="greet",
            platforms=[Platform.LINUX, Platform.MACOS],
            actions=[EchoAction(Key("name"), hint="greet"), AdHocAction(_fail, hint="maybe-fail")],
        )
    """
)


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    path = tmp_path / "greet_flow.py"
    path.write_text(PLUGIN_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


class TestParseContextParams:
    def test_pairs(self) -> None:
        assert parse_context_params(["a=1", "b=x=y", "empty="]) == Ok({"a": "1", "b": "x=y", "empty": ""})

    @pytest.mark.parametrize("raw", ["novalue", "=value", " =x"])
    def test_invalid(self, raw: str) -> None:
        assert parse_context_params([raw]) == Err(InvalidContextParameter(raw=raw))


class TestPrintContext:
    def test_lists_entries(self, console: MockConsole) -> None:
        context = Context(console=console)
        context.put("name", "bf")

        print_context(context, console)

        assert console.messages == ["Context", "name => 'bf'"]


class TestRunService:
    def test_runs_every_declared_platform(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        request = RunRequest(input_folder=tmp_path, artifact=artifact, context_params=("name=world",))

        result = RunService(console).run(request)

        assert isinstance(result, Ok)
        outcome = result.value
        assert [s.platform for s in outcome.summaries] == [Platform.LINUX, Platform.MACOS]
        assert outcome.context.get("done", str) == "macos"
        assert console.messages.count("world") == 2
        assert console.find("Summary for greet")
        assert console.find("Total time:")

    def test_single_platform(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        request = RunRequest(input_folder=tmp_path, artifact=artifact, platform="ios")

        result = RunService(console).run(request)

        assert isinstance(result, Ok)
        assert [s.platform for s in result.value.summaries] == [Platform.IOS]
        assert "<missing>" in console.messages

    def test_summary_and_context_toggles(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        request = RunRequest(
            input_folder=tmp_path,
            artifact=artifact,
            platform="linux",
            print_context=True,
            display_summary=False,
        )

        RunService(console).run(request)

        assert not console.find("Summary for")
        assert console.find("done => 'linux'")

    def test_manifest_defaults_apply(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text(
            "[run]\nprint_context = true\ndisplay_summary = false\n", encoding="utf-8"
        )

        RunService(console).run(RunRequest(input_folder=tmp_path, artifact=artifact, platform="linux"))

        assert not console.find("Summary for")
        assert console.find("Context")

    def test_builds_single_declared_product(self, tmp_path: Path, console: MockConsole) -> None:
        source = tmp_path / "src" / "greet.py"
        source.parent.mkdir()
        source.write_text(PLUGIN_SOURCE, encoding="utf-8")
        script = "import pathlib, shutil; pathlib.Path('out').mkdir(); shutil.copy('src/greet.py', 'out/greet.py')"
        (tmp_path / CONFIG_FILE_NAME).write_text(
            f'[[products]]\nname = "greet"\nbuild = [{sys.executable!r}, "-c", {script!r}]\noutput = "out"\n',
            encoding="utf-8",
        )

        result = RunService(console).run(RunRequest(input_folder=tmp_path, platform="linux"))

        assert isinstance(result, Ok)

    def test_flow_failure(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        request = RunRequest(input_folder=tmp_path, artifact=artifact, context_params=("fail=yes",))

        result = RunService(console).run(request)

        assert isinstance(result, Err)
        assert isinstance(result.error, FlowExecutionFailed)
        assert result.error.platform == Platform.LINUX
        assert result.error.partial.hints == ["greet"]

    def test_flow_failure_prints_context(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        request = RunRequest(
            input_folder=tmp_path,
            artifact=artifact,
            context_params=("fail=yes",),
            platform="linux",
            print_context=True,
        )

        result = RunService(console).run(request)

        assert isinstance(result, Err)
        assert isinstance(result.error, FlowExecutionFailed)
        assert console.find("Context")
        assert console.find("fail => 'yes'")
        assert console.find("progress => 'linux'")
        assert not console.find("done =>")

    def test_flow_failure_keeps_given_context(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        context = Context(console=console)
        request = RunRequest(input_folder=tmp_path, artifact=artifact, context_params=("fail=yes",), platform="linux")

        result = RunService(console).run(request, context)

        assert isinstance(result, Err)
        assert context.get("progress", str) == "linux"
        assert context.get("done", str) is None
        assert not console.find("progress =>")

    def test_invalid_seed(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        result = RunService(console).run(RunRequest(input_folder=tmp_path, artifact=artifact, context_params=("x",)))

        assert result == Err(InvalidContextParameter(raw="x"))

    def test_unknown_platform(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        result = RunService(console).run(RunRequest(input_folder=tmp_path, artifact=artifact, platform="amiga"))

        assert result == Err(UnknownPlatform(name="amiga"))

    def test_no_product_and_no_manifest(self, tmp_path: Path, console: MockConsole) -> None:
        result = RunService(console).run(RunRequest(input_folder=tmp_path))

        assert result == Err(ProductNotDefined(name="", available=()))

    def test_bad_entry_point(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        request = RunRequest(input_folder=tmp_path, artifact=artifact, entry_point="make_nothing")

        result = RunService(console).run(request)

        assert result == Err(SymbolLoadingError(entry_point="make_nothing"))

    def test_missing_artifact(self, tmp_path: Path, console: MockConsole) -> None:
        result = RunService(console).run(RunRequest(input_folder=tmp_path, artifact=tmp_path / "none.py"))

        assert isinstance(result, Err)
        assert isinstance(result.error, LibraryLoadingError)

    def test_plugin_released_after_run(self, tmp_path: Path, artifact: Path, console: MockConsole) -> None:
        before = {name for name in sys.modules if name.startswith("_bf_plugin_")}

        RunService(console).run(RunRequest(input_folder=tmp_path, artifact=artifact, platform="linux"))

        after = {name for name in sys.modules if name.startswith("_bf_plugin_")}
        assert after == before
