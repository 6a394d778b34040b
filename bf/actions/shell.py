from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from bf.core.context import Context
from bf.core.result import Err, Ok, Result
from bf.flow.action import Action
from bf.flow.errors import ActionError, ArgumentMissing, ProcessFailed
from bf.output.console import Style
from bf.platform.detection import Platform
from bf.platform.process import run_async

from .argument import Argument, argument_key, resolve_argument


class ShellAction(Action):
    """Runs an external command.

    Arguments are resolved against the context; a ``Key`` argument whose value
    is missing fails the action before anything is spawned. With
    ``capture_key`` the command's stdout, stripped, is stored in the context.
    """

    name = "sh"
    description = "Action to execute shell commands"

    def __init__(
        self,
        command: str,
        arguments: Sequence[Argument] = (),
        *,
        capture_key: str | None = None,
        working_directory: Path | None = None,
        output_to_console: bool = False,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        hint: str = "-",
        mutual_exclusivity_key: str | None = None,
    ) -> None:
        super().__init__(hint=hint, mutual_exclusivity_key=mutual_exclusivity_key)
        self.command = command
        self.arguments = tuple(arguments)
        self.capture_key = capture_key
        self.working_directory = working_directory
        self.output_to_console = output_to_console
        self.env = env
        self.timeout = timeout

    def build_command(self, context: Context) -> Result[list[str], ActionError]:
        cmd = [self.command]
        for argument in self.arguments:
            value = resolve_argument(context, argument)
            if value is None:
                return Err(ArgumentMissing(action=self.name, key=argument_key(argument)))
            cmd.append(value)
        return Ok(cmd)

    async def execute(self, context: Context, platform: Platform) -> Result[None, ActionError]:
        built = self.build_command(context)
        if isinstance(built, Err):
            return built
        cmd = built.value

        if self.output_to_console:
            context.console.print(" ".join(cmd), Style.DIM)

        capture = self.capture_key is not None or not self.output_to_console
        result = await run_async(
            cmd,
            cwd=self.working_directory or Path.cwd(),
            env=self.env,
            capture=capture,
            timeout=self.timeout,
        )
        if isinstance(result, Err):
            return Err(ProcessFailed(action=self.name, error=result.error))

        output = result.value
        if self.output_to_console and capture and output.stdout:
            context.console.print(output.stdout.rstrip("\n"))
        if self.capture_key is not None:
            context.put(self.capture_key, output.stdout.strip())
        return Ok(None)
