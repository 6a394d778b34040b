"""Subprocess execution with Result-based error handling.

``run`` is the blocking form used outside of flows (package builds).
``run_async`` is what actions await: it suspends the running flow until the
child exits, so exactly one external process is in flight per run.

Usage:
    match await run_async(["git", "rev-parse", "HEAD"], cwd=repo, capture=True):
        case Ok(output):
            context.put("sha", output.stdout.strip())
        case Err(error):
            return Err(ProcessFailed(error))
"""

from __future__ import annotations

import asyncio
import subprocess
from dataclasses import dataclass
from pathlib import Path

from bf.core.result import Err, Ok, Result

__all__ = ["ProcessError", "ProcessOutput", "run", "run_async"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 when the process could not run at all.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the launch/timeout reason.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    returncode: int
    stdout: str
    stderr: str


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )
    return Ok(proc.stdout)


async def run_async(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    capture: bool = True,
    timeout: float | None = None,
) -> Result[ProcessOutput, ProcessError]:
    """Execute a command without blocking the event loop.

    With ``capture=False`` the child inherits the terminal and the returned
    output strings are empty.
    """
    pipe = asyncio.subprocess.PIPE if capture else None
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd),
            env=env,
            stdout=pipe,
            stderr=pipe,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    try:
        out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        proc.kill()
        await proc.wait()
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )

    stdout = out.decode("utf-8", errors="replace") if out else ""
    stderr = err.decode("utf-8", errors="replace") if err else ""
    returncode = proc.returncode if proc.returncode is not None else -1
    if returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout=stdout, stderr=stderr))
    return Ok(ProcessOutput(returncode=returncode, stdout=stdout, stderr=stderr))
