"""The single place where relflow starts child processes.

`run` captures output and is meant for short queries (`git rev-parse`).
`run_live` lets the child share our terminal, which is what test runners,
builds and `npm publish` (with its own prompts) expect.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_live"]

# returncode reported when the child never ran (not found, timed out)
NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        program = self.command[0] if self.command else "<empty command>"
        if self.returncode == NOT_STARTED:
            return f"{program} could not run: {self.stderr}"
        return f"{program} exited with status {self.returncode}"


def _not_started(cmd: Sequence[str], reason: str) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=NOT_STARTED, stdout="", stderr=reason))


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run `cmd` in `cwd` and return its stdout; a non-zero exit is an Err."""
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return _not_started(cmd, f"timed out after {timeout}s")
    except OSError as e:
        return _not_started(cmd, str(e))

    if proc.returncode:
        return Err(ProcessError(tuple(cmd), proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)


def run_live(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Run `cmd` attached to this terminal. Nothing is captured."""
    try:
        returncode = subprocess.run(list(cmd), cwd=cwd, env=env, check=False).returncode
    except OSError as e:
        return _not_started(cmd, str(e))

    if returncode:
        return Err(ProcessError(tuple(cmd), returncode, "", ""))
    return Ok(None)
