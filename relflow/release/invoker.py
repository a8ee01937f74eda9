"""The boundary where a release touches the outside world.

Every externally visible action (running a toolchain command, writing a file
that will be committed) goes through an `Invoker`. The CLI picks one
implementation per run:

- `LiveInvoker` executes the action.
- `DryRunInvoker` records it and prints what would have happened.

Code above this boundary never checks for dry-run mode itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Protocol

from relflow.core.result import Err, Ok, Result
from relflow.output.console import ConsoleProtocol, Style
from relflow.platform.files import atomic_write_text
from relflow.platform.process import run_live

InvocationAction = Literal["run", "write"]

# options whose value must never reach the terminal or CI logs
_SECRET_OPTIONS = ("--otp=",)


def _redact(arg: str) -> str:
    for option in _SECRET_OPTIONS:
        if arg.startswith(option):
            return f"{option}***"
    return arg


@dataclass(frozen=True, slots=True)
class Invocation:
    action: InvocationAction
    args: tuple[str, ...]

    def describe(self) -> str:
        match self.action:
            case "run":
                return " ".join(_redact(a) for a in self.args)
            case "write":
                return f"write {self.args[0]}"


@dataclass(frozen=True, slots=True)
class InvocationError:
    invocation: Invocation
    message: str
    returncode: int | None = None


class Invoker(Protocol):
    @property
    def dry_run(self) -> bool: ...

    def run(self, cmd: Sequence[str], *, cwd: Path) -> Result[None, InvocationError]: ...

    def write_text(self, path: Path, content: str) -> Result[None, InvocationError]: ...


class LiveInvoker:
    """Executes commands with inherited stdio and writes files atomically."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    @property
    def dry_run(self) -> bool:
        return False

    def run(self, cmd: Sequence[str], *, cwd: Path) -> Result[None, InvocationError]:
        invocation = Invocation("run", tuple(cmd))
        self._console.print(invocation.describe(), Style.DIM)
        result = run_live(cmd, cwd=cwd)
        if isinstance(result, Err):
            e = result.error
            return Err(
                InvocationError(
                    invocation=invocation,
                    message=e.stderr.strip(),
                    returncode=e.returncode,
                )
            )
        return Ok(None)

    def write_text(self, path: Path, content: str) -> Result[None, InvocationError]:
        invocation = Invocation("write", (str(path),))
        self._console.print(invocation.describe(), Style.DIM)
        try:
            atomic_write_text(path, content)
        except OSError as e:
            return Err(InvocationError(invocation=invocation, message=str(e)))
        return Ok(None)


def _empty_invocations() -> list[Invocation]:
    return []


@dataclass
class DryRunInvoker:
    """Records every action instead of performing it."""

    console: ConsoleProtocol
    invocations: list[Invocation] = field(default_factory=_empty_invocations)
    written: dict[Path, str] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return True

    def run(self, cmd: Sequence[str], *, cwd: Path) -> Result[None, InvocationError]:
        self._record(Invocation("run", tuple(cmd)))
        return Ok(None)

    def write_text(self, path: Path, content: str) -> Result[None, InvocationError]:
        self._record(Invocation("write", (str(path),)))
        self.written[path] = content
        return Ok(None)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [i.args for i in self.invocations if i.action == "run"]

    def _record(self, invocation: Invocation) -> None:
        self.invocations.append(invocation)
        self.console.print(f"[dry-run] {invocation.describe()}", Style.DIM)


def select_invoker(*, dry_run: bool, console: ConsoleProtocol) -> Invoker:
    if dry_run:
        return DryRunInvoker(console=console)
    return LiveInvoker(console)
