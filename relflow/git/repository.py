"""Git queries the release needs before it starts.

Only read-only commands live here; anything that changes the repository goes
through the release invoker so a dry run can record it instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.platform.process import ProcessError
from relflow.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    command: str  # git subcommand, e.g. "rev-parse"
    message: str
    returncode: int = 1


class Repository:
    def __init__(self, path: Path) -> None:
        self.path = path

    def current_branch(self) -> Result[str | None, GitError]:
        """Checked-out branch, or Ok(None) on a detached HEAD."""
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="rev-parse",
                        message=e.stderr.strip() or "git rev-parse failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                branch = stdout.strip()
                return Ok(None if branch in ("", "HEAD") else branch)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )
