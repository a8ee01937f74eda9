"""Shared fixtures for release tests: a throwaway package repo and doubles."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from relflow.core.config import Environment, ReleaseConfig
from relflow.core.result import Err, Ok, Result
from relflow.git.repository import GitError, Repository
from relflow.output.console import MockConsole
from relflow.release.interaction import ScriptedInteraction
from relflow.release.invoker import DryRunInvoker, Invocation, InvocationError
from relflow.release.model import ReleaseRequest
from relflow.release.orchestrator import ReleaseOrchestrator
from relflow.release.toolchain import ReleaseToolchain

NPM_LAUNCHER = "/usr/lib/node_modules/npm/bin/npm-cli.js"


def make_package(
    root: Path,
    *,
    version: str = "1.2.3",
    fragments: dict[str, str] | None = None,
    changelog: str | None = None,
) -> ReleaseConfig:
    (root / "package.json").write_text(
        json.dumps({"name": "@acme/widgets", "version": version}), encoding="utf-8"
    )
    if fragments:
        d = root / "upcoming_changelogs"
        d.mkdir()
        for name, text in fragments.items():
            (d / name).write_text(text, encoding="utf-8")
    if changelog is not None:
        (root / "CHANGELOG.md").write_text(changelog, encoding="utf-8")
    return ReleaseConfig(repo_root=root)


class FakeRepository(Repository):
    def __init__(self, path: Path, branch: Result[str | None, GitError] = Ok("main")) -> None:
        super().__init__(path)
        self._branch = branch
        self.queried = 0

    def current_branch(self) -> Result[str | None, GitError]:
        self.queried += 1
        return self._branch


@dataclass
class FailingInvoker(DryRunInvoker):
    """Dry-run recorder that fails any command starting with `fail_on`."""

    fail_on: tuple[str, ...] = field(default_factory=tuple)

    def run(self, cmd: Sequence[str], *, cwd: Path) -> Result[None, InvocationError]:
        recorded = super().run(cmd, cwd=cwd)
        if self.fail_on and tuple(cmd[: len(self.fail_on)]) == self.fail_on:
            return Err(
                InvocationError(
                    invocation=Invocation("run", tuple(cmd)), message="", returncode=1
                )
            )
        return recorded


def npm_env(
    *, is_ci: bool = False, otp: str | None = None, interactive: bool = True
) -> Environment:
    return Environment(is_ci=is_ci, otp=otp, launcher=NPM_LAUNCHER, interactive=interactive)


@dataclass
class Harness:
    orchestrator: ReleaseOrchestrator
    invoker: DryRunInvoker
    console: MockConsole
    interaction: ScriptedInteraction
    repository: FakeRepository
    config: ReleaseConfig


def make_harness(
    config: ReleaseConfig,
    *,
    request: ReleaseRequest | None = None,
    environment: Environment | None = None,
    interaction: ScriptedInteraction | None = None,
    fail_on: tuple[str, ...] = (),
    repository: FakeRepository | None = None,
) -> Harness:
    console = MockConsole()
    invoker = FailingInvoker(console=console, fail_on=fail_on)
    interaction = interaction or ScriptedInteraction()
    repository = repository or FakeRepository(config.repo_root)
    orchestrator = ReleaseOrchestrator(
        request=request or ReleaseRequest(),
        config=config,
        environment=environment or npm_env(),
        toolchain=ReleaseToolchain(config=config, invoker=invoker),
        interaction=interaction,
        console=console,
        repository=repository,
    )
    return Harness(
        orchestrator=orchestrator,
        invoker=invoker,
        console=console,
        interaction=interaction,
        repository=repository,
        config=config,
    )
