from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import typer

from relflow.core.config import Environment, ReleaseConfig, load_config_or_default
from relflow.core.errors import ErrorCode
from relflow.core.result import Err
from relflow.git.repository import Repository
from relflow.output.console import ConsoleProtocol, RichConsole
from relflow.release.interaction import InteractionPort, TyperInteraction
from relflow.release.invoker import Invoker, select_invoker
from relflow.release.model import ReleaseRequest
from relflow.release.orchestrator import ReleaseOrchestrator
from relflow.release.toolchain import ReleaseToolchain


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    environment: Environment
    console: ConsoleProtocol


def build_context(repo: Path | None) -> CLIContext:
    root = (repo or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        typer.echo(f"error: repository root not found: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    environment = Environment.from_environ(os.environ, interactive=sys.stdin.isatty())

    return CLIContext(
        config=config_result.value,
        environment=environment,
        console=RichConsole(),
    )


def build_orchestrator(
    ctx: CLIContext,
    request: ReleaseRequest,
    *,
    invoker: Invoker | None = None,
    interaction: InteractionPort | None = None,
) -> ReleaseOrchestrator:
    """Wire the orchestrator; the invoker is chosen once from `request.dry_run`."""
    if invoker is None:
        invoker = select_invoker(dry_run=request.dry_run, console=ctx.console)
    return ReleaseOrchestrator(
        request=request,
        config=ctx.config,
        environment=ctx.environment,
        toolchain=ReleaseToolchain(config=ctx.config, invoker=invoker),
        interaction=interaction or TyperInteraction(),
        console=ctx.console,
        repository=Repository(ctx.config.repo_root),
    )
