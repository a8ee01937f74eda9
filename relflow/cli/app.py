from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from relflow import __version__
from relflow.cli.context import build_context, build_orchestrator
from relflow.core.errors import ErrorCode
from relflow.core.result import Err
from relflow.release.errors import ReleaseError, ReleaseErrorKind
from relflow.release.model import ReleaseRequest, VersionBump
from relflow.release.steps import DEFAULT_STEPS, parse_steps


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
    help="Tag and publish a new version of the package.",
)


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    match kind:
        case "configuration":
            return ErrorCode.USER_ERROR
        case "precondition":
            return ErrorCode.ENV_ERROR
        case "step_failed" | "invalid_changelog":
            return ErrorCode.STEP_ERROR
        case "prompt":
            return ErrorCode.PROMPT_ERROR


def _exit(error: ReleaseError) -> NoReturn:
    typer.echo(f"error: {error.pretty()}", err=True)
    raise typer.Exit(code=int(release_error_code(error.kind)))


def _parse_type(raw: str | None) -> VersionBump | None:
    if raw is None:
        return None
    level = VersionBump.parse(raw)
    if level is None:
        _exit(
            ReleaseError(
                kind="configuration",
                message=f"invalid --type value: {raw}",
                hint='can be "major", "minor" or "patch"',
            )
        )
    return level


@app.command()
def release(
    type_: str | None = typer.Option(
        None,
        "--type",
        help='Version type; can be "major", "minor" or "patch".',
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Dry run mode; no changes are made."),
    steps: str = typer.Option(
        DEFAULT_STEPS,
        "--steps",
        help=(
            "Which release steps to run; a comma-separated list of values that can include "
            '"test", "build", "version", "tag", "publish" and "docs". '
            "If no value is given, all steps are run. Example: --steps=test,build,version,tag"
        ),
    ),
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    # Arguments are validated before anything touches the repository.
    version_type = _parse_type(type_)
    selected = parse_steps(steps)
    if isinstance(selected, Err):
        _exit(selected.error)

    request = ReleaseRequest(version_type=version_type, dry_run=dry_run, steps=selected.value)
    ctx = build_context(repo)
    console = ctx.console

    if dry_run:
        console.warning("Dry run mode: no changes will be pushed to the registry or upstream")

    orchestrator = build_orchestrator(ctx, request)
    try:
        result = orchestrator.run()
    except Exception as e:
        console.error(f"release aborted by an unexpected error: {e!r}")
        raise typer.Exit(code=int(ErrorCode.INTERNAL_ERROR)) from e

    if isinstance(result, Err):
        console.error(result.error.pretty())
        raise typer.Exit(code=int(release_error_code(result.error.kind)))

    ran = ", ".join(str(s) for s in result.value.ran)
    console.success(f"release finished ({ran})")


def main() -> None:
    app()
