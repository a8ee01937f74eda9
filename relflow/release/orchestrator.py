"""Release orchestration.

One run is a single linear pass:

    preflight -> branch check -> test -> build -> version -> tag -> publish -> docs

Steps the operator did not select are skipped without side effects. The first
failure ends the run; nothing is retried or rolled back, so an interrupted
release is resumed by re-running with the remaining `--steps`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from relflow.changelog.classifier import classify
from relflow.core.config import Environment, ReleaseConfig
from relflow.core.result import Err, Ok, Result
from relflow.git.repository import Repository
from relflow.output.console import ConsoleProtocol, Style
from relflow.release.errors import ReleaseError
from relflow.release.fsm import StepHandler, run_state_machine
from relflow.release.interaction import InteractionPort
from relflow.release.model import ALL_STEPS, ReleaseRequest, ReleaseRunState, ReleaseStep
from relflow.release.recommend import recommend, report_changes, resolve_version_type
from relflow.release.toolchain import ReleaseToolchain

StepBody = Callable[[ReleaseRunState], Result[ReleaseRunState, ReleaseError]]


class ReleaseOrchestrator:
    def __init__(
        self,
        *,
        request: ReleaseRequest,
        config: ReleaseConfig,
        environment: Environment,
        toolchain: ReleaseToolchain,
        interaction: InteractionPort,
        console: ConsoleProtocol,
        repository: Repository | None = None,
    ) -> None:
        self._request = request
        self._config = config
        self._env = environment
        self._toolchain = toolchain
        self._interaction = interaction
        self._console = console
        self._repository = repository or Repository(config.repo_root)

    def run(self) -> Result[ReleaseRunState, ReleaseError]:
        ok = self.preflight()
        if isinstance(ok, Err):
            return ok

        ok = self.check_branch()
        if isinstance(ok, Err):
            return ok

        initial = ReleaseRunState(remaining=ALL_STEPS, dry_run=self._request.dry_run)
        return run_state_machine(
            initial_state=initial,
            get_step=lambda s: s.current,
            handlers=self._handlers(),
        )

    def preflight(self) -> Result[None, ReleaseError]:
        """Reject runs that cannot complete, before any step executes."""
        required = self._config.required_launcher
        if required and self._env.launcher_name != required:
            # Publishing relies on the package manager's own auth state.
            return Err(
                ReleaseError(
                    kind="configuration",
                    message="The release script must be run with npm: npm run release",
                    hint=f"expected launcher {required}, got {self._env.launcher_name or 'none'}",
                )
            )

        if self._env.interactive:
            return Ok(None)

        where = "in CI " if self._env.is_ci else ""
        if self._request.selects(ReleaseStep.VERSION) and self._request.version_type is None:
            return Err(
                ReleaseError(
                    kind="configuration",
                    message=f"--type is required when running {where}without a terminal",
                    hint="pass --type major|minor|patch",
                )
            )

        if self._request.selects(ReleaseStep.PUBLISH) and self._env.otp is None:
            return Err(
                ReleaseError(
                    kind="configuration",
                    message=(
                        f"a one-time password is required when publishing {where}"
                        "without a terminal"
                    ),
                    hint="set NPM_OTP",
                )
            )

        return Ok(None)

    def check_branch(self) -> Result[None, ReleaseError]:
        # CI checks out the HEAD commit, not a branch
        if self._env.is_ci:
            self._console.print("CI detected: skipping release branch check", Style.DIM)
            return Ok(None)

        expected = self._config.branch
        current = self._repository.current_branch()
        if isinstance(current, Err):
            return Err(
                ReleaseError(
                    kind="precondition",
                    message="Unable to release: cannot determine the current branch",
                    hint=current.error.message,
                )
            )
        if current.value is None:
            return Err(
                ReleaseError(
                    kind="precondition",
                    message=f'Unable to release: HEAD is detached, expected "{expected}"',
                )
            )
        if current.value != expected:
            return Err(
                ReleaseError(
                    kind="precondition",
                    message=(
                        f'Unable to release: currently on branch "{current.value}", '
                        f'expected "{expected}"'
                    ),
                )
            )
        return Ok(None)

    # -- state machine --------------------------------------------------------

    def _handlers(self) -> dict[ReleaseStep, StepHandler[ReleaseRunState]]:
        bodies: dict[ReleaseStep, StepBody] = {
            ReleaseStep.TEST: self._test,
            ReleaseStep.BUILD: self._build,
            ReleaseStep.VERSION: self._version,
            ReleaseStep.TAG: self._tag,
            ReleaseStep.PUBLISH: self._publish,
            ReleaseStep.DOCS: self._docs,
        }
        return {step: self._handler(step, body) for step, body in bodies.items()}

    def _handler(self, step: ReleaseStep, body: StepBody) -> StepHandler[ReleaseRunState]:
        def handle(state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
            remaining = state.remaining[1:]
            if not self._request.selects(step):
                skipped = replace(
                    state, remaining=remaining, visited=(*state.visited, (step, False))
                )
                return Ok(skipped)

            self._console.header(f"[{step}]")
            result = body(state)
            if isinstance(result, Err):
                return result
            self._console.success(f"{step} done")
            done = result.value
            return Ok(replace(done, remaining=remaining, visited=(*done.visited, (step, True))))

        return handle

    def _test(self, state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
        ok = self._toolchain.run_tests()
        if isinstance(ok, Err):
            return ok
        return Ok(state)

    def _build(self, state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
        ok = self._toolchain.build()
        if isinstance(ok, Err):
            return ok
        return Ok(state)

    def _version(self, state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
        collected = self._toolchain.collect_changes()
        if isinstance(collected, Err):
            return collected

        classification = classify(collected.value.changes)
        if isinstance(classification, Err):
            return classification

        recommendation = recommend(classification.value)
        report_changes(classification.value, recommendation, console=self._console)

        resolved = resolve_version_type(
            recommendation=recommendation,
            explicit=self._request.version_type,
            interactive=self._env.interactive,
            interaction=self._interaction,
            console=self._console,
        )
        if isinstance(resolved, Err):
            return resolved
        level = resolved.value
        # Resolved once; tag/publish/docs reuse this value.
        state = replace(state, version_type=level)

        # The build may have regenerated tracked artifacts; record them against
        # this level before the version commit.
        ok = self._toolchain.update_token_changelog(level)
        if isinstance(ok, Err):
            return ok

        written = self._toolchain.write_changelog(
            classification=classification.value,
            fragments=collected.value.files,
            level=level,
        )
        if isinstance(written, Err):
            return written

        ok = self._toolchain.fetch_tags()
        if isinstance(ok, Err):
            return ok

        ok = self._toolchain.bump_version(level)
        if isinstance(ok, Err):
            return ok

        self._console.print(f"version bumped ({level}) to {written.value.to_tag()}", Style.ACCENT)
        return Ok(state)

    def _tag(self, state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
        ok = self._toolchain.push_tags()
        if isinstance(ok, Err):
            return ok
        return Ok(state)

    def _publish(self, state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
        manifest = self._toolchain.manifest()
        if isinstance(manifest, Err):
            return manifest

        self._console.print(f"Preparing to publish {manifest.value.spec}", Style.INFO)
        self._console.print("Publishing requires a one-time password (2FA)", Style.INFO)

        otp = self._one_time_password()
        if isinstance(otp, Err):
            return otp

        ok = self._toolchain.publish(otp.value)
        if isinstance(ok, Err):
            return ok
        return Ok(state)

    def _one_time_password(self) -> Result[str, ReleaseError]:
        if self._env.otp is not None:
            self._console.print("2FA code provided by NPM_OTP environment variable", Style.INFO)
            return Ok(self._env.otp)

        self._console.print("What is your one-time password?", Style.INFO)
        return self._interaction.request_one_time_password()

    def _docs(self, state: ReleaseRunState) -> Result[ReleaseRunState, ReleaseError]:
        ok = self._toolchain.sync_docs()
        if isinstance(ok, Err):
            return ok
        return Ok(state)
