"""Adapters for the external release collaborators.

Each method performs one delegated action through the injected `Invoker` and
turns a failure into a `step_failed` ReleaseError. Nothing here retries.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relflow.changelog.collate import CollatedChanges, collate_fragments
from relflow.changelog.model import ChangeClassification
from relflow.changelog.render import prepend_release_section
from relflow.core.config import ReleaseConfig
from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError
from relflow.release.invoker import Invoker
from relflow.release.manifest import PackageManifest, read_manifest
from relflow.release.model import VersionBump
from relflow.release.semver import SemVer

CHANGELOG_COMMIT_MESSAGE = "Updated changelog"


class ReleaseToolchain:
    def __init__(self, *, config: ReleaseConfig, invoker: Invoker) -> None:
        self._config = config
        self._invoker = invoker

    @property
    def config(self) -> ReleaseConfig:
        return self._config

    # -- read-only queries (run in every mode) --------------------------------

    def collect_changes(self) -> Result[CollatedChanges, ReleaseError]:
        return collate_fragments(self._config.fragments_path)

    def manifest(self) -> Result[PackageManifest, ReleaseError]:
        return read_manifest(self._config.manifest_path)

    # -- delegated actions ----------------------------------------------------

    def run_tests(self) -> Result[None, ReleaseError]:
        return self._run(self._config.commands.test, what="tests")

    def build(self) -> Result[None, ReleaseError]:
        return self._run(self._config.commands.build, what="build")

    def update_token_changelog(self, level: VersionBump) -> Result[None, ReleaseError]:
        cmd = self._config.commands.token_changelog
        if not cmd:
            return Ok(None)
        return self._run([*cmd, str(level)], what="token changelog update")

    def write_changelog(
        self,
        *,
        classification: ChangeClassification,
        fragments: Sequence[Path],
        level: VersionBump,
    ) -> Result[SemVer, ReleaseError]:
        """Prepend the release section, drop consumed fragments, commit both.

        Returns the version the section was written for.
        """
        manifest = self.manifest()
        if isinstance(manifest, Err):
            return manifest
        next_version = manifest.value.version.bump(level)

        path = self._config.changelog_path
        try:
            existing = path.read_text(encoding="utf-8") if path.exists() else ""
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ReleaseError(kind="step_failed", message=f"failed to read changelog: {e}")
            )

        updated = prepend_release_section(
            existing,
            classification,
            version=next_version,
            repository_url=self._config.repository_url,
        )
        if isinstance(updated, Err):
            return updated

        written = self._invoker.write_text(path, updated.value)
        if isinstance(written, Err):
            return Err(
                ReleaseError(
                    kind="step_failed",
                    message="failed to write changelog",
                    hint=written.error.message,
                )
            )

        root = self._config.repo_root
        steps: list[tuple[list[str], str]] = [
            (["git", "add", self._relative(path)], "git add changelog"),
        ]
        if fragments:
            steps.append(
                (
                    ["git", "rm", "--quiet", *(self._relative(f) for f in fragments)],
                    "git rm changelog fragments",
                )
            )
        steps.append(
            (["git", "commit", "-m", CHANGELOG_COMMIT_MESSAGE, "-n"], "changelog commit")
        )
        for cmd, what in steps:
            ok = self._run(cmd, what=what, cwd=root)
            if isinstance(ok, Err):
                return ok

        return Ok(next_version)

    def fetch_tags(self) -> Result[None, ReleaseError]:
        # Drop local-only tags so `npm version` cannot collide with a stale one.
        cmd = ["git", "fetch", self._config.remote, "--tags", "--prune", "--prune-tags"]
        return self._run(cmd, what="tag fetch")

    def bump_version(self, level: VersionBump) -> Result[None, ReleaseError]:
        return self._run([*self._config.commands.version, str(level)], what="version bump")

    def push_tags(self) -> Result[None, ReleaseError]:
        return self._run(["git", "push", self._config.remote, "--tags"], what="tag push")

    def publish(self, otp: str) -> Result[None, ReleaseError]:
        return self._run([*self._config.commands.publish, f"--otp={otp}"], what="publish")

    def sync_docs(self) -> Result[None, ReleaseError]:
        return self._run(self._config.commands.docs, what="docs sync")

    # -------------------------------------------------------------------------

    def _relative(self, path: Path) -> str:
        try:
            return str(path.relative_to(self._config.repo_root))
        except ValueError:
            return str(path)

    def _run(
        self, cmd: Sequence[str], *, what: str, cwd: Path | None = None
    ) -> Result[None, ReleaseError]:
        result = self._invoker.run(cmd, cwd=cwd or self._config.repo_root)
        if isinstance(result, Err):
            e = result.error
            code = f" (exit {e.returncode})" if e.returncode is not None else ""
            return Err(
                ReleaseError(
                    kind="step_failed",
                    message=f"{what} failed{code}: {e.invocation.describe()}",
                    hint=e.message or None,
                )
            )
        return Ok(None)
