"""Version bump recommendation and resolution."""

from __future__ import annotations

from relflow.changelog.model import ChangeCategory, ChangeClassification
from relflow.core.result import Err, Ok, Result
from relflow.output.console import ConsoleProtocol, Style
from relflow.release.errors import ReleaseError
from relflow.release.interaction import InteractionPort
from relflow.release.model import VersionBump


def recommend(classification: ChangeClassification) -> VersionBump:
    """Recommend a bump level for the pending changes.

    Rules are applied in order, each later rule overriding the earlier ones:

    1. MINOR by default: a release is assumed to ship new functionality.
    2. PATCH when there are bug fixes and no features.
    3. MAJOR whenever there is a breaking change.
    """
    has_features = classification.has(ChangeCategory.FEATURES)
    has_bug_fixes = classification.has(ChangeCategory.BUG_FIXES)
    has_breaking_changes = classification.has(ChangeCategory.BREAKING_CHANGES)

    recommended = VersionBump.MINOR

    if has_bug_fixes and not has_features:
        recommended = VersionBump.PATCH

    if has_breaking_changes:
        recommended = VersionBump.MAJOR

    return recommended


def report_changes(
    classification: ChangeClassification,
    recommendation: VersionBump,
    *,
    console: ConsoleProtocol,
) -> None:
    console.print("Detected the following upcoming changelogs:", Style.INFO)
    console.newline()
    for category, count in classification.counts().items():
        console.print(f"{category}: {count}", Style.DIM)
    console.newline()
    console.print("The recommended version update for these changes is", Style.INFO)
    console.print(str(recommendation), Style.ACCENT)


def resolve_version_type(
    *,
    recommendation: VersionBump,
    explicit: VersionBump | None,
    interactive: bool,
    interaction: InteractionPort,
    console: ConsoleProtocol,
) -> Result[VersionBump, ReleaseError]:
    """Decide the bump level for this release.

    An explicit `--type` always wins; a mismatch with the recommendation is
    only a warning. Without one the operator is asked, and the recommendation
    is advisory.
    """
    if explicit is not None:
        console.print(f"--type argument identified, set to {explicit}", Style.INFO)
        if explicit != recommendation:
            console.warning(
                f"--type argument ({explicit}) does not match "
                f"recommended version update ({recommendation})"
            )
        return Ok(explicit)

    if not interactive:
        return Err(
            ReleaseError(
                kind="configuration",
                message="no --type given and no terminal available to prompt",
                hint=f"pass --type {recommendation} (the recommendation) or run interactively",
            )
        )

    console.print("What part of the package version do you want to bump?", Style.INFO)
    return interaction.request_version_type()
