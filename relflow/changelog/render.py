from __future__ import annotations

from relflow.changelog.model import ChangeCategory, ChangeClassification
from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError
from relflow.release.semver import SemVer

NO_CHANGES = "No public interface changes since the previous release."


def version_heading(version: SemVer, *, repository_url: str | None) -> str:
    tag = version.to_tag()
    if repository_url:
        return f"## [`{tag}`]({repository_url}/releases/{tag})"
    return f"## `{tag}`"


def render_entries(classification: ChangeClassification) -> str:
    """Render pending changes as a changelog body.

    Features are listed first without a header; every other non-empty category
    gets its own `**Category**` block.
    """
    if classification.is_empty:
        return NO_CHANGES

    blocks: list[str] = []
    for category, items in classification:
        if not items:
            continue
        lines: list[str] = []
        if category is not ChangeCategory.FEATURES:
            lines.append(f"**{category}**")
            lines.append("")
        lines.extend(f"- {item.description}" for item in items)
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


def prepend_release_section(
    existing: str,
    classification: ChangeClassification,
    *,
    version: SemVer,
    repository_url: str | None,
) -> Result[str, ReleaseError]:
    heading = version_heading(version, repository_url=repository_url)
    if heading in existing:
        return Err(
            ReleaseError(
                kind="step_failed",
                message=f"changelog already has an entry for {version.to_tag()}",
                hint="the version was already released; re-run with the remaining --steps",
            )
        )

    body = render_entries(classification)
    rest = existing.lstrip("\n")
    section = f"{heading}\n\n{body}\n"
    if not rest:
        return Ok(section)
    return Ok(f"{section}\n{rest}")
