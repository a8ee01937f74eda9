"""Read pending changelog fragments from disk.

A fragment is a small markdown file written alongside a pull request:

    - Added `size` prop to `Widget`

    **Bug fixes**

    - Fixed focus ring on `Button`
      - including the disabled state

Bullets before any `**Section**` line belong to Features.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from relflow.changelog.model import ChangeCategory, PendingChange
from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError

FRAGMENT_SUFFIX = ".md"

_SECTION_RE = re.compile(r"^\*\*(?P<label>[^*]+)\*\*:?$")


@dataclass(frozen=True, slots=True)
class CollatedChanges:
    """Pending changes and the fragment files they were read from."""

    changes: tuple[PendingChange, ...] = field(default_factory=tuple)
    files: tuple[Path, ...] = field(default_factory=tuple)


def _fragment_sort_key(path: Path) -> tuple[int, int, str]:
    # Fragments are usually named after their PR number; sort those numerically.
    stem = path.stem
    if stem.isdigit():
        return (0, int(stem), stem)
    return (1, 0, stem)


def list_fragments(fragments_dir: Path) -> list[Path]:
    if not fragments_dir.is_dir():
        return []
    files = [
        p
        for p in fragments_dir.iterdir()
        if p.is_file() and p.suffix == FRAGMENT_SUFFIX and not p.name.startswith(".")
    ]
    return sorted(files, key=_fragment_sort_key)


def parse_fragment(text: str, *, source: str) -> Result[list[PendingChange], ReleaseError]:
    section = str(ChangeCategory.FEATURES)
    # (section, lines) per item; continuation lines are kept verbatim
    items: list[tuple[str, list[str]]] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip()
        if not line.strip():
            continue

        header = _SECTION_RE.match(line.strip())
        if header is not None and not raw[:1].isspace():
            section = header.group("label").strip()
            continue

        if line.startswith(("- ", "* ")):
            items.append((section, [line[2:].strip()]))
            continue

        if items and raw[:1].isspace():
            items[-1][1].append(line)
            continue

        return Err(
            ReleaseError(
                kind="invalid_changelog",
                message=f"unexpected text in {source}:{lineno}: {line.strip()!r}",
                hint="changelog entries must be '- ' bullets under an optional **Section** line",
            )
        )

    return Ok(
        [
            PendingChange(category=label, description="\n".join(lines), source=source)
            for label, lines in items
        ]
    )


def collate_fragments(fragments_dir: Path) -> Result[CollatedChanges, ReleaseError]:
    """Read every fragment in `fragments_dir`, in PR order.

    A missing directory simply means there are no pending changes.
    """
    files = list_fragments(fragments_dir)
    changes: list[PendingChange] = []

    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ReleaseError(
                    kind="invalid_changelog",
                    message=f"failed to read changelog fragment: {e}",
                    hint=str(path),
                )
            )

        parsed = parse_fragment(text, source=path.name)
        if isinstance(parsed, Err):
            return parsed
        changes.extend(parsed.value)

    return Ok(CollatedChanges(changes=tuple(changes), files=tuple(files)))
