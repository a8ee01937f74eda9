from __future__ import annotations

from collections.abc import Iterable

from relflow.changelog.model import ChangeCategory, ChangeClassification, PendingChange
from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError


def classify(changes: Iterable[PendingChange]) -> Result[ChangeClassification, ReleaseError]:
    """Group pending changes by category, keeping their original order.

    Any label outside `ChangeCategory` rejects the whole input: an unknown
    section in a fragment is malformed upstream data, not an empty category.
    """
    buckets: dict[ChangeCategory, list[PendingChange]] = {c: [] for c in ChangeCategory}

    for change in changes:
        category = ChangeCategory.from_label(change.category)
        if category is None:
            known = ", ".join(str(c) for c in ChangeCategory)
            where = f" in {change.source}" if change.source else ""
            return Err(
                ReleaseError(
                    kind="invalid_changelog",
                    message=f"unknown changelog section{where}: {change.category!r}",
                    hint=f"expected one of: {known}",
                )
            )
        buckets[category].append(change)

    return Ok(ChangeClassification({c: tuple(items) for c, items in buckets.items()}))
