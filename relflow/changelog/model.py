"""Pending changelog records and their classification."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class ChangeCategory(Enum):
    """Changelog sections, declared in display order."""

    FEATURES = "Features"
    BUG_FIXES = "Bug fixes"
    DEPRECATIONS = "Deprecations"
    BREAKING_CHANGES = "Breaking changes"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> ChangeCategory | None:
        for category in cls:
            if category.value == label:
                return category
        return None


@dataclass(frozen=True, slots=True)
class PendingChange:
    """One unreleased change, as written in a changelog fragment.

    `category` is the raw section label from the fragment; it is only checked
    against `ChangeCategory` when the changes are classified.
    """

    category: str
    description: str
    source: str = ""


@dataclass(frozen=True, slots=True)
class ChangeClassification:
    """Pending changes grouped by category.

    Every `ChangeCategory` is present, possibly with an empty tuple. Lookups
    take `ChangeCategory` members; anything else raises KeyError.
    """

    sections: Mapping[ChangeCategory, tuple[PendingChange, ...]]

    def __post_init__(self) -> None:
        missing = [c for c in ChangeCategory if c not in self.sections]
        if missing:
            names = ", ".join(str(c) for c in missing)
            raise ValueError(f"classification is missing categories: {names}")
        ordered = {c: tuple(self.sections[c]) for c in ChangeCategory}
        object.__setattr__(self, "sections", MappingProxyType(ordered))

    def __getitem__(self, category: ChangeCategory) -> tuple[PendingChange, ...]:
        return self.sections[category]

    def __iter__(self) -> Iterator[tuple[ChangeCategory, tuple[PendingChange, ...]]]:
        return iter(self.sections.items())

    def has(self, category: ChangeCategory) -> bool:
        return len(self.sections[category]) > 0

    def counts(self) -> dict[ChangeCategory, int]:
        return {category: len(items) for category, items in self.sections.items()}

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.sections.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0
