from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class VersionBump(IntEnum):
    """Semantic version increment, ordered by impact (MAJOR > MINOR > PATCH)."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str) -> VersionBump | None:
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return None


class ReleaseStep(Enum):
    """Release steps, declared in execution order."""

    TEST = "test"
    BUILD = "build"
    VERSION = "version"
    TAG = "tag"
    PUBLISH = "publish"
    DOCS = "docs"

    def __str__(self) -> str:
        return self.value


ALL_STEPS: tuple[ReleaseStep, ...] = tuple(ReleaseStep)


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Operator invocation parameters, fixed for the whole run."""

    version_type: VersionBump | None = None
    dry_run: bool = False
    steps: tuple[ReleaseStep, ...] = ALL_STEPS

    def selects(self, step: ReleaseStep) -> bool:
        return step in self.steps


StepVisit = tuple[ReleaseStep, bool]  # (step, ran)


@dataclass(frozen=True, slots=True)
class ReleaseRunState:
    """State threaded through one release run.

    `version_type` is set exactly once, by the version step, and reused by every
    later step.
    """

    remaining: tuple[ReleaseStep, ...]
    dry_run: bool
    version_type: VersionBump | None = None
    visited: tuple[StepVisit, ...] = field(default_factory=tuple)

    @property
    def current(self) -> ReleaseStep | None:
        return self.remaining[0] if self.remaining else None

    @property
    def ran(self) -> tuple[ReleaseStep, ...]:
        return tuple(step for step, ran in self.visited if ran)

    @property
    def skipped(self) -> tuple[ReleaseStep, ...]:
        return tuple(step for step, ran in self.visited if not ran)
