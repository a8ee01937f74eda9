"""Error type for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "configuration",
    "precondition",
    "step_failed",
    "invalid_changelog",
    "prompt",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    Carried in `Err` values from every release layer and rendered by the CLI,
    which maps `kind` to an exit code.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
