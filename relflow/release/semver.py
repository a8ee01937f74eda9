from __future__ import annotations

import re
from dataclasses import dataclass, field

from relflow.release.model import VersionBump


_VERSION_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"{core}-{self.prerelease}" if self.prerelease else core

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, level: VersionBump) -> SemVer:
        # A prerelease already sits below its release, so bumping it may only
        # drop the suffix (same rules as `npm version`).
        pre = self.prerelease is not None
        match level:
            case VersionBump.MAJOR:
                if pre and self.minor == 0 and self.patch == 0:
                    return SemVer(self.major, 0, 0)
                return SemVer(self.major + 1, 0, 0)
            case VersionBump.MINOR:
                if pre and self.patch == 0:
                    return SemVer(self.major, self.minor, 0)
                return SemVer(self.major, self.minor + 1, 0)
            case VersionBump.PATCH:
                if pre:
                    return SemVer(self.major, self.minor, self.patch)
                return SemVer(self.major, self.minor, self.patch + 1)


def parse_version(text: str) -> SemVer | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4))
