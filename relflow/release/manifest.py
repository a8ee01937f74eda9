from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.core.structured import as_str_dict, get_str
from relflow.release.errors import ReleaseError
from relflow.release.semver import SemVer, parse_version


@dataclass(frozen=True, slots=True)
class PackageManifest:
    name: str
    version: SemVer

    @property
    def spec(self) -> str:
        return f"{self.name}@{self.version}"


def read_manifest(path: Path) -> Result[PackageManifest, ReleaseError]:
    """Read name and version from a package.json-style manifest."""
    try:
        obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(
            ReleaseError(kind="step_failed", message=f"package manifest not found: {path}")
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(ReleaseError(kind="step_failed", message=f"failed to read manifest: {e}"))
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="step_failed", message=f"invalid JSON in manifest: {e}", hint=str(path)
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(ReleaseError(kind="step_failed", message="manifest root must be an object"))

    name = get_str(data, "name")
    raw_version = get_str(data, "version")
    if not name or not raw_version:
        return Err(
            ReleaseError(
                kind="step_failed",
                message="manifest must define 'name' and 'version'",
                hint=str(path),
            )
        )

    version = parse_version(raw_version)
    if version is None:
        return Err(
            ReleaseError(
                kind="step_failed",
                message=f"manifest version is not semver: {raw_version!r}",
                hint=str(path),
            )
        )

    return Ok(PackageManifest(name=name, version=version))
