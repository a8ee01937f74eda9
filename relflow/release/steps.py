from __future__ import annotations

from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError
from relflow.release.model import ALL_STEPS, ReleaseStep

DEFAULT_STEPS = ",".join(str(s) for s in ALL_STEPS)


def parse_steps(raw: str) -> Result[tuple[ReleaseStep, ...], ReleaseError]:
    """Parse a comma-separated `--steps` value.

    Tokens are trimmed and empty tokens ignored. The result follows the fixed
    release order whatever order the operator typed, without duplicates.
    """
    tokens = [t.strip() for t in raw.split(",")]
    tokens = [t for t in tokens if t]

    known = {str(s): s for s in ALL_STEPS}
    invalid = [t for t in tokens if t not in known]
    if invalid:
        return Err(
            ReleaseError(
                kind="configuration",
                message=f"Invalid --steps value(s): {', '.join(invalid)}",
                hint=f"choose from: {DEFAULT_STEPS}",
            )
        )
    if not tokens:
        return Err(
            ReleaseError(
                kind="configuration",
                message="--steps selects no step",
                hint=f"choose from: {DEFAULT_STEPS}",
            )
        )

    selected = {known[t] for t in tokens}
    return Ok(tuple(s for s in ALL_STEPS if s in selected))
