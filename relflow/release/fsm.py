"""A small driver for linear, fail-fast step sequences.

The state says which step comes next; each handler returns the state to
continue with, or an error that ends the run.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError

S = TypeVar("S")
K = TypeVar("K")

StepHandler = Callable[[S], Result[S, ReleaseError]]
GetStep = Callable[[S], K | None]


def run_state_machine(
    *,
    initial_state: S,
    get_step: GetStep[S, K],
    handlers: Mapping[K, StepHandler[S]],
) -> Result[S, ReleaseError]:
    """Drive `initial_state` through `handlers` until no step is left.

    `handlers` must cover every step `get_step` can return. Stops at the first
    handler error and returns it unchanged; on success returns the final state.
    """
    current = initial_state

    while (step := get_step(current)) is not None:
        outcome = handlers[step](current)
        if isinstance(outcome, Err):
            return outcome
        current = outcome.value

    return Ok(current)
