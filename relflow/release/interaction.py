"""Operator prompts.

The orchestrator asks for input through `InteractionPort`. Production uses
`TyperInteraction`; tests and scripted runs use `ScriptedInteraction`.

Prompts are one-shot: a malformed answer or an aborted prompt (Ctrl-C, EOF)
is a `prompt` error and ends the run.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import typer

from relflow.core.result import Err, Ok, Result
from relflow.release.errors import ReleaseError
from relflow.release.model import VersionBump


class InteractionPort(Protocol):
    def request_version_type(self) -> Result[VersionBump, ReleaseError]: ...

    def request_one_time_password(self) -> Result[str, ReleaseError]: ...


def _choices() -> str:
    return ", ".join(str(b) for b in sorted(VersionBump, reverse=True))


class TyperInteraction:
    def request_version_type(self) -> Result[VersionBump, ReleaseError]:
        try:
            raw = typer.prompt(f"choice ({_choices()})")
        except typer.Abort:
            return Err(ReleaseError(kind="prompt", message="version type prompt aborted"))

        level = VersionBump.parse(raw)
        if level is None:
            return Err(
                ReleaseError(
                    kind="prompt",
                    message=f"invalid version type: {raw!r}",
                    hint=f"your choice must be {_choices()}",
                )
            )
        return Ok(level)

    def request_one_time_password(self) -> Result[str, ReleaseError]:
        try:
            raw = typer.prompt("Enter password", hide_input=True)
        except typer.Abort:
            return Err(ReleaseError(kind="prompt", message="one-time password prompt aborted"))

        otp = raw.strip()
        if not otp:
            return Err(ReleaseError(kind="prompt", message="one-time password is required"))
        return Ok(otp)


def _empty_answers() -> list[str]:
    return []


@dataclass
class ScriptedInteraction:
    """Answers prompts from prepared values; an exhausted script is an abort."""

    version_types: list[str] = field(default_factory=_empty_answers)
    passwords: list[str] = field(default_factory=_empty_answers)
    asked: list[str] = field(default_factory=_empty_answers)

    @classmethod
    def answering(
        cls, *, version_types: Iterable[str] = (), passwords: Iterable[str] = ()
    ) -> ScriptedInteraction:
        return cls(version_types=list(version_types), passwords=list(passwords))

    def request_version_type(self) -> Result[VersionBump, ReleaseError]:
        self.asked.append("version_type")
        if not self.version_types:
            return Err(ReleaseError(kind="prompt", message="version type prompt aborted"))
        raw = self.version_types.pop(0)
        level = VersionBump.parse(raw)
        if level is None:
            return Err(ReleaseError(kind="prompt", message=f"invalid version type: {raw!r}"))
        return Ok(level)

    def request_one_time_password(self) -> Result[str, ReleaseError]:
        self.asked.append("otp")
        if not self.passwords:
            return Err(ReleaseError(kind="prompt", message="one-time password prompt aborted"))
        return Ok(self.passwords.pop(0))
