"""Operator-facing output.

Release code talks to a `ConsoleProtocol`; the CLI hands it a `RichConsole`
and tests hand it a `MockConsole`. Messages are plain text: command lines and
changelog entries routinely contain `[brackets]`, so nothing is parsed as
rich markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = ["ConsoleLine", "ConsoleProtocol", "MockConsole", "RichConsole", "Style"]


class Style(Enum):
    DEFAULT = ""
    SUCCESS = "green"
    ERROR = "red bold"
    WARNING = "yellow"
    INFO = "magenta"
    DIM = "dim"  # echoed commands, dry-run records
    ACCENT = "blue bold"  # bump level, version
    HEADER = "magenta bold"  # step banner

    def __str__(self) -> str:
        return self.name.lower()


# label printed ahead of the shorthand messages
_LABELS = {Style.SUCCESS: "OK", Style.ERROR: "error:", Style.WARNING: "warning:"}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def header(self, message: str) -> None:
        """Announce a release step."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        from rich.text import Text

        self._console.print(Text(message, style=style.value))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._console.print()

    def _labelled(self, style: Style, message: str) -> None:
        from rich.text import Text

        self._console.print(Text.assemble((_LABELS[style], style.value), " ", message))


@dataclass(frozen=True, slots=True)
class ConsoleLine:
    message: str
    style: Style


def _no_lines() -> list[ConsoleLine]:
    return []


@dataclass
class MockConsole:
    """Records every line; shorthand messages carry the same label as RichConsole."""

    outputs: list[ConsoleLine] = field(default_factory=_no_lines)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(ConsoleLine(message, style))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self.print("")

    def _labelled(self, style: Style, message: str) -> None:
        self.print(f"{_LABELS[style]} {message}", style)

    @property
    def messages(self) -> list[str]:
        return [line.message for line in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def find(self, substring: str) -> list[ConsoleLine]:
        return [line for line in self.outputs if substring in line.message]

    def has_error(self) -> bool:
        return any(line.style is Style.ERROR for line in self.outputs)

    def has_warning(self) -> bool:
        return any(line.style is Style.WARNING for line in self.outputs)
