"""Operator output."""

from .console import ConsoleLine, ConsoleProtocol, MockConsole, RichConsole, Style

__all__ = ["ConsoleLine", "ConsoleProtocol", "MockConsole", "RichConsole", "Style"]
