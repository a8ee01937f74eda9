from __future__ import annotations

import pytest

from relflow.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


def test_style_names() -> None:
    assert str(Style.WARNING) == "warning"
    assert str(Style.ACCENT) == "accent"


def test_mock_console_labels_shorthands() -> None:
    console = MockConsole()
    console.success("done")
    console.error("failed")
    console.warning("careful")

    assert console.messages == ["OK done", "error: failed", "warning: careful"]
    assert [line.style for line in console.outputs] == [Style.SUCCESS, Style.ERROR, Style.WARNING]
    assert console.has_error() and console.has_warning()


def test_mock_console_header_and_newline() -> None:
    console = MockConsole()
    console.header("[test]")
    console.newline()

    assert console.outputs[0].style is Style.HEADER
    assert console.text == "[test]\n"


def test_mock_console_find() -> None:
    console = MockConsole()
    console.print("npm test", Style.DIM)
    console.print("git push upstream --tags", Style.DIM)
    console.print("npm run build", Style.DIM)

    assert [line.message for line in console.find("npm")] == ["npm test", "npm run build"]
    assert not console.has_error()


def test_rich_console_satisfies_protocol() -> None:
    console: ConsoleProtocol = RichConsole()
    assert console is not None


def test_rich_console_prints_brackets_verbatim(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()
    console.print("[dry-run] npm test", Style.DIM)
    console.warning("[tag] failed")

    out = capsys.readouterr().out
    assert "[dry-run] npm test" in out
    assert "warning: [tag] failed" in out
