from __future__ import annotations

import pytest
import typer

import relflow.release.interaction as interaction_mod
from relflow.core.result import Err, Ok
from relflow.release.interaction import ScriptedInteraction, TyperInteraction
from relflow.release.model import VersionBump


def _answer(monkeypatch: pytest.MonkeyPatch, value: str) -> list[str]:
    prompts: list[str] = []

    def fake_prompt(text: str, **kwargs: object) -> str:
        prompts.append(text)
        return value

    monkeypatch.setattr(interaction_mod.typer, "prompt", fake_prompt)
    return prompts


def _abort(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_prompt(text: str, **kwargs: object) -> str:
        raise typer.Abort()

    monkeypatch.setattr(interaction_mod.typer, "prompt", fake_prompt)


class TestTyperInteraction:
    def test_version_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        prompts = _answer(monkeypatch, "Major")

        assert TyperInteraction().request_version_type() == Ok(VersionBump.MAJOR)
        assert prompts == ["choice (major, minor, patch)"]

    def test_invalid_version_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _answer(monkeypatch, "huge")

        result = TyperInteraction().request_version_type()

        assert isinstance(result, Err)
        assert result.error.kind == "prompt"
        assert result.error.hint == "your choice must be major, minor, patch"

    def test_aborted_version_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _abort(monkeypatch)

        result = TyperInteraction().request_version_type()

        assert isinstance(result, Err)
        assert result.error.kind == "prompt"

    def test_one_time_password(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _answer(monkeypatch, " 123456 ")
        assert TyperInteraction().request_one_time_password() == Ok("123456")

    def test_empty_one_time_password(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _answer(monkeypatch, "   ")
        assert isinstance(TyperInteraction().request_one_time_password(), Err)

    def test_aborted_one_time_password(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _abort(monkeypatch)
        assert isinstance(TyperInteraction().request_one_time_password(), Err)


class TestScriptedInteraction:
    def test_answers_in_order_then_aborts(self) -> None:
        interaction = ScriptedInteraction.answering(version_types=["patch"], passwords=["1"])

        assert interaction.request_version_type() == Ok(VersionBump.PATCH)
        assert interaction.request_one_time_password() == Ok("1")
        assert isinstance(interaction.request_version_type(), Err)
        assert interaction.asked == ["version_type", "otp", "version_type"]
