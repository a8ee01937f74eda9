from __future__ import annotations

from pathlib import Path

import pytest
import typer

from relflow.cli.context import build_context
from relflow.core.errors import ErrorCode


def test_missing_repository_root(tmp_path: Path) -> None:
    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path / "nowhere")

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)


def test_broken_config_is_an_environment_error(tmp_path: Path) -> None:
    (tmp_path / "relflow.toml").write_text("[release\n", encoding="utf-8")

    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path)

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)


def test_reads_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CI", "true")
    monkeypatch.setenv("NPM_OTP", "424242")
    monkeypatch.delenv("npm_execpath", raising=False)

    ctx = build_context(tmp_path)

    assert ctx.config.repo_root == tmp_path.resolve()
    assert ctx.environment.is_ci
    assert ctx.environment.otp == "424242"
    assert ctx.environment.launcher is None
