"""Tests for relflow.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relflow.core.config import (
    CommandsConfig,
    ConfigError,
    Environment,
    ReleaseConfig,
    load_config,
    load_config_or_default,
)
from relflow.core.result import Err, Ok


class TestEnvironment:
    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", " true "])
    def test_ci_affirmative_values(self, value: str) -> None:
        env = Environment.from_environ({"CI": value}, interactive=True)
        assert env.is_ci is True

    @pytest.mark.parametrize("value", ["", "false", "0", "no", "maybe"])
    def test_ci_other_values(self, value: str) -> None:
        env = Environment.from_environ({"CI": value}, interactive=True)
        assert env.is_ci is False

    def test_ci_missing(self) -> None:
        assert Environment.from_environ({}, interactive=False).is_ci is False

    def test_otp_and_launcher(self) -> None:
        env = Environment.from_environ(
            {
                "NPM_OTP": " 123456 ",
                "npm_execpath": "/usr/lib/node_modules/npm/bin/npm-cli.js",
            },
            interactive=False,
        )
        assert env.otp == "123456"
        assert env.launcher_name == "npm-cli.js"
        assert env.interactive is False

    def test_blank_values_are_none(self) -> None:
        env = Environment.from_environ({"NPM_OTP": "  ", "npm_execpath": ""}, interactive=True)
        assert env.otp is None
        assert env.launcher is None
        assert env.launcher_name is None


class TestReleaseConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        config = ReleaseConfig(repo_root=tmp_path)
        assert config.branch == "main"
        assert config.remote == "upstream"
        assert config.required_launcher == "npm-cli.js"
        assert config.manifest_path == tmp_path / "package.json"
        assert config.fragments_path == tmp_path / "upcoming_changelogs"
        assert config.changelog_path == tmp_path / "CHANGELOG.md"
        assert config.commands == CommandsConfig()

    def test_from_dict_overrides(self, tmp_path: Path) -> None:
        data: dict[str, object] = {
            "release": {
                "branch": "release",
                "remote": "origin",
                "required_launcher": "",
                "repository_url": "https://github.com/acme/widgets/",
            },
            "changelog": {"fragments_dir": "changes", "file": "HISTORY.md"},
            "commands": {"test": ["make", "check"], "token_changelog": []},
        }
        config = ReleaseConfig.from_dict(data, repo_root=tmp_path)

        assert config.branch == "release"
        assert config.remote == "origin"
        assert config.required_launcher == ""
        assert config.repository_url == "https://github.com/acme/widgets"
        assert config.fragments_path == tmp_path / "changes"
        assert config.changelog_path == tmp_path / "HISTORY.md"
        assert config.commands.test == ("make", "check")
        assert config.commands.token_changelog == ()
        assert config.commands.build == ("npm", "run", "build")

    def test_mistyped_command_falls_back_to_default(self, tmp_path: Path) -> None:
        config = ReleaseConfig.from_dict({"commands": {"docs": "npm run docs"}}, repo_root=tmp_path)
        assert config.commands.docs == ("npm", "run", "sync-docs")


class TestLoadConfig:
    def test_missing_file_is_error(self, tmp_path: Path) -> None:
        result = load_config(tmp_path)
        assert isinstance(result, Err)
        assert "cannot read relflow.toml" in result.error.message

    def test_error_is_a_frozen_value_naming_the_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path)
        assert isinstance(result, Err)
        assert result.error == ConfigError(result.error.message, path=tmp_path / "relflow.toml")
        with pytest.raises(AttributeError):
            result.error.message = "changed"  # type: ignore[misc]

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "relflow.toml").write_text("[release\nbranch =", encoding="utf-8")
        result = load_config(tmp_path)
        assert isinstance(result, Err)
        assert "not valid TOML" in result.error.message

    def test_loads_file(self, tmp_path: Path) -> None:
        (tmp_path / "relflow.toml").write_text(
            '[release]\nbranch = "trunk"\n\n[commands]\npublish = ["pnpm", "publish"]\n',
            encoding="utf-8",
        )
        result = load_config(tmp_path)
        assert isinstance(result, Ok)
        assert result.value.branch == "trunk"
        assert result.value.commands.publish == ("pnpm", "publish")
        assert result.value.repo_root == tmp_path

    def test_default_when_absent(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path)
        assert isinstance(result, Ok)
        assert result.value == ReleaseConfig(repo_root=tmp_path)

    def test_broken_file_is_not_replaced_by_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "relflow.toml").write_text("not toml at all =", encoding="utf-8")
        assert isinstance(load_config_or_default(tmp_path), Err)
