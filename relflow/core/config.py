"""Typed configuration for a release run.

Two value objects are built once at startup and passed down by value:

- `ReleaseConfig`: project settings, read from an optional `relflow.toml` at
  the repository root (defaults mirror an npm-based package).
- `Environment`: facts about the process environment (CI detection, OTP,
  launcher, terminal availability). Only the CLI layer reads `os.environ`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from .result import Err, Ok, Result
from .structured import StrDict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "CommandsConfig",
    "ConfigError",
    "Environment",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relflow.toml"

# Environment variables consumed at startup
CI_ENV = "CI"
OTP_ENV = "NPM_OTP"
LAUNCHER_ENV = "npm_execpath"

_AFFIRMATIVE = frozenset({"true", "1", "yes"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class CommandsConfig:
    """Commands delegated to the package toolchain.

    `token_changelog`, `version` and `publish` get a trailing argument at call
    time (bump level, bump level, `--otp=<code>`).
    """

    test: tuple[str, ...] = ("npm", "test")
    build: tuple[str, ...] = ("npm", "run", "build")
    token_changelog: tuple[str, ...] = ("npm", "run", "update-token-changelog", "--")
    version: tuple[str, ...] = ("npm", "version")
    publish: tuple[str, ...] = ("npm", "publish")
    docs: tuple[str, ...] = ("npm", "run", "sync-docs")


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Project release settings.

    Attributes:
        repo_root: Repository the release runs in
        branch: Branch releases must be cut from
        remote: Upstream remote for tag fetch/push
        required_launcher: Basename the launcher must have ("" disables the check)
        manifest: Package manifest holding name and version
        repository_url: Base URL used in changelog headings (optional)
        fragments_dir: Directory of pending changelog fragments
        changelog_file: Human-readable changelog
        commands: Toolchain commands
    """

    repo_root: Path
    branch: str = "main"
    remote: str = "upstream"
    required_launcher: str = "npm-cli.js"
    manifest: str = "package.json"
    repository_url: str | None = None
    fragments_dir: str = "upcoming_changelogs"
    changelog_file: str = "CHANGELOG.md"
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    @property
    def manifest_path(self) -> Path:
        return self.repo_root / self.manifest

    @property
    def fragments_path(self) -> Path:
        return self.repo_root / self.fragments_dir

    @property
    def changelog_path(self) -> Path:
        return self.repo_root / self.changelog_file

    @classmethod
    def from_dict(cls, data: StrDict, *, repo_root: Path) -> ReleaseConfig:
        """Build config from a parsed TOML table, falling back to defaults."""
        release = get_table(data, "release")
        changelog = get_table(data, "changelog")
        commands = get_table(data, "commands")
        defaults = CommandsConfig()

        launcher = get_str(release, "required_launcher")

        return cls(
            repo_root=repo_root,
            branch=get_str(release, "branch") or "main",
            remote=get_str(release, "remote") or "upstream",
            required_launcher="npm-cli.js" if launcher is None else launcher,
            manifest=get_str(release, "manifest") or "package.json",
            repository_url=(get_str(release, "repository_url") or "").rstrip("/") or None,
            fragments_dir=get_str(changelog, "fragments_dir") or "upcoming_changelogs",
            changelog_file=get_str(changelog, "file") or "CHANGELOG.md",
            commands=CommandsConfig(
                test=get_str_list(commands, "test") or defaults.test,
                build=get_str_list(commands, "build") or defaults.build,
                token_changelog=_optional_command(
                    commands, "token_changelog", defaults.token_changelog
                ),
                version=get_str_list(commands, "version") or defaults.version,
                publish=get_str_list(commands, "publish") or defaults.publish,
                docs=get_str_list(commands, "docs") or defaults.docs,
            ),
        )


def _optional_command(
    table: Mapping[str, object], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    # An explicit empty list disables the command.
    value = get_str_list(table, key)
    return default if value is None else value


@dataclass(frozen=True, slots=True)
class Environment:
    """Process environment, captured once at startup.

    Attributes:
        is_ci: Running under continuous integration
        otp: One-time password supplied by the environment
        launcher: Path of the package-manager script that launched us
        interactive: A terminal is attached for prompts
    """

    is_ci: bool = False
    otp: str | None = None
    launcher: str | None = None
    interactive: bool = True

    @property
    def launcher_name(self) -> str | None:
        if not self.launcher:
            return None
        return Path(self.launcher).name

    @classmethod
    def from_environ(cls, environ: Mapping[str, str], *, interactive: bool) -> Environment:
        ci = environ.get(CI_ENV, "").strip().lower()
        otp = environ.get(OTP_ENV, "").strip()
        launcher = environ.get(LAUNCHER_ENV, "").strip()
        return cls(
            is_ci=ci in _AFFIRMATIVE,
            otp=otp or None,
            launcher=launcher or None,
            interactive=interactive,
        )


def _read_table(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        with path.open("rb") as f:
            parsed: object = tomllib.load(f)
    except OSError as e:
        return Err(ConfigError(f"cannot read {path.name}: {e.strerror or e}", path=path))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"{path.name} is not valid TOML: {e}", path=path))

    # tomllib always returns a table at the root
    return Ok(cast(StrDict, parsed))


def load_config(repo_root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load `relflow.toml` from the repository root.

    Args:
        repo_root: Repository root directory

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    path = repo_root / CONFIG_FILE_NAME
    result = _read_table(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value, repo_root=repo_root))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"{path.name} has an invalid layout: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load config if `relflow.toml` exists, else return defaults.

    A present-but-broken file is still an error.
    """
    if not (repo_root / CONFIG_FILE_NAME).exists():
        return Ok(ReleaseConfig(repo_root=repo_root))
    return load_config(repo_root)
