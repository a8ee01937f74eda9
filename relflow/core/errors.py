"""Exit status of the `relflow` command. Values are part of the CLI contract."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # bad --type/--steps, wrong launcher, missing --type or OTP without a terminal
    USER_ERROR = 1
    # wrong branch, detached HEAD, missing repository root, unreadable relflow.toml
    ENV_ERROR = 2
    # a delegated command failed, or a changelog fragment is malformed
    STEP_ERROR = 3
    # a prompt was aborted or answered with something unusable
    PROMPT_ERROR = 4
    # an exception escaped the release run
    INTERNAL_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
