from __future__ import annotations

import sys
from pathlib import Path

from relflow.core.result import Err, Ok
from relflow.platform.process import NOT_STARTED, ProcessError, run, run_live

PY = sys.executable


def test_error_str() -> None:
    assert str(ProcessError(("npm", "test"), 1, "", "")) == "npm exited with status 1"
    assert str(ProcessError(("npx",), NOT_STARTED, "", "not found")) == (
        "npx could not run: not found"
    )


def test_run_returns_stdout(tmp_path: Path) -> None:
    assert run([PY, "-c", "print('hello')"], cwd=tmp_path) == Ok("hello\n")


def test_run_failure_keeps_stderr(tmp_path: Path) -> None:
    result = run([PY, "-c", "import sys; sys.stderr.write('bad'); sys.exit(42)"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert result.error.returncode == 42
    assert result.error.stderr == "bad"


def test_run_missing_program(tmp_path: Path) -> None:
    result = run(["relflow-no-such-program"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert result.error.returncode == NOT_STARTED


def test_run_timeout(tmp_path: Path) -> None:
    result = run([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2)

    assert isinstance(result, Err)
    assert "timed out" in result.error.stderr


def test_run_live(tmp_path: Path) -> None:
    assert run_live([PY, "-c", "open('marker.txt', 'w').write('x')"], cwd=tmp_path) == Ok(None)
    assert (tmp_path / "marker.txt").read_text() == "x"


def test_run_live_failure(tmp_path: Path) -> None:
    result = run_live([PY, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)

    assert result == Err(ProcessError((PY, "-c", "import sys; sys.exit(3)"), 3, "", ""))
