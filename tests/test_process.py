"""Tests for the subprocess backend (infra/process.py).

The running Python interpreter stands in for p4 so every test spawns a
real child process without needing Perforce installed.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest

from p4wrap.exceptions import CommandTimeoutError, LaunchError
from p4wrap.infra.process import SubprocessInvoker


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestInvoke:
    def test_captures_streams_separately(self) -> None:
        out = SubprocessInvoker().invoke(
            _python("import sys; sys.stdout.write('out'); sys.stderr.write('err')"),
        )
        assert out.returncode == 0
        assert out.stdout == b"out"
        assert out.stderr == b"err"
        assert out.args[0] == sys.executable

    def test_non_zero_exit_is_reported_not_raised(self) -> None:
        out = SubprocessInvoker().invoke(
            _python("import sys; print('context'); sys.exit(3)"),
        )
        assert out.returncode == 3
        assert out.stdout.strip() == b"context"

    def test_input_is_written_and_closed(self) -> None:
        out = SubprocessInvoker().invoke(
            _python("import sys; sys.stdout.buffer.write(sys.stdin.buffer.read())"),
            input=b"Job: new\n\n",
        )
        assert out.stdout == b"Job: new\n\n"

    def test_no_input_means_empty_stdin(self) -> None:
        out = SubprocessInvoker().invoke(
            _python("import sys; sys.stdout.write(repr(sys.stdin.read()))"),
        )
        assert out.stdout == b"''"

    def test_combined_output(self) -> None:
        out = SubprocessInvoker().invoke(
            _python(
                "import sys; sys.stdout.write('out\\n'); sys.stdout.flush(); "
                "sys.stderr.write('err\\n')"
            ),
            combine_stderr=True,
        )
        assert b"out" in out.stdout
        assert b"err" in out.stdout
        assert out.stderr == b""


class TestLaunchFailures:
    def test_missing_executable(self) -> None:
        with pytest.raises(LaunchError, match="not found") as exc_info:
            SubprocessInvoker().invoke(["p4wrap-definitely-missing-binary", "info"])
        assert exc_info.value.hint is not None
        assert "PATH" in exc_info.value.hint

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_not_executable(self, tmp_path: Path) -> None:
        script = tmp_path / "p4"
        script.write_text("#!/bin/sh\necho hi\n")
        script.chmod(0o644)
        with pytest.raises(LaunchError, match="permission denied"):
            SubprocessInvoker().invoke([str(script), "info"])


class TestTimeout:
    def test_child_is_killed(self) -> None:
        started = time.monotonic()
        with pytest.raises(CommandTimeoutError) as exc_info:
            SubprocessInvoker().invoke(
                _python("import sys, time; print('started', flush=True); time.sleep(60)"),
                timeout=1.0,
            )
        assert time.monotonic() - started < 30
        err = exc_info.value
        assert err.timeout == 1.0
        assert b"started" in err.stdout
