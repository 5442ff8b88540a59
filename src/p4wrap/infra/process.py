"""Subprocess-backed implementation of :class:`~p4wrap.core.protocols.ProcessInvoker`.

This module is the **only** place in the codebase that spawns processes.
Spawn failures are re-raised as :class:`~p4wrap.exceptions.LaunchError`
and deadline expiry as :class:`~p4wrap.exceptions.CommandTimeoutError`;
nothing raw from :mod:`subprocess` escapes.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from p4wrap.core.models import ProcessOutput
from p4wrap.exceptions import CommandTimeoutError, LaunchError
from p4wrap.infra.p4_detector import install_hint

logger = logging.getLogger(__name__)


class SubprocessInvoker:
    """Run one child process to completion and capture its output.

    ``Popen`` is used as a context manager around ``communicate()`` so the
    pipes are closed and the child is reaped on every exit path.  When
    there is no input the child's stdin is ``/dev/null``; otherwise the
    input is written and stdin closed, which is what tells ``p4 -i``
    the spec is complete.
    """

    def invoke(
        self,
        argv: Sequence[str],
        *,
        input: bytes | None = None,
        timeout: float | None = None,
        combine_stderr: bool = False,
    ) -> ProcessOutput:
        """Run *argv* and return a :class:`ProcessOutput`.

        Raises
        ------
        LaunchError
            When the executable is missing or cannot be executed.
        CommandTimeoutError
            When *timeout* seconds pass before the child exits.
        """
        args = tuple(argv)
        logger.debug("Running %s", shlex.join(args))

        try:
            proc = subprocess.Popen(
                args,
                stdin=subprocess.PIPE if input is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if combine_stderr else subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise LaunchError(
                f"Cannot run {args[0]}: executable not found.",
                hint=install_hint(args[0]),
            ) from exc
        except PermissionError as exc:
            raise LaunchError(
                f"Cannot run {args[0]}: permission denied.",
                hint="Check that the file is executable by the current user.",
            ) from exc
        except OSError as exc:
            raise LaunchError(f"Cannot run {args[0]}: {exc}") from exc

        with proc:
            try:
                stdout, stderr = proc.communicate(input, timeout=timeout)
            except subprocess.TimeoutExpired as exc:
                proc.kill()
                stdout, stderr = proc.communicate()
                logger.debug("Killed %s after %ss", args[0], timeout)
                raise CommandTimeoutError(
                    f"{args[0]} did not finish within {timeout} seconds.",
                    timeout=timeout if timeout is not None else 0.0,
                    stdout=stdout or b"",
                    stderr=stderr or b"",
                ) from exc

        logger.debug(
            "Exit status %d (%d stdout byte(s), %d stderr byte(s))",
            proc.returncode,
            len(stdout or b""),
            len(stderr or b""),
        )
        return ProcessOutput(
            args=args,
            returncode=proc.returncode,
            stdout=stdout or b"",
            stderr=stderr or b"",
        )
