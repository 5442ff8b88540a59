"""Protocols (interfaces) consumed by the client facade.

Callers that want to swap p4 out in their own tests depend on
:class:`CommandRunner`; the facade itself depends on
:class:`ProcessInvoker` so it can be driven without spawning anything.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from p4wrap.core.models import ProcessOutput, Record


class CommandRunner(Protocol):
    """Anything that can run a p4 command and hand back decoded records.

    :class:`~p4wrap.client.P4Client` satisfies this protocol structurally,
    as does any canned test double with a matching ``run`` method.
    """

    def run(self, args: Sequence[str]) -> list[Record]:
        """Run ``p4 <args>`` and return its decoded records.

        Raises
        ------
        P4WrapError
            Any subclass, depending on how the command failed.
        """
        ...  # pragma: no cover


class ProcessInvoker(Protocol):
    """Contract for the component that actually spawns p4."""

    def invoke(
        self,
        argv: Sequence[str],
        *,
        input: bytes | None = None,
        timeout: float | None = None,
        combine_stderr: bool = False,
    ) -> ProcessOutput:
        """Run *argv* to completion and return the captured output.

        A non-zero exit status is reported through
        :attr:`ProcessOutput.returncode`, never raised.

        Raises
        ------
        LaunchError
            When the executable cannot be started.
        CommandTimeoutError
            When *timeout* expires; the child has been killed.
        """
        ...  # pragma: no cover
