"""The :class:`P4Client` facade.

This is where the core (argument building, spec formatting, decoding,
error classification) meets the infrastructure (process spawning).  Each
call spawns exactly one p4 process, waits for it, and returns; the
client itself only holds immutable configuration.

Usage::

    client = P4Client(Connection(port="ssl:perforce:1666", user="alice"))
    for change in client.run(["changes", "-m", "5", "//depot/..."]):
        print(change["change"], change["desc"])

    client.save("job", {"Job": "new", "Status": "open", "Description": "…"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from p4wrap.core.arguments import build_argv, build_save_args
from p4wrap.core.error_classifier import classify_error, classify_message, is_error_record
from p4wrap.core.models import Connection, ProcessOutput, Record
from p4wrap.core.protocols import ProcessInvoker
from p4wrap.core.record_decoder import decode_records
from p4wrap.core.spec_format import format_spec
from p4wrap.exceptions import CommandFailedError
from p4wrap.infra.process import SubprocessInvoker

logger = logging.getLogger(__name__)


class P4Client:
    """Run p4 commands and decode their marshalled output.

    Parameters
    ----------
    connection:
        Default connection parameters applied to every call.  Any
        operation can override them with its own ``connection=``.
    executable:
        Name or path of the p4 binary.
    invoker:
        Process backend; defaults to :class:`SubprocessInvoker`.
    timeout:
        Seconds before a command is killed.  ``None`` waits forever.
    """

    def __init__(
        self,
        connection: Connection | None = None,
        *,
        executable: str = "p4",
        invoker: ProcessInvoker | None = None,
        timeout: float | None = None,
    ) -> None:
        self._connection: Connection = connection if connection is not None else Connection()
        self._executable = executable
        self._invoker: ProcessInvoker = invoker if invoker is not None else SubprocessInvoker()
        self._timeout = timeout

    @property
    def connection(self) -> Connection:
        return self._connection

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        args: Sequence[str],
        *,
        connection: Connection | None = None,
    ) -> list[Record]:
        """Run ``p4 -G <args>`` and return the decoded records.

        Raises
        ------
        ServerError
            When p4 wrote to stderr or returned an error record.
        DecodeError
            When stdout is not a clean marshalled stream; partial records
            are attached.
        CommandFailedError
            When p4 exited non-zero without reporting anything else.
        LaunchError, CommandTimeoutError
            From the process backend.
        """
        output = self._invoke(args, connection, marshalled=True)
        return self._records_from(output)

    def save(
        self,
        spec_name: str,
        spec_fields: Mapping[str, str],
        extra_args: Sequence[str] = (),
        *,
        connection: Connection | None = None,
    ) -> list[Record]:
        """Save a spec via ``p4 -G <spec_name> -i`` and return the records.

        Errors are reported exactly as for :meth:`run`.
        """
        spec = format_spec(spec_fields)
        logger.debug("Submitting %s spec:\n%s", spec_name, spec)
        output = self._invoke(
            build_save_args(spec_name, extra_args),
            connection,
            marshalled=True,
            input=spec.encode("utf-8"),
        )
        return self._records_from(output)

    def save_text(
        self,
        spec_name: str,
        spec_fields: Mapping[str, str],
        extra_args: Sequence[str] = (),
        *,
        connection: Connection | None = None,
    ) -> str:
        """Save a spec via ``p4 <spec_name> -i`` and return p4's text reply.

        Raises
        ------
        ServerError
            When p4 wrote anything to stderr; no text is returned.
        CommandFailedError
            When p4 exited non-zero; the text is attached as ``output``.
        """
        spec = format_spec(spec_fields)
        logger.debug("Submitting %s spec:\n%s", spec_name, spec)
        output = self._invoke(
            build_save_args(spec_name, extra_args),
            connection,
            marshalled=False,
            input=spec.encode("utf-8"),
        )
        if output.stderr:
            raise classify_message(output.stderr_text.rstrip())
        text = output.stdout_text
        if output.returncode != 0:
            raise CommandFailedError(
                f"p4 {spec_name} -i exited with status {output.returncode}",
                returncode=output.returncode,
                output=text,
            )
        return text

    def run_bytes(
        self,
        args: Sequence[str],
        *,
        connection: Connection | None = None,
    ) -> bytes:
        """Run ``p4 <args>`` and return stdout and stderr combined.

        Raises
        ------
        CommandFailedError
            When p4 exited non-zero; the output is attached.
        """
        output = self._invoke(args, connection, marshalled=False, combine_stderr=True)
        if output.returncode != 0:
            raise CommandFailedError(
                f"p4 exited with status {output.returncode}",
                returncode=output.returncode,
                output=output.stdout_text,
            )
        return output.stdout

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _invoke(
        self,
        args: Sequence[str],
        connection: Connection | None,
        *,
        marshalled: bool,
        input: bytes | None = None,
        combine_stderr: bool = False,
    ) -> ProcessOutput:
        argv = build_argv(
            self._executable,
            connection if connection is not None else self._connection,
            args,
            marshalled=marshalled,
        )
        return self._invoker.invoke(
            argv,
            input=input,
            timeout=self._timeout,
            combine_stderr=combine_stderr,
        )

    @staticmethod
    def _records_from(output: ProcessOutput) -> list[Record]:
        """Apply the result rules shared by :meth:`run` and :meth:`save`.

        stderr takes precedence over anything on stdout, then decode
        failures, then error records, then the exit status.
        """
        if output.stderr:
            raise classify_message(output.stderr_text.rstrip())

        records = decode_records(output.stdout)

        for record in records:
            if is_error_record(record):
                raise classify_error(record, records)

        if output.returncode != 0:
            raise CommandFailedError(
                f"p4 exited with status {output.returncode}",
                returncode=output.returncode,
                records=records,
            )
        return records
