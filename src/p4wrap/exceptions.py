"""Custom exception hierarchy for p4-wrap.

Every failure that crosses a layer boundary is a subclass of
:class:`P4WrapError`.  Raw ``OSError`` and ``marshal`` exceptions never
escape the infrastructure and decoding layers; they are re-raised as one
of the typed errors below.

Hierarchy
---------
P4WrapError
├── LaunchError
├── CommandTimeoutError
├── CommandFailedError
├── DecodeError
├── MalformedErrorRecord
└── ServerError
    └── NoSuchAreaError
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

SERVER_ERROR_TAG = "P4Error -> "
"""Fixed prefix on every server-reported error message."""


class P4WrapError(Exception):
    """Base exception for all p4-wrap errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance for the caller."""


# --- Process lifecycle -----------------------------------------------------

class LaunchError(P4WrapError):
    """Raised when the p4 executable cannot be started."""


class CommandTimeoutError(P4WrapError):
    """Raised when a command outlives its deadline and is killed."""

    def __init__(
        self,
        message: str,
        *,
        timeout: float,
        stdout: bytes = b"",
        stderr: bytes = b"",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.timeout = timeout
        self.stdout = stdout
        self.stderr = stderr


class CommandFailedError(P4WrapError):
    """Raised when p4 exits non-zero without a more specific diagnosis.

    The decoded records (or raw text, for plain-output commands) are kept
    so the caller can inspect whatever p4 printed before failing.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        records: Sequence[Mapping[str, str]] = (),
        output: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode = returncode
        self.records: list[Mapping[str, str]] = list(records)
        self.output = output


# --- Output decoding -------------------------------------------------------

class DecodeError(P4WrapError):
    """Raised when the marshalled output stream is malformed or truncated.

    ``records`` holds every record decoded before the failure.  p4 can
    interleave human-readable diagnostics (expired passwords, for example)
    with marshalled output, so these are often the only useful context.
    """

    def __init__(
        self,
        message: str,
        *,
        offset: int,
        context: bytes = b"",
        records: Sequence[Mapping[str, str]] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.offset = offset
        self.context = context
        self.records: list[Mapping[str, str]] = list(records)


class MalformedErrorRecord(P4WrapError):
    """Raised for an error record that carries no ``data`` message."""


# --- Server-reported errors ------------------------------------------------

class ServerError(P4WrapError):
    """An error reported by p4 itself, via stderr or an error record."""

    def __init__(
        self,
        message: str,
        *,
        records: Sequence[Mapping[str, str]] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(f"{SERVER_ERROR_TAG}{message}", hint=hint)
        self.message = message
        self.records: list[Mapping[str, str]] = list(records)


class NoSuchAreaError(ServerError):
    """The requested depot path is not mapped by any client view."""

    def __init__(
        self,
        path: str,
        *,
        records: Sequence[Mapping[str, str]] = (),
    ) -> None:
        super().__init__(
            f"No such area '{path}', please check your path",
            records=records,
            hint="Check the depot path and the client workspace view.",
        )
        self.path = path
