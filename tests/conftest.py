"""Shared pytest fixtures and configuration for the p4-wrap test suite.

Guidelines
----------
* No test needs a real p4 binary or Perforce server.
* The facade is driven through :class:`FakeInvoker`; the process layer
  through the running Python interpreter.
* Marshalled output is produced with :func:`marshal.dumps` at version 0,
  the same encoding ``p4 -G`` emits.
"""

from __future__ import annotations

import marshal
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

import pytest

from p4wrap.core.models import ProcessOutput, Record


def p4_marshal(record: Mapping[str, str | int] | None) -> bytes:
    """Encode one record the way ``p4 -G`` does (bytes keys and values)."""
    if record is None:
        return marshal.dumps(None, 0)
    return marshal.dumps(
        {
            key.encode(): value.encode() if isinstance(value, str) else value
            for key, value in record.items()
        },
        0,
    )


@dataclass
class Invocation:
    argv: list[str]
    input: bytes | None
    timeout: float | None
    combine_stderr: bool


@dataclass
class FakeInvoker:
    """In-memory :class:`~p4wrap.core.protocols.ProcessInvoker`."""

    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int = 0
    calls: list[Invocation] = field(default_factory=list)

    def invoke(
        self,
        argv: Sequence[str],
        *,
        input: bytes | None = None,
        timeout: float | None = None,
        combine_stderr: bool = False,
    ) -> ProcessOutput:
        self.calls.append(
            Invocation(
                argv=list(argv),
                input=input,
                timeout=timeout,
                combine_stderr=combine_stderr,
            )
        )
        return ProcessOutput(
            args=tuple(argv),
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )


@dataclass
class CannedRunner:
    """Test double for :class:`~p4wrap.core.protocols.CommandRunner`."""

    records: list[Record]
    seen: list[list[str]] = field(default_factory=list)

    def run(self, args: Sequence[str]) -> list[Record]:
        self.seen.append(list(args))
        return list(self.records)


@pytest.fixture
def marshalled() -> Callable[..., bytes]:
    """Return a helper that concatenates ``p4 -G`` encoded records."""

    def _build(*records: Mapping[str, str | int] | None) -> bytes:
        return b"".join(p4_marshal(record) for record in records)

    return _build


@pytest.fixture
def fake_invoker() -> Callable[..., FakeInvoker]:
    """Return a factory for :class:`FakeInvoker` instances."""

    def _make(
        *,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
    ) -> FakeInvoker:
        return FakeInvoker(stdout=stdout, stderr=stderr, returncode=returncode)

    return _make


@pytest.fixture
def canned_runner() -> Callable[[list[Record]], CannedRunner]:
    """Return a factory for :class:`CannedRunner` instances."""
    return CannedRunner
