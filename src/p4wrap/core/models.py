"""Domain models for p4-wrap.

All models are **frozen** dataclasses.  They carry no I/O and no
dependencies on external packages; a new value is built for every call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

Record = Mapping[str, str]
"""One decoded ``p4 -G`` dictionary, flattened to ``str -> str``."""


# ---------------------------------------------------------------------------
# Connection parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Connection:
    """Session context injected as p4 global options.

    Every field is optional.  An empty or ``None`` field is omitted from
    the command line, leaving p4 to fall back on its own environment
    (``P4PORT``, ``P4USER``, ``P4CLIENT``, ``.p4config`` …).
    """

    port: str | None = None
    """Server address, passed as ``-p``."""

    user: str | None = None
    """User identity, passed as ``-u``."""

    client: str | None = None
    """Client workspace name, passed as ``-c``."""


# ---------------------------------------------------------------------------
# Process result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured result of one finished p4 process."""

    args: tuple[str, ...]
    """The full argument vector, executable first."""

    returncode: int

    stdout: bytes

    stderr: bytes
    """Empty when stderr was folded into stdout."""

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")
