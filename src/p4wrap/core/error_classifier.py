"""Turn p4 error messages into typed exceptions.

p4 reports failures either on stderr or as a marshalled record with
``code == "error"`` and the message under ``data``.  Well-known messages
are recognised through :data:`ERROR_PATTERNS`; extend the table to
classify more of them.  Anything unrecognised becomes a plain
:class:`~p4wrap.exceptions.ServerError` carrying the message verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from p4wrap.core.models import Record
from p4wrap.exceptions import (
    MalformedErrorRecord,
    NoSuchAreaError,
    P4WrapError,
    ServerError,
)

ErrorFactory = Callable[[re.Match[str], Sequence[Record]], ServerError]

ERROR_PATTERNS: list[tuple[re.Pattern[str], ErrorFactory]] = [
    (
        re.compile(r"^(?P<path>.*?) - must refer to client", re.MULTILINE),
        lambda match, records: NoSuchAreaError(match["path"], records=records),
    ),
]
"""Ordered ``(pattern, factory)`` pairs; the first ``search`` hit wins."""


def is_error_record(record: Record) -> bool:
    return record.get("code") == "error"


def classify_message(message: str, records: Sequence[Record] = ()) -> ServerError:
    """Map a p4 error message onto the most specific :class:`ServerError`."""
    for pattern, factory in ERROR_PATTERNS:
        match = pattern.search(message)
        if match is not None:
            return factory(match, records)
    return ServerError(message, records=records)


def classify_error(record: Record, records: Sequence[Record] = ()) -> P4WrapError:
    """Classify an error *record*; *records* is the surrounding output."""
    message = record.get("data")
    if message is None:
        return MalformedErrorRecord(f"Failed to parse error record {dict(record)!r}")
    return classify_message(message, records)
