"""Streaming decoder for ``p4 -G`` output.

``p4 -G`` writes one Python-marshalled dictionary per response unit,
back to back with no framing.  Each ``marshal`` object is
self-delimiting, so the stream is decoded by calling :func:`marshal.load`
repeatedly until the bytes run out or a marshalled ``None`` marks the
logical end of the output.

p4 marshals strings as ``bytes``; records are flattened to ``str -> str``
with undecodable bytes replaced rather than rejected.
"""

from __future__ import annotations

import io
import logging
import marshal
from collections.abc import Iterator
from types import MappingProxyType
from typing import BinaryIO

from p4wrap.core.models import Record
from p4wrap.exceptions import DecodeError

logger = logging.getLogger(__name__)

_CONTEXT_BYTES = 64


class _TrackingReader:
    """Byte source for :func:`marshal.load` that knows where it is.

    Counts consumed bytes for error offsets, remembers the bytes of the
    object being decoded, and supports a one-byte lookahead so a clean end
    of stream can be told apart from a truncated object.
    """

    def __init__(self, raw: BinaryIO) -> None:
        self._raw = raw
        self._pending = b""
        self._current = bytearray()
        self.offset = 0

    def at_eof(self) -> bool:
        if not self._pending:
            self._pending = self._raw.read(1) or b""
        return not self._pending

    def start_object(self) -> int:
        self._current.clear()
        return self.offset

    def excerpt(self) -> bytes:
        """Return the leading bytes of the current object, reading ahead if short."""
        missing = _CONTEXT_BYTES - len(self._current)
        if missing > 0:
            self.read(missing)
        return bytes(self._current[:_CONTEXT_BYTES])

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0:
            data = self._pending + (self._raw.read() or b"")
            self._pending = b""
        else:
            data, self._pending = self._pending[:size], self._pending[size:]
            if len(data) < size:
                data += self._raw.read(size - len(data)) or b""
        self.offset += len(data)
        if len(self._current) < _CONTEXT_BYTES:
            self._current.extend(data[: _CONTEXT_BYTES - len(self._current)])
        return data

    def readinto(self, buffer: bytearray | memoryview) -> int:
        view = memoryview(buffer).cast("B")
        filled = 0
        while filled < len(view):
            chunk = self.read(len(view) - filled)
            if not chunk:
                break
            view[filled : filled + len(chunk)] = chunk
            filled += len(chunk)
        return filled


def _text(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _to_record(obj: dict[object, object]) -> Record:
    return MappingProxyType({_text(key): _text(value) for key, value in obj.items()})


def iter_records(stream: BinaryIO) -> Iterator[Record]:
    """Lazily decode records from *stream* in a single forward pass.

    The iterator ends cleanly at end of stream or at a marshalled
    ``None``.  Anything else that is not a dictionary, and any object cut
    short, raises :class:`~p4wrap.exceptions.DecodeError`; its
    ``records`` attribute holds everything yielded before the failure.
    """
    reader = _TrackingReader(stream)
    decoded: list[Record] = []

    while not reader.at_eof():
        start = reader.start_object()
        try:
            obj = marshal.load(reader)  # type: ignore[arg-type]
        except (EOFError, ValueError, TypeError) as exc:
            raise DecodeError(
                f"Malformed p4 output at byte {start}: {exc}",
                offset=start,
                context=reader.excerpt(),
                records=decoded,
                hint="p4 may have printed plain text into its marshalled output.",
            ) from exc

        if obj is None:
            logger.debug("End-of-output marker after %d record(s)", len(decoded))
            return
        if not isinstance(obj, dict):
            raise DecodeError(
                f"Expected a dictionary at byte {start}, got {type(obj).__name__}",
                offset=start,
                context=reader.excerpt(),
                records=decoded,
            )

        record = _to_record(obj)
        decoded.append(record)
        yield record


def decode_records(data: bytes) -> list[Record]:
    """Decode a fully captured ``p4 -G`` output buffer.

    An end-of-output ``None`` must be the last byte of the buffer.  Bytes
    left over after one mean the ``N`` was the first letter of plain text.
    """
    stream = io.BytesIO(data)
    records = list(iter_records(stream))
    if stream.tell() < len(data):
        marker = stream.tell() - 1
        raise DecodeError(
            f"Unexpected data after end-of-output marker at byte {marker}",
            offset=marker,
            context=data[marker : marker + _CONTEXT_BYTES],
            records=records,
            hint="p4 may have printed plain text into its marshalled output.",
        )
    logger.debug("Decoded %d record(s) from %d byte(s)", len(records), len(data))
    return records
