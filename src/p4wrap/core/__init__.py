"""Core layer — pure argument building, decoding, and classification.

Rules
-----
* No process spawning; the only I/O is reading an in-memory or
  already-open byte stream.
* No imports from ``infra`` or :mod:`p4wrap.client`.
"""

from p4wrap.core.arguments import build_argv, build_save_args, global_options
from p4wrap.core.error_classifier import (
    ERROR_PATTERNS,
    classify_error,
    classify_message,
    is_error_record,
)
from p4wrap.core.models import Connection, ProcessOutput, Record
from p4wrap.core.protocols import CommandRunner, ProcessInvoker
from p4wrap.core.record_decoder import decode_records, iter_records
from p4wrap.core.spec_format import format_spec

__all__: list[str] = [
    "ERROR_PATTERNS",
    "CommandRunner",
    "Connection",
    "ProcessInvoker",
    "ProcessOutput",
    "Record",
    "build_argv",
    "build_save_args",
    "classify_error",
    "classify_message",
    "decode_records",
    "format_spec",
    "global_options",
    "is_error_record",
    "iter_records",
]
