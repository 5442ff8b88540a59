"""p4-wrap — a thin client for the Perforce Helix Core command line.

Commands run through ``p4 -G`` and come back as flat ``str -> str``
records decoded from p4's Python-marshalled output.
"""

import logging

from p4wrap.client import P4Client
from p4wrap.core.models import Connection, ProcessOutput, Record
from p4wrap.core.protocols import CommandRunner
from p4wrap.core.spec_format import format_spec
from p4wrap.exceptions import (
    CommandFailedError,
    CommandTimeoutError,
    DecodeError,
    LaunchError,
    MalformedErrorRecord,
    NoSuchAreaError,
    P4WrapError,
    ServerError,
)
from p4wrap.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    "CommandFailedError",
    "CommandRunner",
    "CommandTimeoutError",
    "Connection",
    "DecodeError",
    "LaunchError",
    "MalformedErrorRecord",
    "NoSuchAreaError",
    "P4Client",
    "P4WrapError",
    "ProcessOutput",
    "Record",
    "ServerError",
    "__version__",
    "format_spec",
]
