"""Argument-vector construction for p4 invocations (pure)."""

from __future__ import annotations

from collections.abc import Sequence

from p4wrap.core.models import Connection

MARSHALLED_FLAGS: tuple[str, ...] = ("-G",)
"""Ask p4 for Python-marshalled dictionaries on stdout."""

READ_SPEC_FROM_STDIN = "-i"


def global_options(connection: Connection) -> list[str]:
    """Return ``-p``/``-u``/``-c`` options for the non-empty fields only."""
    opts: list[str] = []
    for flag, value in (
        ("-p", connection.port),
        ("-u", connection.user),
        ("-c", connection.client),
    ):
        if value:
            opts.extend((flag, value))
    return opts


def build_argv(
    executable: str,
    connection: Connection,
    args: Sequence[str],
    *,
    marshalled: bool,
) -> list[str]:
    """Assemble ``[executable, *profile, *globals, *args]``.

    *marshalled* selects between the machine-readable profile used for
    record-returning commands and the plain profile whose output is read
    as text.
    """
    argv = [executable]
    if marshalled:
        argv.extend(MARSHALLED_FLAGS)
    argv.extend(global_options(connection))
    argv.extend(args)
    return argv


def build_save_args(spec_name: str, extra_args: Sequence[str] = ()) -> list[str]:
    """Return ``[spec_name, "-i", *extra_args]`` for a spec-saving command."""
    return [spec_name, READ_SPEC_FROM_STDIN, *extra_args]
