"""Render a field mapping as p4 spec text for ``p4 <spec> -i``."""

from __future__ import annotations

from collections.abc import Mapping


def format_spec(fields: Mapping[str, str]) -> str:
    """Return the spec-form text for *fields*.

    Single-line values become ``Name: value``.  Multi-line values become
    a bare ``Name:`` header followed by each non-blank line indented by
    one space.  Every field is followed by a blank line.  Fields are
    rendered in the mapping's iteration order; p4 does not care.
    """
    parts: list[str] = []
    for name, value in fields.items():
        if "\n" in value:
            parts.append(f"{name}:")
            parts.extend(f"\n {line}" for line in value.split("\n") if line.strip())
            parts.append("\n\n")
        else:
            parts.append(f"{name}: {value}\n\n")
    return "".join(parts)
