"""Infrastructure: p4 executable detection and platform guidance.

Locates the p4 command-line client and supplies platform-specific
installation guidance for :class:`~p4wrap.exceptions.LaunchError` hints.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from p4wrap.exceptions import LaunchError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class P4Status:
    """Result of looking up the p4 binary.

    Attributes
    ----------
    found : bool
        Whether the executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested install commands for the current platform.  Empty when
        the executable is already present.
    """

    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_p4(executable: str = "p4") -> P4Status:
    """Search ``PATH`` (or the explicit path) for *executable*."""
    result = shutil.which(executable)

    if result is not None:
        return P4Status(found=True, path=Path(result).resolve(), install_commands=())

    return P4Status(
        found=False,
        path=None,
        install_commands=_platform_install_commands(),
    )


def install_hint(executable: str = "p4") -> str:
    """Return multi-line install guidance for a missing *executable*."""
    lines = [f"Make sure '{executable}' is installed and on PATH."]
    commands = _platform_install_commands()
    if commands:
        lines.append("Install the Helix Core CLI using one of:")
        lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)


def require_p4(executable: str = "p4") -> Path:
    """Locate *executable* or raise :class:`LaunchError`."""
    status = detect_p4(executable)
    if not status.found or status.path is None:
        raise LaunchError(
            f"{executable} is not installed or not on PATH.",
            hint=install_hint(executable),
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return ("choco install p4",)
    if system == "linux":
        return (
            "sudo apt install helix-cli",
            "sudo dnf install helix-cli",
        )
    if system == "darwin":
        return ("brew install --cask perforce",)
    return ("Download p4 from https://www.perforce.com/downloads/helix-command-line-client-p4",)
