"""Opt-in console logging for p4-wrap, rendered with Rich.

Library modules only ever call :func:`logging.getLogger`; nothing is
printed until an application calls :func:`enable_console_logging`.  At
``DEBUG`` the log shows every p4 command line, the spec text sent on
stdin, and each exit status.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "p4wrap"


def _installed_handlers(logger: logging.Logger) -> list[RichHandler]:
    return [h for h in logger.handlers if isinstance(h, RichHandler)]


def enable_console_logging(
    level: int | str = logging.DEBUG,
    *,
    console: Console | None = None,
) -> RichHandler:
    """Attach a :class:`~rich.logging.RichHandler` to the ``p4wrap`` logger.

    Calling this again adjusts the level of the existing handler instead
    of adding a second one.  Output goes to stderr unless *console* says
    otherwise.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    existing = _installed_handlers(logger)
    if existing:
        existing[0].setLevel(level)
        return existing[0]

    handler = RichHandler(
        console=console if console is not None else Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return handler


def disable_console_logging() -> None:
    """Remove handlers added by :func:`enable_console_logging`."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in _installed_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
