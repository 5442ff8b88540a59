"""Infrastructure layer — everything that touches the operating system.

Every raw ``OSError`` or :mod:`subprocess` exception is caught here and
re-raised as a :class:`~p4wrap.exceptions.P4WrapError` subclass.
"""

from p4wrap.infra.p4_detector import P4Status, detect_p4, require_p4
from p4wrap.infra.process import SubprocessInvoker

__all__: list[str] = [
    "P4Status",
    "SubprocessInvoker",
    "detect_p4",
    "require_p4",
]
