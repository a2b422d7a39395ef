"""Utility helpers for Lumen.

``logging_system`` configures console logging (Rich on a terminal, plain text
otherwise) and ``console_io`` provides the line reader/writer used by the
assistant dialogs.
"""

from .console_io import ConsoleIO, try_int  # noqa: F401
from .logging_system import setup_log_system  # noqa: F401

__all__ = ["ConsoleIO", "try_int", "setup_log_system"]
