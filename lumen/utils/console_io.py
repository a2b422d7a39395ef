"""
Console input/output used by the assistant dialogs.

The controller never touches ``stdin``/``stdout`` directly.  Prompts and
messages go through a ``ConsoleIO`` instance so that the same dialogs can be
driven by a terminal, a test script or another front end.
"""
from __future__ import annotations

from typing import Optional

from rich.console import Console


def try_int(text: str, default: int = 0) -> int:
    """
    Convert ``text`` to an integer or return ``default``.

    >>> try_int("1")
    1
    >>> try_int("a")
    0
    >>> try_int("b", default=-1)
    -1
    """
    try:
        return int(text)
    except (TypeError, ValueError):
        return default


class ConsoleIO:
    """Line based terminal I/O backed by a Rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)

    def ask(self, prompt: str = "") -> str:
        """Show ``prompt`` without a trailing newline and return the entered line."""
        return self.console.input(prompt, markup=False)

    def say(self, text: str) -> None:
        """Print one message to the user."""
        self.console.print(text, markup=False, highlight=False)
