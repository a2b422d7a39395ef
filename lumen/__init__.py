"""
Lumen assistant package.

Lumen is a text command assistant.  It recognises built-in commands by
keyword stems and lets the user define routines: named commands that run in
the background and report their progress.
"""

__version__ = "0.1.0"

__all__ = [
    "commands",
    "routines",
    "utils",
    "assistant_controller",
    "main",
]
