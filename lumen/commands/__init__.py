"""Command matching for Lumen.

This package exposes the ``Condition`` keyword tree and the ``CommandRouter``
which matches tokenised user text against built-in commands and runs the
first one that fits.
"""

from .condition import Condition, tokenize  # noqa: F401
from .command_router import Command, CommandRouter, Matchable  # noqa: F401

__all__ = ["Condition", "tokenize", "Command", "CommandRouter", "Matchable"]
