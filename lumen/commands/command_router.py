"""
Command routing for the Lumen assistant.

Built-in commands are registered with one or more :class:`Condition` trees.
When :meth:`CommandRouter.route` is called, the router tokenises the text and
tests each command in the order it was added.  The first match wins: its
action runs on the caller's thread and its return value is handed back.  If no
command matches, nothing happens and ``None`` is returned.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..utils.logging_system import setup_log_system
from .condition import Condition, tokenize

logger = setup_log_system("command_router")

CommandAction = Callable[[], Any]


class Matchable:
    """
    Something that can be triggered by user text.

    ``conditions`` are OR-combined: the matchable fires when any one of them
    holds.  An empty list never matches.
    """

    def __init__(self, conditions: Iterable[Condition], action: CommandAction) -> None:
        self.conditions: tuple[Condition, ...] = tuple(conditions)
        self.action = action

    def matches(self, tokens: Sequence[str]) -> bool:
        return any(condition.evaluate(tokens) for condition in self.conditions)

    def execute(self) -> Any:
        raise NotImplementedError


class Command(Matchable):
    """Built-in command whose action runs synchronously."""

    def __init__(self, conditions: Iterable[Condition], action: CommandAction, *, name: str = "") -> None:
        super().__init__(conditions, action)
        self.name = name or getattr(action, "__name__", "command")

    def execute(self) -> Any:
        # Failures propagate to whoever routed the text
        return self.action()

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, conditions={len(self.conditions)})"


class CommandRouter:
    """Ordered, first-match-wins table of built-in commands."""

    def __init__(self) -> None:
        self._commands: List[Command] = []

    def add_internal(self, conditions: Condition | Iterable[Condition], action: CommandAction, *, name: str = "") -> Command:
        """
        Register a built-in command.

        Parameters
        ----------
        conditions:
            A single condition or an iterable of alternatives.
        action:
            Zero-argument callable run when the command matches.  Its return
            value becomes the result of :meth:`route`.
        name:
            Label used in logs; defaults to the action's ``__name__``.
        """
        if isinstance(conditions, Condition):
            conditions = [conditions]
        command = Command(conditions, action, name=name)
        self._commands.append(command)
        return command

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    def find(self, tokens: Sequence[str]) -> Optional[Command]:
        """Return the first command matching ``tokens`` or ``None``."""
        for command in self._commands:
            if command.matches(tokens):
                return command
        return None

    def route(self, text: str) -> Any:
        """Run the first command matching ``text`` and return its result."""
        tokens = tokenize(text)
        command = self.find(tokens)
        if command is None:
            logger.debug(f"No command matched: {text!r}")
            return None
        logger.debug(f"Command matched: {command.name}")
        return command.execute()
