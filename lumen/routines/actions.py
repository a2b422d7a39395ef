"""
Actions a user can attach to a routine.

Routines do not capture arbitrary closures from the creation dialog.  Each
available behaviour is described by an :class:`ActionKind` and registered in
an :class:`ActionCatalog`, so a routine can report what it will do without
running it.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..utils.logging_system import setup_log_system

logger = setup_log_system("actions")


class ActionKind(enum.Enum):
    TOGGLE_FLASHLIGHT = "toggle_flashlight"


@dataclass(frozen=True)
class Action:
    """Catalog entry: a kind, the title shown to the user and the behaviour."""

    kind: ActionKind
    title: str
    behavior: Callable[[], Any]

    def __call__(self) -> Any:
        logger.debug(f"Running action {self.kind.value}")
        return self.behavior()


class ActionCatalog:
    """Ordered mapping of action kinds to actions, in menu order."""

    def __init__(self, actions: Optional[List[Action]] = None) -> None:
        self._actions: Dict[ActionKind, Action] = {}
        for action in actions or []:
            self.register(action)

    def register(self, action: Action) -> None:
        if action.kind in self._actions:
            raise ValueError(f"Action {action.kind.value} is already registered")
        self._actions[action.kind] = action

    def get(self, kind: ActionKind) -> Action:
        return self._actions[kind]

    def choice(self, number: int) -> Optional[Action]:
        """Return the action listed under the 1-based menu ``number``."""
        if 1 <= number <= len(self._actions):
            return list(self._actions.values())[number - 1]
        return None

    def menu(self) -> List[str]:
        return [f"{i}) {action.title}" for i, action in enumerate(self._actions.values(), start=1)]

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())


def default_actions(say: Callable[[str], None]) -> ActionCatalog:
    """Catalog offered by the routine creation dialog."""

    def toggle_flashlight() -> None:
        say("Фонарик включен")

    return ActionCatalog([
        Action(ActionKind.TOGGLE_FLASHLIGHT, "Включить фонарик", toggle_flashlight),
    ])
