"""User routines for Lumen.

Routines are user-defined commands that run on their own thread and expose
their progress through ``RoutineStatus``.  The ``RoutineRegistry`` keeps them
for the lifetime of the process and the ``ActionCatalog`` lists the actions a
routine can perform.
"""

from .actions import Action, ActionCatalog, ActionKind, default_actions  # noqa: F401
from .registry import RoutineRegistry  # noqa: F401
from .routine import (  # noqa: F401
    ROUTINE_STARTUP_DELAY,
    IllegalTransitionError,
    InvalidStatusError,
    Routine,
    RoutineError,
    RoutineStatus,
)

__all__ = [
    "Action",
    "ActionCatalog",
    "ActionKind",
    "default_actions",
    "RoutineRegistry",
    "ROUTINE_STARTUP_DELAY",
    "IllegalTransitionError",
    "InvalidStatusError",
    "Routine",
    "RoutineError",
    "RoutineStatus",
]
