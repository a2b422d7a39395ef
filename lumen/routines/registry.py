"""
Thread-safe collection of user routines.

The main thread adds and removes routines while their workers may still be
running, so every access goes through one lock.  Readers receive snapshots
and never iterate the live collection.
"""
from __future__ import annotations

import threading
from typing import List, Optional, Sequence

from .routine import Routine


class RoutineRegistry:
    """Routines in registration order, guarded by a lock."""

    def __init__(self) -> None:
        self._routines: List[Routine] = []
        self._lock = threading.RLock()

    def add(self, routine: Routine) -> None:
        with self._lock:
            if any(r.id == routine.id for r in self._routines):
                raise ValueError(f"Routine #{routine.id} is already registered")
            self._routines.append(routine)

    def remove(self, routine: Routine) -> bool:
        """Remove exactly ``routine``; returns False if it was not registered."""
        with self._lock:
            for index, existing in enumerate(self._routines):
                if existing is routine:
                    del self._routines[index]
                    return True
            return False

    def sort(self) -> None:
        with self._lock:
            self._routines.sort(key=lambda r: r.id)

    def filter(self, routine_id: int) -> List[Routine]:
        with self._lock:
            return [r for r in self._routines if r.id == routine_id]

    def get(self, routine_id: int) -> Optional[Routine]:
        found = self.filter(routine_id)
        return found[0] if found else None

    def first_match(self, tokens: Sequence[str]) -> Optional[Routine]:
        """First routine, in current order, whose conditions hold for ``tokens``."""
        for routine in self.snapshot():
            if routine.matches(tokens):
                return routine
        return None

    def snapshot(self) -> List[Routine]:
        with self._lock:
            return list(self._routines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._routines)

    def __bool__(self) -> bool:
        return len(self) > 0
