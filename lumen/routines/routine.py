"""
User routines and their lifecycle.

A routine is a named, user-defined command.  Unlike built-in commands it runs
on its own daemon thread: :meth:`Routine.execute` announces the routine,
starts the worker and returns immediately.  The worker walks the routine
through ``created → waiting → working → finished`` and callers observe the
progress by polling :meth:`Routine.get_status`.

If the action raises, the worker moves the routine to ``stopped`` and keeps
the exception in :attr:`Routine.error` instead of losing it with the thread.
"""
from __future__ import annotations

import enum
import threading
import time
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional

from ..commands.condition import Condition
from ..commands.command_router import Matchable
from ..utils.logging_system import setup_log_system

logger = setup_log_system("routine")

# Scripted pause between accepting a routine and running its action
ROUTINE_STARTUP_DELAY = 2.0


class RoutineError(Exception):
    """Base class for routine lifecycle errors."""


class InvalidStatusError(RoutineError, ValueError):
    """Raised for a value that is not a known routine status."""


class IllegalTransitionError(RoutineError):
    """Raised when a status change is not allowed from the current status."""


class RoutineStatus(str, enum.Enum):
    """
    Lifecycle states of a routine.

    - created: built and never started
    - waiting: accepted and waiting for its worker to run the action
    - working: the action is running
    - paused: suspended, may be resumed
    - stopped: cannot be resumed, either stopped or failed
    - finished: the action completed
    """

    CREATED = "created"
    WAITING = "waiting"
    WORKING = "working"
    PAUSED = "paused"
    STOPPED = "stopped"
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "RoutineStatus | str") -> "RoutineStatus":
        """Return the member for ``value`` or raise :class:`InvalidStatusError`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidStatusError(f"Unknown routine status: {value!r}") from None

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self]


# Paused and stopped are reachable here but nothing triggers a pause yet.
TRANSITIONS: Dict[RoutineStatus, FrozenSet[RoutineStatus]] = {
    RoutineStatus.CREATED: frozenset({RoutineStatus.WAITING}),
    RoutineStatus.WAITING: frozenset({RoutineStatus.WORKING, RoutineStatus.PAUSED, RoutineStatus.STOPPED}),
    RoutineStatus.WORKING: frozenset({RoutineStatus.FINISHED, RoutineStatus.PAUSED, RoutineStatus.STOPPED}),
    RoutineStatus.PAUSED: frozenset({RoutineStatus.WAITING, RoutineStatus.WORKING, RoutineStatus.STOPPED}),
    RoutineStatus.STOPPED: frozenset(),
    RoutineStatus.FINISHED: frozenset(),
}


def next_status(current: RoutineStatus, new: "RoutineStatus | str") -> RoutineStatus:
    """Validate the transition ``current → new`` and return the new status."""
    target = RoutineStatus.parse(new)
    if target not in TRANSITIONS[current]:
        raise IllegalTransitionError(f"Cannot move routine from {current} to {target}")
    return target


class Routine(Matchable):
    """
    User routine with an id, a display name and an observable status.

    Parameters
    ----------
    routine_id:
        Process-unique id handed out by the assistant.
    name:
        Non-empty display name chosen by the user.
    conditions:
        OR-combined conditions that trigger the routine.
    action:
        Zero-argument callable run on the worker thread.  An
        :class:`~lumen.routines.actions.Action` also records its kind.
    notify:
        Receives the start announcement; the console in the interactive app.
    startup_delay:
        Seconds the worker waits in ``waiting`` before running the action.
    """

    def __init__(
        self,
        routine_id: int,
        name: str,
        conditions: Iterable[Condition],
        action: Callable[[], Any],
        *,
        notify: Optional[Callable[[str], None]] = None,
        startup_delay: float = ROUTINE_STARTUP_DELAY,
    ) -> None:
        if not name:
            raise ValueError("Routine name must not be empty")
        super().__init__(conditions, action)
        self._id = routine_id
        self.name = name
        self.notify = notify
        self.startup_delay = startup_delay

        self._status = RoutineStatus.CREATED
        self._status_lock = threading.Lock()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.error: Optional[BaseException] = None

    @property
    def id(self) -> int:
        return self._id

    @property
    def action_kind(self):
        """Kind of the attached catalog action, or ``None`` for a plain callable."""
        return getattr(self.action, "kind", None)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    @property
    def status(self) -> RoutineStatus:
        return self._status

    def get_status(self) -> RoutineStatus:
        """Current status; never blocks."""
        return self._status

    def _set_status(self, status: "RoutineStatus | str") -> None:
        # Only the worker thread moves a routine between states
        with self._status_lock:
            previous = self._status
            self._status = next_status(previous, status)
        logger.debug(f"Routine #{self._id} {previous} -> {self._status}")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def announcement(self) -> str:
        return f"Пользовательский сценарий {self.name} запущен"

    def execute(self) -> bool:
        """
        Announce the routine and run it on a new daemon thread.

        Returns ``True`` once the worker is started, or ``False`` if the
        routine was already dispatched; a routine runs at most once.
        """
        with self._status_lock:
            if self._thread is not None or self._status is not RoutineStatus.CREATED:
                logger.warning(f"Routine #{self._id} '{self.name}' was already started ({self._status}).")
                return False
            self._thread = threading.Thread(target=self._run, name=f"routine-{self._id}", daemon=True)

        message = self.announcement()
        logger.info(message)
        if self.notify is not None:
            self.notify(message)
        self._thread.start()
        return True

    def _run(self) -> None:
        try:
            self._set_status(RoutineStatus.WAITING)
            if self.startup_delay > 0:
                time.sleep(self.startup_delay)
            self._set_status(RoutineStatus.WORKING)
            self.action()
            self._set_status(RoutineStatus.FINISHED)
            logger.info(f"Routine #{self._id} '{self.name}' finished.")
        except BaseException as e:
            # Includes SystemExit from the action; the thread ends either way
            self.error = e
            logger.error(f"Routine #{self._id} '{self.name}' failed: {e}", exc_info=True)
            with self._status_lock:
                if not self._status.is_terminal:
                    self._status = RoutineStatus.STOPPED
        finally:
            self._done.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the worker has ended.

        Returns ``False`` on timeout or if the routine was never started.
        """
        if self._thread is None:
            return False
        return self._done.wait(timeout)

    def __str__(self) -> str:
        return f"Сценарий#{self._id} name={self.name} status={self._status.value}"

    def __repr__(self) -> str:
        return f"Routine(id={self._id}, name={self.name!r}, status={self._status.value!r})"
