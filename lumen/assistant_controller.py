"""
Central controller for the Lumen assistant.

This module owns the built-in command table and the user routine registry.
The ``AssistantController`` tokenises each line of user input, runs the first
matching built-in command and implements the dialogs those commands open:
creating, starting, listing and removing routines.  All prompting goes
through an injected :class:`~lumen.utils.console_io.ConsoleIO`.
"""
from __future__ import annotations

import threading
from typing import Any, List, Optional

from dotenv import load_dotenv

from .commands import CommandRouter, Condition, tokenize
from .routines import (
    ROUTINE_STARTUP_DELAY,
    ActionCatalog,
    Routine,
    RoutineRegistry,
    default_actions,
)
from .utils.console_io import ConsoleIO, try_int
from .utils.logging_system import setup_log_system

logger = setup_log_system("assistant_controller")

# Stem shared by every routine command ("сценарий" and its inflections)
ROUTINE_STEM = "СЦЕНАР"


class AssistantController:
    """
    Matches user commands and manages user routines.

    Parameters
    ----------
    io:
        Console used for prompts and messages.  Defaults to the terminal.
    actions:
        Actions offered when creating a routine.  Defaults to
        :func:`~lumen.routines.actions.default_actions`.
    routine_startup_delay:
        Pause before a started routine runs its action.
    """

    def __init__(
        self,
        io: Optional[ConsoleIO] = None,
        *,
        actions: Optional[ActionCatalog] = None,
        routine_startup_delay: float = ROUTINE_STARTUP_DELAY,
    ) -> None:
        # Load environment variables from .env if present
        load_dotenv()

        self.io = io or ConsoleIO()
        self.actions = actions if actions is not None else default_actions(self.io.say)
        self.routine_startup_delay = routine_startup_delay

        self._working: bool = True
        self._routine_id: int = 0
        self._id_lock = threading.Lock()
        self._routines = RoutineRegistry()

        # Built-in commands are fixed after construction
        self.router = CommandRouter()
        self._register_default_commands()

    # ------------------------------------------------------------------
    # Command processing
    # ------------------------------------------------------------------
    def _register_default_commands(self) -> None:
        """Register the built-in commands in matching order."""
        self.router.add_internal(Condition.any_of("EXIT", "ВЫХОД"), self.stop, name="stop")
        self.router.add_internal(Condition.all_of("СОЗД", ROUTINE_STEM), self.create_routine, name="create_routine")
        self.router.add_internal(Condition.all_of("ЗАПУС", ROUTINE_STEM), self.start_routine, name="start_routine")
        self.router.add_internal(Condition.all_of("СПИС", ROUTINE_STEM), self.print_routines, name="print_routines")
        self.router.add_internal(Condition.all_of("УДАЛ", ROUTINE_STEM), self.remove_routine, name="remove_routine")

    def process_command(self, text: str) -> Any:
        """
        Run the first built-in command matching ``text``.

        Returns the command's result, or ``None`` if nothing matched.  Errors
        raised by the command propagate to the caller.
        """
        logger.debug(f"User command: {text}")
        return self.router.route(text)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def check_working(self) -> bool:
        """True until :meth:`stop` is called."""
        return self._working

    def stop(self) -> None:
        """Ask the input loop to finish. Running routines are left to complete."""
        self._working = False
        logger.info("Assistant stopped.")

    def next_routine_id(self) -> int:
        """Return a new routine id, one greater than the previous."""
        with self._id_lock:
            routine_id = self._routine_id
            self._routine_id += 1
            return routine_id

    # ------------------------------------------------------------------
    # Routine registry
    # ------------------------------------------------------------------
    @property
    def routines(self) -> List[Routine]:
        """Snapshot of the registered routines in current order."""
        return self._routines.snapshot()

    def add_routine(self, routine: Routine) -> Routine:
        self._routines.add(routine)
        logger.info(f"Routine registered: {routine}")
        return routine

    def sort_routines(self) -> None:
        self._routines.sort()

    def filter_routines(self, routine_id: int) -> List[Routine]:
        return self._routines.filter(routine_id)

    def print_routines(self) -> None:
        for routine in self._routines.snapshot():
            self.io.say(str(routine))

    # ------------------------------------------------------------------
    # Dialogs
    # ------------------------------------------------------------------
    def _ask_name(self) -> str:
        self.io.say("Введите название сценария")
        return self.io.ask(">>>").strip()

    def _ask_conditions(self) -> List[Condition]:
        # TODO: let the user enter keywords once the app has a condition editor
        self.io.say("Условия сценария установлены автоматически")
        return [Condition.all_of("ВКЛЮЧ", "ФОНАР")]

    def _ask_action(self):
        self.io.say("Выберите действие")
        for line in self.actions.menu():
            self.io.say(line)
        while True:
            action = self.actions.choice(try_int(self.io.ask(">>>"), default=-1))
            if action is not None:
                return action

    def create_routine(self) -> Optional[Routine]:
        """
        Create a routine through a dialog: name, conditions, then action.

        Returns the registered routine, or ``None`` if the name or the
        conditions came back empty, or there is no action to choose from.
        """
        self.io.say("Отлично, давайте создадим сценарий!")
        routine_id = self.next_routine_id()

        name = self._ask_name()
        if not name:
            logger.info("Routine creation aborted: empty name.")
            return None

        conditions = self._ask_conditions()
        if not conditions:
            logger.info("Routine creation aborted: no conditions.")
            return None

        if not len(self.actions):
            logger.warning("Routine creation aborted: no actions available.")
            return None
        action = self._ask_action()

        routine = Routine(
            routine_id,
            name,
            conditions,
            action,
            notify=self.io.say,
            startup_delay=self.routine_startup_delay,
        )
        self.add_routine(routine)
        self.io.say("Сценарий создан")
        return routine

    def start_routine(self) -> Optional[Routine]:
        """
        Ask which routine to run and start the first one that matches.

        Routines are tested in registration order.  Returns the started
        routine, or ``None`` if nothing matched or it had already run.
        """
        text = self.io.ask("Какой сценарий запустить?\n")
        routine = self._routines.first_match(tokenize(text))
        if routine is None:
            logger.debug(f"No routine matched: {text!r}")
            return None
        if not routine.execute():
            self.io.say(f"Сценарий {routine.name} уже был запущен (status={routine.get_status().value})")
            return None
        return routine

    def ask_routine(self, required: bool = True) -> Optional[Routine]:
        """
        Let the user pick a routine by id from the sorted list.

        With ``required`` the question repeats until an existing id is entered;
        otherwise a single answer is read.  Returns ``None`` straight away when
        there are no routines to choose from.
        """
        self.sort_routines()
        if not self._routines:
            self.io.say("Сценариев пока нет")
            return None

        self.io.say("Выберите сценарий")
        self.print_routines()

        while True:
            routine_id = try_int(self.io.ask(), default=-1)
            found = self.filter_routines(routine_id)
            if found:
                return found[0]
            if not required:
                return None

    def remove_routine(self, required: bool = True) -> Optional[Routine]:
        """Remove the routine chosen by the user; returns it, or ``None``."""
        routine = self.ask_routine(required=required)
        if routine is None:
            return None
        if self._routines.remove(routine):
            logger.info(f"Routine removed: {routine}")
            return routine
        return None
