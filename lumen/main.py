"""
Interactive entry point for the Lumen assistant.

Reads one line at a time from the console and hands it to the
``AssistantController`` until the user says "exit"/"выход" or closes the input.
"""
import os
from typing import Optional

from .assistant_controller import AssistantController
from .utils.console_io import ConsoleIO
from .utils.logging_system import setup_log_system

logger = setup_log_system("main")

COMMAND_LIST = """Список команд:
 Создать сценарий
 Запустить сценарий
 Удалить сценарий
 Список сценариев
 exit"""


class AssistantApp:
    """Owns the console and the controller; runs the read → dispatch loop."""

    def __init__(self, controller: Optional[AssistantController] = None, io: Optional[ConsoleIO] = None) -> None:
        self.io = io or (controller.io if controller is not None else ConsoleIO())
        self.controller = controller or AssistantController(self.io)
        self.prompt = os.getenv("ASSISTANT_PROMPT", ">>>")

    def run_once(self) -> None:
        """Read a single line and dispatch it; command errors are logged, not raised."""
        text = self.io.ask(self.prompt)
        try:
            self.controller.process_command(text)
        except Exception as e:
            logger.error(f"Command failed: {e}", exc_info=True)

    def run(self) -> None:
        """Print the command list and process input until the assistant stops."""
        self.io.say(COMMAND_LIST)
        try:
            while self.controller.check_working():
                self.run_once()
        except (KeyboardInterrupt, EOFError):
            logger.debug("Input closed, shutting down…")
            self.controller.stop()
        finally:
            logger.info("Application terminated.")


def main() -> None:
    AssistantApp().run()


if __name__ == "__main__":
    main()
