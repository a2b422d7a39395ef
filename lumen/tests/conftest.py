"""
Shared pytest configuration for Lumen tests.
"""

from typing import Iterable, List

import pytest

from lumen.assistant_controller import AssistantController


class ScriptedIO:
    """ConsoleIO stand-in that answers prompts from a list and records output."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers: List[str] = list(answers)
        self.prompts: List[str] = []
        self.said: List[str] = []

    def feed(self, *answers: str) -> None:
        self.answers.extend(answers)

    def ask(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("no scripted answers left")
        return self.answers.pop(0)

    def say(self, text: str) -> None:
        self.said.append(text)


@pytest.fixture
def scripted_io():
    return ScriptedIO()


@pytest.fixture
def controller(scripted_io):
    """Controller wired to scripted I/O, with routines starting immediately."""
    return AssistantController(scripted_io, routine_startup_delay=0)
