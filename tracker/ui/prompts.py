"""
Prompters: how the navigator asks the user for data.

The navigator only sees the Prompter interface. ConsolePrompter asks on the
terminal; CannedPrompter answers with fixed values and is used in tests.
"""

import sys
from typing import Callable, Optional, TextIO

from tracker.models import Epic, Status, Story

SEPARATOR = "-" * 28

# Menu number -> status for update_status()
STATUS_CHOICES = {
    "1": Status.OPEN,
    "2": Status.IN_PROGRESS,
    "3": Status.RESOLVED,
    "4": Status.CLOSED,
}


class Prompter:
    """One method per interaction point."""

    def create_epic(self) -> Epic:
        raise NotImplementedError

    def create_story(self) -> Story:
        raise NotImplementedError

    def delete_epic(self) -> bool:
        raise NotImplementedError

    def delete_story(self) -> bool:
        raise NotImplementedError

    def update_status(self) -> Optional[Status]:
        raise NotImplementedError


class ConsolePrompter(Prompter):
    """Ask on the terminal, one line per answer."""

    def __init__(self, read_line: Callable[[], str] = input, out: TextIO = None):
        self.read_line = read_line
        self.out = out or sys.stdout

    def _ask(self, message: str) -> str:
        """Print message and read one trimmed answer. EOFError propagates."""
        print(message, file=self.out)
        return self.read_line().strip()

    def _ask_or_blank(self, message: str) -> str:
        try:
            return self._ask(message)
        except EOFError:
            return ""

    def _confirm(self, message: str) -> bool:
        print(SEPARATOR, file=self.out)
        return self._ask_or_blank(f"{message} [Y/N]:") == "Y"

    # Closed input while naming an entity must not create it, so EOFError
    # leaves create_epic/create_story for the caller to handle.
    def create_epic(self) -> Epic:
        print(SEPARATOR, file=self.out)
        name = self._ask("Epic Name:")
        description = self._ask("Epic Description:")
        return Epic(name=name, description=description)

    def create_story(self) -> Story:
        print(SEPARATOR, file=self.out)
        name = self._ask("Story Name:")
        description = self._ask("Story Description:")
        return Story(name=name, description=description)

    def delete_epic(self) -> bool:
        return self._confirm(
            "Are you sure you want to delete this epic? All stories in this epic will also be deleted"
        )

    def delete_story(self) -> bool:
        return self._confirm("Are you sure you want to delete this story?")

    def update_status(self) -> Optional[Status]:
        print(SEPARATOR, file=self.out)
        answer = self._ask_or_blank("New Status (1 - OPEN, 2 - IN-PROGRESS, 3 - RESOLVED, 4 - CLOSED):")
        return STATUS_CHOICES.get(answer)


class CannedPrompter(Prompter):
    """Fixed answers. Each call returns a fresh copy of the canned entity."""

    def __init__(
        self,
        epic: Optional[Epic] = None,
        story: Optional[Story] = None,
        confirm_delete: bool = False,
        status: Optional[Status] = None,
    ):
        self.epic = epic or Epic(name="", description="")
        self.story = story or Story(name="", description="")
        self.confirm_delete = confirm_delete
        self.status = status
        self.calls: list[str] = []

    def create_epic(self) -> Epic:
        self.calls.append("create_epic")
        return Epic(self.epic.name, self.epic.description, self.epic.status, list(self.epic.story_ids))

    def create_story(self) -> Story:
        self.calls.append("create_story")
        return Story(self.story.name, self.story.description, self.story.status)

    def delete_epic(self) -> bool:
        self.calls.append("delete_epic")
        return self.confirm_delete

    def delete_story(self) -> bool:
        self.calls.append("delete_story")
        return self.confirm_delete

    def update_status(self) -> Optional[Status]:
        self.calls.append("update_status")
        return self.status
