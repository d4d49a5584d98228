"""
Pages: the three screens of the tracker.

A page knows which entity it addresses and nothing else. render() turns a
snapshot into a View; interpret() turns one line of input into an Action,
or None when the input means nothing on this page. Unrecognized input is
never an error.
"""

from enum import Enum
from typing import Optional

from tracker.db.repository import NotFound, Repository
from tracker.lib.constants import DETAIL_COLUMNS, LIST_COLUMNS
from tracker.models import Action, ActionKind, RepositoryState
from tracker.ui.render import Section, View


class PageKind(Enum):
    HOME = "home"
    EPIC_DETAIL = "epic_detail"
    STORY_DETAIL = "story_detail"


def _list_columns() -> list[tuple[str, int]]:
    return list(zip(("id", "name", "status"), LIST_COLUMNS))


def _detail_columns() -> list[tuple[str, int]]:
    return list(zip(("id", "name", "description", "status"), DETAIL_COLUMNS))


def _parse_id(text: str) -> Optional[int]:
    """Strict decimal id: digits only, no sign, no surrounding whitespace."""
    if text.isascii() and text.isdigit():
        return int(text)
    return None


class Page:
    """Interface shared by HomePage, EpicDetailPage and StoryDetailPage."""

    kind: PageKind

    def __init__(self, repository: Repository):
        self.repository = repository

    def render(self, snapshot: RepositoryState) -> View:
        raise NotImplementedError

    def interpret(self, raw_line: str) -> Optional[Action]:
        raise NotImplementedError


class HomePage(Page):
    kind = PageKind.HOME

    def render(self, snapshot: RepositoryState) -> View:
        rows = [
            [str(epic_id), epic.name, epic.status.display]
            for epic_id, epic in sorted(snapshot.epics.items())
        ]
        return View(
            sections=[Section("EPICS", _list_columns(), rows)],
            commands="[q] quit | [c] create epic | [:id:] navigate to epic",
        )

    def interpret(self, raw_line: str) -> Optional[Action]:
        if raw_line == "q":
            return Action(ActionKind.EXIT)
        if raw_line == "c":
            return Action(ActionKind.CREATE_EPIC)

        epic_id = _parse_id(raw_line)
        if epic_id is not None and epic_id in self.repository.read().epics:
            return Action(ActionKind.NAVIGATE_TO_EPIC_DETAIL, epic_id=epic_id)
        return None

    def __repr__(self) -> str:
        return "HomePage()"


class EpicDetailPage(Page):
    kind = PageKind.EPIC_DETAIL

    def __init__(self, repository: Repository, epic_id: int):
        super().__init__(repository)
        self.epic_id = epic_id

    def render(self, snapshot: RepositoryState) -> View:
        epic = snapshot.epics.get(self.epic_id)
        if epic is None:
            raise NotFound("epic", self.epic_id)

        epic_row = [str(self.epic_id), epic.name, epic.description, epic.status.display]
        story_rows = [
            [str(story_id), snapshot.stories[story_id].name, snapshot.stories[story_id].status.display]
            for story_id in sorted(epic.story_ids)
            if story_id in snapshot.stories
        ]
        return View(
            sections=[
                Section("EPIC", _detail_columns(), [epic_row]),
                Section("STORIES", _list_columns(), story_rows),
            ],
            commands="[p] previous | [u] update epic | [d] delete epic | [c] create story | [:id:] navigate to story",
        )

    def interpret(self, raw_line: str) -> Optional[Action]:
        if raw_line == "p":
            return Action(ActionKind.NAVIGATE_TO_PREVIOUS_PAGE)
        if raw_line == "u":
            return Action(ActionKind.UPDATE_EPIC_STATUS, epic_id=self.epic_id)
        if raw_line == "d":
            return Action(ActionKind.DELETE_EPIC, epic_id=self.epic_id)
        if raw_line == "c":
            return Action(ActionKind.CREATE_STORY, epic_id=self.epic_id)

        story_id = _parse_id(raw_line)
        if story_id is None:
            return None
        epic = self.repository.read().epics.get(self.epic_id)
        if epic is not None and story_id in epic.story_ids:
            return Action(ActionKind.NAVIGATE_TO_STORY_DETAIL, epic_id=self.epic_id, story_id=story_id)
        return None

    def __repr__(self) -> str:
        return f"EpicDetailPage(epic_id={self.epic_id})"


class StoryDetailPage(Page):
    kind = PageKind.STORY_DETAIL

    def __init__(self, repository: Repository, epic_id: int, story_id: int):
        super().__init__(repository)
        self.epic_id = epic_id
        self.story_id = story_id

    def render(self, snapshot: RepositoryState) -> View:
        story = snapshot.stories.get(self.story_id)
        if story is None:
            raise NotFound("story", self.story_id)

        row = [str(self.story_id), story.name, story.description, story.status.display]
        return View(
            sections=[Section("STORY", _detail_columns(), [row])],
            commands="[p] previous | [u] update story | [d] delete story",
        )

    def interpret(self, raw_line: str) -> Optional[Action]:
        if raw_line == "p":
            return Action(ActionKind.NAVIGATE_TO_PREVIOUS_PAGE)
        if raw_line == "u":
            return Action(ActionKind.UPDATE_STORY_STATUS, story_id=self.story_id)
        if raw_line == "d":
            return Action(ActionKind.DELETE_STORY, epic_id=self.epic_id, story_id=self.story_id)
        return None

    def __repr__(self) -> str:
        return f"StoryDetailPage(epic_id={self.epic_id}, story_id={self.story_id})"
