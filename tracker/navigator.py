"""Page-stack navigator.

The navigator's state is its stack of pages; an empty stack means the
session is over. Each Action either moves through the stack or asks the
Prompter for data and calls the Repository. Stack changes that follow a
repository call happen only after that call succeeds, so a failed action
leaves both the stored snapshot and the stack as they were.

Usage:
    from tracker.navigator import Navigator

    nav = Navigator(repository, ConsolePrompter())
    nav.handle_action(Action(ActionKind.NAVIGATE_TO_EPIC_DETAIL, epic_id=1))
"""

import logging
from typing import Callable, Optional

from tracker.db.repository import Repository
from tracker.errors import TrackerError
from tracker.models import Action, ActionKind
from tracker.ui.pages import EpicDetailPage, HomePage, Page, StoryDetailPage
from tracker.ui.prompts import ConsolePrompter, Prompter

logger = logging.getLogger(__name__)


class ActionFailed(TrackerError):
    """A repository call made on behalf of an action failed."""

    def __init__(self, action: Action, cause: Exception):
        self.action = action
        self.cause = cause
        super().__init__(f"Failed to {action.describe()}: {cause}")


class Navigator:
    """Owns the page stack and dispatches actions."""

    def __init__(self, repository: Repository, prompter: Optional[Prompter] = None):
        self.repository = repository
        self.prompter = prompter or ConsolePrompter()
        self.pages: list[Page] = [HomePage(repository)]
        self._handlers: dict[ActionKind, Callable[[Action], None]] = {
            ActionKind.NAVIGATE_TO_EPIC_DETAIL: self._navigate_to_epic_detail,
            ActionKind.NAVIGATE_TO_STORY_DETAIL: self._navigate_to_story_detail,
            ActionKind.NAVIGATE_TO_PREVIOUS_PAGE: self._navigate_to_previous_page,
            ActionKind.CREATE_EPIC: self._create_epic,
            ActionKind.UPDATE_EPIC_STATUS: self._update_epic_status,
            ActionKind.DELETE_EPIC: self._delete_epic,
            ActionKind.CREATE_STORY: self._create_story,
            ActionKind.UPDATE_STORY_STATUS: self._update_story_status,
            ActionKind.DELETE_STORY: self._delete_story,
            ActionKind.EXIT: self._exit,
        }

    def current_page(self) -> Optional[Page]:
        """Top of the stack, or None once the session is over."""
        return self.pages[-1] if self.pages else None

    def page_count(self) -> int:
        return len(self.pages)

    def is_finished(self) -> bool:
        return not self.pages

    def set_prompter(self, prompter: Prompter) -> None:
        self.prompter = prompter

    def handle_action(self, action: Action) -> None:
        """Apply one action.

        Raises:
            ActionFailed: If the repository rejected the change (the stack is
                left untouched)
        """
        logger.debug(f"[NAV] {action.kind.value} (depth={len(self.pages)})")
        try:
            self._handlers[action.kind](action)
        except TrackerError as e:
            logger.warning(f"[NAV] {action.describe()} failed: {e}")
            raise ActionFailed(action, e) from e

    def _pop(self) -> None:
        if self.pages:
            self.pages.pop()

    def _navigate_to_epic_detail(self, action: Action) -> None:
        self.pages.append(EpicDetailPage(self.repository, action.epic_id))

    def _navigate_to_story_detail(self, action: Action) -> None:
        self.pages.append(StoryDetailPage(self.repository, action.epic_id, action.story_id))

    def _navigate_to_previous_page(self, action: Action) -> None:
        self._pop()

    def _create_epic(self, action: Action) -> None:
        epic = self.prompter.create_epic()
        self.repository.create_epic(epic)

    def _update_epic_status(self, action: Action) -> None:
        status = self.prompter.update_status()
        if status is not None:
            self.repository.update_epic_status(action.epic_id, status)

    def _delete_epic(self, action: Action) -> None:
        if self.prompter.delete_epic():
            self.repository.delete_epic(action.epic_id)
            self._pop()

    def _create_story(self, action: Action) -> None:
        story = self.prompter.create_story()
        self.repository.create_story(story, action.epic_id)

    def _update_story_status(self, action: Action) -> None:
        status = self.prompter.update_status()
        if status is not None:
            self.repository.update_story_status(action.story_id, status)

    def _delete_story(self, action: Action) -> None:
        if self.prompter.delete_story():
            self.repository.delete_story(action.epic_id, action.story_id)
            self._pop()

    def _exit(self, action: Action) -> None:
        self.pages.clear()
