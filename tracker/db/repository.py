"""
Epic and story CRUD over a snapshot store.

Every mutating call loads a fresh snapshot, applies all of its edits to that
copy, and saves the copy only if every edit succeeded. A failed call leaves
the stored snapshot exactly as it was, including last_item_id.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from tracker.db.store import Store
from tracker.errors import TrackerError
from tracker.models import Epic, RepositoryState, Status, Story

logger = logging.getLogger(__name__)


class NotFound(TrackerError):
    """An epic or story id is absent, or a story is not owned by the named epic."""

    def __init__(self, kind: str, ident: int, epic_id: Optional[int] = None):
        self.kind = kind
        self.ident = ident
        self.epic_id = epic_id
        if kind == "story-in-epic":
            message = f"story {ident} not found in epic {epic_id}"
        else:
            message = f"{kind} {ident} not found"
        super().__init__(message)


class Repository:
    """Integrity layer over a Store.

    Owns id allocation (one counter shared by epics and stories) and the
    cascade rules between epics and their stories.
    """

    def __init__(self, store: Store):
        self.store = store

    @contextmanager
    def _transaction(self) -> Iterator[RepositoryState]:
        """Yield a loaded copy of the snapshot; save it only if the block exits cleanly."""
        state = self.store.load()
        yield state
        self.store.save(state)

    @staticmethod
    def _allocate_id(state: RepositoryState) -> int:
        state.last_item_id += 1
        return state.last_item_id

    @staticmethod
    def _require_epic(state: RepositoryState, epic_id: int) -> Epic:
        epic = state.epics.get(epic_id)
        if epic is None:
            raise NotFound("epic", epic_id)
        return epic

    @staticmethod
    def _require_story(state: RepositoryState, story_id: int) -> Story:
        story = state.stories.get(story_id)
        if story is None:
            raise NotFound("story", story_id)
        return story

    def read(self) -> RepositoryState:
        """Return a full copy of the current snapshot."""
        return self.store.load()

    def get_epic(self, epic_id: int) -> Epic:
        return self._require_epic(self.store.load(), epic_id)

    def get_story(self, story_id: int) -> Story:
        return self._require_story(self.store.load(), story_id)

    def create_epic(self, epic: Epic) -> int:
        with self._transaction() as state:
            epic_id = self._allocate_id(state)
            state.epics[epic_id] = epic
        logger.info(f"[REPO] created epic {epic_id} '{epic.name}'")
        return epic_id

    def create_story(self, story: Story, epic_id: int) -> int:
        """Create a story and append it to the epic's story list.

        Raises:
            NotFound: If epic_id is absent; the allocated id is discarded
        """
        with self._transaction() as state:
            story_id = self._allocate_id(state)
            state.stories[story_id] = story
            self._require_epic(state, epic_id).story_ids.append(story_id)
        logger.info(f"[REPO] created story {story_id} '{story.name}' in epic {epic_id}")
        return story_id

    def delete_epic(self, epic_id: int) -> None:
        """Delete an epic together with every story it references."""
        with self._transaction() as state:
            epic = self._require_epic(state, epic_id)
            for story_id in epic.story_ids:
                state.stories.pop(story_id, None)
            del state.epics[epic_id]
        logger.info(f"[REPO] deleted epic {epic_id} and {len(epic.story_ids)} story(s)")

    def delete_story(self, epic_id: int, story_id: int) -> None:
        """Delete a story owned by the given epic.

        Ownership is checked against the epic's story list only; a story that
        exists but belongs elsewhere is reported as not found in this epic.
        """
        with self._transaction() as state:
            epic = self._require_epic(state, epic_id)
            if story_id not in epic.story_ids:
                raise NotFound("story-in-epic", story_id, epic_id=epic_id)
            epic.story_ids.remove(story_id)
            state.stories.pop(story_id, None)
        logger.info(f"[REPO] deleted story {story_id} from epic {epic_id}")

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        with self._transaction() as state:
            self._require_epic(state, epic_id).status = status
        logger.info(f"[REPO] epic {epic_id} -> {status.value}")

    def update_story_status(self, story_id: int, status: Status) -> None:
        with self._transaction() as state:
            self._require_story(state, story_id).status = status
        logger.info(f"[REPO] story {story_id} -> {status.value}")

    def reset(self) -> None:
        """Replace the snapshot with an empty one (last_item_id back to 0)."""
        self.store.save(RepositoryState.empty())
        logger.warning("[REPO] snapshot re-initialized")
