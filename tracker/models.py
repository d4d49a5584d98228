"""
Data models for the tracker.

Epics own stories through an ordered list of story ids. Both kinds of
entity draw their ids from one counter kept on RepositoryState.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Status(Enum):
    """Lifecycle stage of an epic or story.

    Values are the serialized spellings and must not change.
    """

    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @property
    def display(self) -> str:
        return _STATUS_DISPLAY[self]

    def __str__(self) -> str:
        return self.display


_STATUS_DISPLAY = {
    Status.OPEN: "OPEN",
    Status.IN_PROGRESS: "IN PROGRESS",
    Status.RESOLVED: "RESOLVED",
    Status.CLOSED: "CLOSED",
}


def parse_status(value: str) -> Status:
    """Parse a serialized status string.

    Raises:
        ValueError: If value is not one of the exact spellings
    """
    for status in Status:
        if status.value == value:
            return status
    raise ValueError(f"Unknown status '{value}'")


@dataclass
class Epic:
    """Top-level work item owning zero or more stories."""
    name: str
    description: str
    status: Status = Status.OPEN
    story_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "stories": list(self.story_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Epic":
        return cls(
            name=data["name"],
            description=data["description"],
            status=parse_status(data["status"]),
            story_ids=[int(x) for x in data.get("stories", [])],
        )


@dataclass
class Story:
    """Leaf work item. Ownership is recorded on the epic, not here."""
    name: str
    description: str
    status: Status = Status.OPEN

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(
            name=data["name"],
            description=data["description"],
            status=parse_status(data["status"]),
        )


@dataclass
class RepositoryState:
    """The whole tracker state, persisted as one snapshot."""
    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "RepositoryState":
        return cls()

    def copy(self) -> "RepositoryState":
        """Deep copy; no entity is shared with the original."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Convert to the snapshot layout (string map keys, sorted by id)."""
        return {
            "last_item_id": self.last_item_id,
            "epics": {str(k): self.epics[k].to_dict() for k in sorted(self.epics)},
            "stories": {str(k): self.stories[k].to_dict() for k in sorted(self.stories)},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RepositoryState":
        return cls(
            last_item_id=int(data["last_item_id"]),
            epics={int(k): Epic.from_dict(v) for k, v in data["epics"].items()},
            stories={int(k): Story.from_dict(v) for k, v in data["stories"].items()},
        )

    def check_integrity(self) -> None:
        """Check the cross-references a schema cannot express.

        Raises:
            ValueError: On the first broken rule found
        """
        shared = set(self.epics) & set(self.stories)
        if shared:
            raise ValueError(f"ids used by both an epic and a story: {sorted(shared)}")

        ids = set(self.epics) | set(self.stories)
        if ids and self.last_item_id < max(ids):
            raise ValueError(f"last_item_id {self.last_item_id} is below highest id {max(ids)}")

        for epic_id, epic in self.epics.items():
            missing = [sid for sid in epic.story_ids if sid not in self.stories]
            if missing:
                raise ValueError(f"epic {epic_id} references missing stories {missing}")


class ActionKind(Enum):
    """Every user intent a page can produce."""

    NAVIGATE_TO_EPIC_DETAIL = "navigate_to_epic_detail"
    NAVIGATE_TO_STORY_DETAIL = "navigate_to_story_detail"
    NAVIGATE_TO_PREVIOUS_PAGE = "navigate_to_previous_page"
    CREATE_EPIC = "create_epic"
    UPDATE_EPIC_STATUS = "update_epic_status"
    DELETE_EPIC = "delete_epic"
    CREATE_STORY = "create_story"
    UPDATE_STORY_STATUS = "update_story_status"
    DELETE_STORY = "delete_story"
    EXIT = "exit"


# Ids each action kind carries: (needs epic_id, needs story_id)
ACTION_FIELDS = {
    ActionKind.NAVIGATE_TO_EPIC_DETAIL: (True, False),
    ActionKind.NAVIGATE_TO_STORY_DETAIL: (True, True),
    ActionKind.NAVIGATE_TO_PREVIOUS_PAGE: (False, False),
    ActionKind.CREATE_EPIC: (False, False),
    ActionKind.UPDATE_EPIC_STATUS: (True, False),
    ActionKind.DELETE_EPIC: (True, False),
    ActionKind.CREATE_STORY: (True, False),
    ActionKind.UPDATE_STORY_STATUS: (False, True),
    ActionKind.DELETE_STORY: (True, True),
    ActionKind.EXIT: (False, False),
}


@dataclass(frozen=True)
class Action:
    """A user intent produced by a page and consumed by the navigator.

    Only the ids listed for the kind in ACTION_FIELDS may be set, and all of
    them must be.
    """
    kind: ActionKind
    epic_id: Optional[int] = None
    story_id: Optional[int] = None

    def __post_init__(self):
        needs_epic, needs_story = ACTION_FIELDS[self.kind]
        if needs_epic != (self.epic_id is not None):
            raise ValueError(f"{self.kind.value}: epic_id {'required' if needs_epic else 'not allowed'}")
        if needs_story != (self.story_id is not None):
            raise ValueError(f"{self.kind.value}: story_id {'required' if needs_story else 'not allowed'}")

    def describe(self) -> str:
        """Human-readable phrase naming the action, used in error messages."""
        words = self.kind.value.replace("_", " ")
        if self.kind == ActionKind.DELETE_STORY:
            return f"delete story {self.story_id} from epic {self.epic_id}"
        if self.kind == ActionKind.CREATE_STORY:
            return f"create story in epic {self.epic_id}"
        if self.epic_id is not None and self.story_id is not None:
            return f"{words} {self.epic_id}/{self.story_id}"
        if self.story_id is not None:
            return f"{words} (story {self.story_id})"
        if self.epic_id is not None:
            return f"{words} (epic {self.epic_id})"
        return words
