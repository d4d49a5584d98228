"""Tests for tracker.models module."""

import pytest

from tracker.models import (
    ACTION_FIELDS,
    Action,
    ActionKind,
    Epic,
    RepositoryState,
    Status,
    Story,
    parse_status,
)


class TestStatus:
    def test_serialized_spellings(self):
        assert [s.value for s in Status] == ["Open", "InProgress", "Resolved", "Closed"]

    def test_display_form(self):
        assert Status.IN_PROGRESS.display == "IN PROGRESS"
        assert str(Status.OPEN) == "OPEN"

    def test_parse_valid(self):
        assert parse_status("Resolved") == Status.RESOLVED

    @pytest.mark.parametrize("value", ["open", "OPEN", "In Progress", ""])
    def test_parse_rejects_other_spellings(self, value):
        with pytest.raises(ValueError):
            parse_status(value)


class TestEntities:
    def test_defaults(self):
        epic = Epic(name="n", description="d")
        story = Story(name="n", description="d")
        assert epic.status == Status.OPEN
        assert epic.story_ids == []
        assert story.status == Status.OPEN

    def test_epic_uses_stories_key(self):
        epic = Epic(name="n", description="d", story_ids=[3, 4])
        assert epic.to_dict()["stories"] == [3, 4]
        assert Epic.from_dict(epic.to_dict()) == epic


class TestRepositoryState:
    def test_empty(self):
        state = RepositoryState.empty()
        assert state.last_item_id == 0
        assert state.epics == {}
        assert state.stories == {}

    def test_dict_keys_are_strings_and_back(self):
        state = RepositoryState(
            last_item_id=2,
            epics={1: Epic(name="e", description="", story_ids=[2])},
            stories={2: Story(name="s", description="", status=Status.CLOSED)},
        )
        data = state.to_dict()
        assert list(data["epics"]) == ["1"]
        assert data["stories"]["2"]["status"] == "Closed"
        assert RepositoryState.from_dict(data) == state

    def test_copy_is_deep(self):
        state = RepositoryState(epics={1: Epic(name="e", description="")})
        clone = state.copy()
        clone.epics[1].story_ids.append(9)
        assert state.epics[1].story_ids == []


class TestAction:
    def test_every_kind_has_fields(self):
        assert set(ACTION_FIELDS) == set(ActionKind)

    def test_equality(self):
        assert Action(ActionKind.DELETE_EPIC, epic_id=1) == Action(ActionKind.DELETE_EPIC, epic_id=1)
        assert Action(ActionKind.DELETE_EPIC, epic_id=1) != Action(ActionKind.DELETE_EPIC, epic_id=2)

    def test_missing_id_rejected(self):
        with pytest.raises(ValueError):
            Action(ActionKind.NAVIGATE_TO_STORY_DETAIL, epic_id=1)

    def test_extra_id_rejected(self):
        with pytest.raises(ValueError):
            Action(ActionKind.EXIT, epic_id=1)

    def test_describe(self):
        assert Action(ActionKind.CREATE_EPIC).describe() == "create epic"
        assert Action(ActionKind.DELETE_EPIC, epic_id=3).describe() == "delete epic (epic 3)"
        assert Action(ActionKind.DELETE_STORY, epic_id=1, story_id=2).describe() == "delete story 2 from epic 1"
        assert Action(ActionKind.UPDATE_STORY_STATUS, story_id=5).describe() == "update story status (story 5)"
